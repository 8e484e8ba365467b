"""Tests for the create_admin CLI against a temporary SQLite file."""

import os
import tempfile
import unittest
from unittest.mock import patch

from support import make_settings

from blog.core.database import Database
from blog.core.roles import Role
from blog.models import Account
from blog.scripts import create_admin


class TestCreateAdminScript(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        url = "sqlite:///" + os.path.join(tmp.name, "blog.db")
        self.settings = make_settings(DATABASE_URL=url, DB_CREATE_ALL=False)
        self.database = Database(url)
        self.database.connect()
        self.database.create_all()
        self.addCleanup(self.database.dispose)

    def _run(self, *argv: str) -> int:
        with patch.object(create_admin, "get_settings", return_value=self.settings), patch.object(
            create_admin, "load_dotenv"
        ):
            return create_admin.main(list(argv))

    def test_creates_admin_by_default(self) -> None:
        code = self._run("--email", "boss@example.com", "--password", "abcdef")
        self.assertEqual(code, 0)
        db = self.database.session()
        try:
            account = db.query(Account).filter(Account.email == "boss@example.com").one()
            self.assertIs(account.role, Role.ADMIN)
        finally:
            db.close()

    def test_existing_email_fails(self) -> None:
        self.assertEqual(self._run("--email", "boss@example.com", "--password", "abcdef"), 0)
        self.assertEqual(self._run("--email", "boss@example.com", "--password", "abcdef"), 1)

    def test_short_password_fails(self) -> None:
        self.assertEqual(self._run("--email", "boss@example.com", "--password", "abc"), 1)


if __name__ == "__main__":
    unittest.main()
