"""Shared fixtures for tests that drive the app through FastAPI's TestClient."""

import unittest

from fastapi.testclient import TestClient
from pydantic import SecretStr

from blog.core.config import Settings
from blog.core.roles import Role
from blog.core.security import TOKEN_COOKIE_NAME, create_access_token
from blog.main import create_app
from blog.models import Account
from blog.services.accounts import create_account

TEST_SECRET = "test-secret"


def make_settings(**overrides: object) -> Settings:
    """In-memory SQLite, fast bcrypt, fixed secret; never reads .env."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "DB_CREATE_ALL": True,
        "BCRYPT_ROUNDS": 4,
        "JWT_SECRET": SecretStr(TEST_SECRET),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class AppTestCase(unittest.TestCase):
    """Starts a fresh app and database per test; tearDown runs the shutdown lifespan."""

    settings_overrides: dict[str, object] = {}

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def make_account(
        self,
        name: str = "Alice",
        email: str = "alice@example.com",
        password: str = "abcdef",
        role: Role = Role.USER,
    ) -> Account:
        """Insert an account directly through the service layer."""
        db = self.app.state.database.session()
        try:
            return create_account(db, name, email, password, role=role, rounds=4)
        finally:
            db.close()

    def token_for(self, account: Account) -> str:
        return create_access_token(account.id, account.email, account.role, self.settings)

    def act_as(self, account: Account | None) -> None:
        """Replace the client's session cookie (None signs out)."""
        self.client.cookies.clear()
        if account is not None:
            self.client.cookies.set(TOKEN_COOKIE_NAME, self.token_for(account))

    def make_post(self, author: Account, title: str = "Hello", content: str = "World") -> dict:
        self.act_as(author)
        response = self.client.post("/api/posts", json={"title": title, "content": content})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["post"]
