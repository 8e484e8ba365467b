"""Unit tests for blog.core.config: defaults and validators."""

import unittest

from pydantic import ValidationError

from blog.core.config import Settings


class TestSettingsDefaults(unittest.TestCase):
    def test_token_lifetime_is_seven_days(self) -> None:
        settings = Settings(_env_file=None)
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 10080)
        self.assertEqual(settings.BCRYPT_ROUNDS, 12)
        self.assertTrue(settings.PREVENT_ADMIN_MODIFICATION)


class TestSettingsValidation(unittest.TestCase):
    def test_rejects_non_postgres_or_sqlite_url(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="mysql://localhost/blog")

    def test_accepts_sqlite(self) -> None:
        self.assertEqual(Settings(_env_file=None, DATABASE_URL="sqlite://").DATABASE_URL, "sqlite://")

    def test_rejects_empty_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, JWT_SECRET="  ")

    def test_rejects_expiry_beyond_seven_days(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, JWT_EXPIRE_MINUTES=10081)

    def test_log_level_is_normalized(self) -> None:
        self.assertEqual(Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")

    def test_api_prefix_trailing_slash(self) -> None:
        self.assertEqual(Settings(_env_file=None, API_PREFIX="/api/").API_PREFIX, "/api")


if __name__ == "__main__":
    unittest.main()
