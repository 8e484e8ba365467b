"""
Create an account (by default the first admin). Run from project root:
  python -m blog.scripts.create_admin --email admin@example.com --password your-secure-password
Options:
  --name NAME  --role {admin,user}
"""
import argparse
import sys

from dotenv import load_dotenv

from blog.core.config import get_settings
from blog.core.database import Database
from blog.core.logging_config import configure_logging
from blog.core.roles import Role
from blog.services.accounts import create_account
from blog.services.errors import ServiceError

DEFAULT_ADMIN_NAME = "Test Admin"
DEFAULT_ADMIN_EMAIL = "testadmin@blogapp.com"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a blog account (admin by default).")
    parser.add_argument("--name", default=DEFAULT_ADMIN_NAME, help="Display name (max 50 chars)")
    parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL, help="Login email")
    parser.add_argument("--password", required=True, help="Password (min 6 chars)")
    parser.add_argument(
        "--role", default=Role.ADMIN.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    database = Database.from_settings(settings)
    database.connect()
    db = database.session()
    try:
        account = create_account(
            db,
            args.name,
            args.email,
            args.password,
            role=Role(args.role),
            rounds=settings.BCRYPT_ROUNDS,
        )
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        database.dispose()
    print(f"Created account '{account.email}' with role '{account.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
