"""Account registration, authentication, profile edits and admin management."""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog.core.roles import Role, is_admin, parse_role
from blog.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from blog.models import Account, Post
from blog.models.base import id_in_range
from blog.services.errors import (
    AuthenticationRequired,
    Conflict,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from blog.services.pagination import PageRequest

logger = logging.getLogger(__name__)

NAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 6
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationFailed("Name is required")
    if len(name) > NAME_MAX_LEN:
        raise ValidationFailed(f"Name cannot be more than {NAME_MAX_LEN} characters")
    return name


def _validate_email(email: str) -> str:
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise ValidationFailed("Please enter a valid email")
    return email


def _validate_password(password: str, label: str = "Password") -> None:
    if len(password) < PASSWORD_MIN_LEN:
        raise ValidationFailed(f"{label} must be at least {PASSWORD_MIN_LEN} characters long")


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = db.query(Account.id).filter(Account.email == email)
    if exclude_id is not None:
        query = query.filter(Account.id != exclude_id)
    return query.first() is not None


def _commit(
    db: Session, account: Account, conflict_message: str = "User with this email already exists"
) -> Account:
    """Commit and reload server-side defaults; a unique violation becomes Conflict."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(conflict_message) from e
    db.refresh(account)
    return account


def create_account(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    role: Role = Role.USER,
    rounds: int = BCRYPT_ROUNDS,
) -> Account:
    """Create an account with a hashed password. Raises ValidationFailed or Conflict."""
    if not name or not email or not password:
        raise ValidationFailed("Name, email, and password are required")
    clean_name = _validate_name(name)
    clean_email = _validate_email(email)
    _validate_password(password)
    if _email_taken(db, clean_email):
        raise Conflict("User with this email already exists")

    account = Account(
        name=clean_name,
        email=clean_email,
        password_hash=hash_password(password, rounds=rounds),
        role=role,
    )
    db.add(account)
    _commit(db, account)
    logger.info("Account created", extra={"account_id": account.id, "role": role.value})
    return account


def register_account(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    rounds: int = BCRYPT_ROUNDS,
) -> Account:
    """Self-service registration; always creates a regular user."""
    return create_account(db, name, email, password, role=Role.USER, rounds=rounds)


def authenticate(db: Session, email: str | None, password: str | None) -> Account:
    """Return the account for valid credentials; unknown email and bad password look the same."""
    if not email or not password:
        raise ValidationFailed("Email and password are required")
    account = db.query(Account).filter(Account.email == normalize_email(email)).first()
    if account is None or not verify_password(password, account.password_hash):
        logger.info("Login failed")
        raise AuthenticationRequired("Invalid email or password")
    logger.info("Login succeeded", extra={"account_id": account.id})
    return account


def get_account(db: Session, account_id: int) -> Account:
    if not id_in_range(account_id):
        raise NotFound("User not found")
    account = db.query(Account).filter(Account.id == account_id).first()
    if account is None:
        raise NotFound("User not found")
    return account


def list_accounts(db: Session, req: PageRequest) -> tuple[list[Account], int]:
    """Accounts newest first for the admin listing, with the total count."""
    total = db.query(Account).count()
    accounts = (
        db.query(Account)
        .order_by(Account.created_at.desc(), Account.id.desc())
        .offset(req.offset)
        .limit(req.limit)
        .all()
    )
    return accounts, total


def update_profile(
    db: Session,
    account_id: int,
    name: str | None = None,
    email: str | None = None,
    current_password: str | None = None,
    new_password: str | None = None,
    rounds: int = BCRYPT_ROUNDS,
) -> Account:
    """
    Apply a self-service profile edit.

    The password is re-hashed only when both current and new passwords are
    given and the current one matches.
    """
    account = get_account(db, account_id)

    if name:
        account.name = _validate_name(name)

    if email and normalize_email(email) != account.email:
        clean_email = _validate_email(email)
        if _email_taken(db, clean_email, exclude_id=account.id):
            raise Conflict("Email is already taken")
        account.email = clean_email

    if current_password and new_password:
        if not verify_password(current_password, account.password_hash):
            raise ValidationFailed("Current password is incorrect")
        _validate_password(new_password, label="New password")
        account.password_hash = hash_password(new_password, rounds=rounds)

    return _commit(db, account, conflict_message="Email is already taken")


def _ensure_modifiable(target: Account, protect_admins: bool) -> None:
    if protect_admins and is_admin(target.role):
        raise PermissionDenied("Admin accounts cannot be modified or deleted")


def admin_update_account(
    db: Session,
    account_id: int,
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
    password: str | None = None,
    protect_admins: bool = True,
    rounds: int = BCRYPT_ROUNDS,
) -> Account:
    """Edit another account on behalf of an admin. Omitted fields are unchanged."""
    account = get_account(db, account_id)
    _ensure_modifiable(account, protect_admins)

    if name:
        account.name = _validate_name(name)
    if email and normalize_email(email) != account.email:
        clean_email = _validate_email(email)
        if _email_taken(db, clean_email, exclude_id=account.id):
            raise Conflict("Email is already taken")
        account.email = clean_email
    if role:
        new_role = parse_role(role)
        if new_role is None:
            raise ValidationFailed("Role must be 'admin' or 'user'")
        account.role = new_role
    if password:
        _validate_password(password)
        account.password_hash = hash_password(password, rounds=rounds)

    return _commit(db, account, conflict_message="Email is already taken")


def delete_account(db: Session, account_id: int, protect_admins: bool = True) -> int:
    """Delete an account and every post it owns. Returns the number of posts removed."""
    account = get_account(db, account_id)
    _ensure_modifiable(account, protect_admins)

    posts_deleted = (
        db.query(Post).filter(Post.author_id == account.id).delete(synchronize_session=False)
    )
    db.delete(account)
    db.commit()
    logger.info(
        "Account deleted",
        extra={"account_id": account_id, "posts_deleted": posts_deleted},
    )
    return posts_deleted
