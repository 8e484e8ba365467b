"""Password hashing and session token issuance/verification."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from blog.core.config import Settings
from blog.core.roles import Role, parse_role

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); overridable via BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

TOKEN_COOKIE_NAME = "token"


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash; malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified session token."""

    account_id: int
    email: str
    role: Role
    expires_at: datetime


def create_access_token(
    account_id: int,
    email: str,
    role: Role,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT with id, email, role and an expiry JWT_EXPIRE_MINUTES out."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(account_id),
        "email": email,
        "role": role.value,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str | None, settings: Settings) -> TokenClaims | None:
    """
    Verify signature and expiry and return the token's claims.

    Returns None for a missing, malformed, expired or foreign-signed token,
    or one whose claims do not describe an account.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as e:
        logger.debug("Rejected session token: %s", e)
        return None

    role = parse_role(payload.get("role"))
    email = payload.get("email")
    try:
        account_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    if role is None or not isinstance(email, str):
        return None
    return TokenClaims(
        account_id=account_id,
        email=email,
        role=role,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )
