"""Request/response schemas for auth and account endpoints."""

from datetime import datetime

from pydantic import Field

from blog.core.roles import Role
from blog.schemas.base import CamelModel
from blog.schemas.pagination import Pagination


class RegisterRequest(CamelModel):
    """Self-service registration. Fields are checked by the account service (400 on failure)."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str | None = None
    password: str | None = None


class AccountOut(CamelModel):
    """Account as returned by the API (never includes the password hash)."""

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(CamelModel):
    """Returned by register and login; the token is also set as the 'token' cookie."""

    message: str
    user: AccountOut
    token: str = Field(..., description="Signed session token")


class CurrentAccountResponse(CamelModel):
    user: AccountOut


class AccountCreateRequest(CamelModel):
    """Admin-initiated account creation; role defaults to user."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class AccountUpdateRequest(CamelModel):
    """Admin edit of another account. Omitted fields are left unchanged."""

    name: str | None = None
    email: str | None = None
    role: str | None = None
    password: str | None = None


class ProfileUpdateRequest(CamelModel):
    """Self-service profile edit; password changes need both current and new."""

    name: str | None = None
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class AccountResponse(CamelModel):
    message: str
    user: AccountOut


class AccountListResponse(CamelModel):
    """Response for GET /admin/users (admin only)."""

    users: list[AccountOut]
    pagination: Pagination
