"""Pydantic request/response schemas."""

from blog.schemas.auth import (
    AccountCreateRequest,
    AccountListResponse,
    AccountOut,
    AccountResponse,
    AccountUpdateRequest,
    AuthResponse,
    CurrentAccountResponse,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from blog.schemas.base import MessageResponse
from blog.schemas.health import HealthResponse
from blog.schemas.pagination import Pagination
from blog.schemas.posts import (
    AuthorOut,
    PostListResponse,
    PostOut,
    PostResponse,
    PostWrite,
    ProfileResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountListResponse",
    "AccountOut",
    "AccountResponse",
    "AccountUpdateRequest",
    "AuthResponse",
    "AuthorOut",
    "CurrentAccountResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PostListResponse",
    "PostOut",
    "PostResponse",
    "PostWrite",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
]
