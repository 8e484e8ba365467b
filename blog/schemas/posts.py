"""Request/response schemas for post endpoints."""

from datetime import datetime

from blog.schemas.auth import AccountOut
from blog.schemas.base import CamelModel
from blog.schemas.pagination import Pagination


class PostWrite(CamelModel):
    """Body for creating or updating a post. Checked by the post service (400 on failure)."""

    title: str | None = None
    content: str | None = None


class AuthorOut(CamelModel):
    id: int
    name: str
    email: str


class PostOut(CamelModel):
    id: int
    title: str
    content: str
    author_id: int
    author: AuthorOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PostResponse(CamelModel):
    message: str | None = None
    post: PostOut


class PostListResponse(CamelModel):
    posts: list[PostOut]
    pagination: Pagination


class ProfileResponse(CamelModel):
    """The caller's own account and posts."""

    user: AccountOut
    posts: list[PostOut]
