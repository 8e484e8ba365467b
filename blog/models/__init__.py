"""SQLAlchemy ORM models."""

from blog.models.account import Account
from blog.models.base import Base
from blog.models.post import Post

__all__ = ["Account", "Base", "Post"]
