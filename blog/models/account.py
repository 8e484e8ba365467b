"""ORM model for registered accounts (auth and RBAC)."""

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from blog.core.roles import Role
from blog.models.base import Base, TimestampMixin


class Account(TimestampMixin, Base):
    """
    Account for cookie-based JWT authentication and role-based access control.

    email is stored trimmed and lowercased; uniqueness is enforced by the
    database. Deleting an account deletes its posts.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="account_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.USER,
    )

    posts = relationship(
        "Post",
        back_populates="author",
        cascade="all, delete-orphan",
    )
