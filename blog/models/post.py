"""ORM model for blog posts."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from blog.models.base import Base, TimestampMixin

TITLE_MAX_LEN = 100


class Post(TimestampMixin, Base):
    """A post owned by exactly one account."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LEN), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author = relationship("Account", back_populates="posts", lazy="joined")
