"""Post creation, listing, and author-or-admin gated edits."""

import logging

from sqlalchemy.orm import Session

from blog.core.roles import can_modify_post
from blog.core.security import TokenClaims
from blog.models import Account, Post
from blog.models.base import id_in_range
from blog.models.post import TITLE_MAX_LEN
from blog.services.errors import NotFound, PermissionDenied, ValidationFailed
from blog.services.pagination import PageRequest

logger = logging.getLogger(__name__)


def validate_post_fields(title: str | None, content: str | None) -> tuple[str, str]:
    """Return trimmed (title, content) or raise ValidationFailed."""
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationFailed("Title and content are required")
    if len(title) > TITLE_MAX_LEN:
        raise ValidationFailed(f"Title cannot be more than {TITLE_MAX_LEN} characters")
    return title, content


def get_post(db: Session, post_id: int) -> Post:
    if not id_in_range(post_id):
        raise NotFound("Post not found")
    post = db.query(Post).filter(Post.id == post_id).first()
    if post is None:
        raise NotFound("Post not found")
    return post


def list_posts(
    db: Session, req: PageRequest, author_id: int | None = None
) -> tuple[list[Post], int]:
    """One page of posts, newest first, optionally for a single author, with the total."""
    query = db.query(Post)
    if author_id is not None:
        if not id_in_range(author_id):
            return [], 0
        query = query.filter(Post.author_id == author_id)
    total = query.count()
    posts = (
        query.order_by(Post.created_at.desc(), Post.id.desc())
        .offset(req.offset)
        .limit(req.limit)
        .all()
    )
    return posts, total


def posts_by_author(db: Session, author_id: int) -> list[Post]:
    return (
        db.query(Post)
        .filter(Post.author_id == author_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )


def create_post(db: Session, author_id: int, title: str | None, content: str | None) -> Post:
    """Create a post owned by author_id; the author must still exist."""
    clean_title, clean_content = validate_post_fields(title, content)
    if db.query(Account.id).filter(Account.id == author_id).first() is None:
        raise NotFound("User not found")

    post = Post(title=clean_title, content=clean_content, author_id=author_id)
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post created", extra={"post_id": post.id, "author_id": author_id})
    return post


def _ensure_can_modify(post: Post, actor: TokenClaims, action: str) -> None:
    if not can_modify_post(actor.role, actor.account_id, post.author_id):
        raise PermissionDenied(f"Not authorized to {action} this post")


def update_post(
    db: Session,
    post_id: int,
    actor: TokenClaims,
    title: str | None,
    content: str | None,
) -> Post:
    post = get_post(db, post_id)
    _ensure_can_modify(post, actor, "edit")
    post.title, post.content = validate_post_fields(title, content)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: int, actor: TokenClaims) -> None:
    post = get_post(db, post_id)
    _ensure_can_modify(post, actor, "delete")
    db.delete(post)
    db.commit()
    logger.info(
        "Post deleted",
        extra={"post_id": post_id, "actor_id": actor.account_id},
    )
