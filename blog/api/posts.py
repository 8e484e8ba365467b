"""Post endpoints: public listing and detail, authenticated create, author-or-admin edit/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog.api.deps import CurrentAccount
from blog.core.database import get_db
from blog.schemas.base import MessageResponse
from blog.schemas.posts import PostListResponse, PostOut, PostResponse, PostWrite
from blog.services import posts as post_service
from blog.services.pagination import build_pagination, page_request

router = APIRouter()


@router.get("", response_model=PostListResponse)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    page: int = 1,
    limit: int = 10,
    author: int | None = None,
) -> PostListResponse:
    """Paginated posts, newest first. Filter by author id with ?author=."""
    req = page_request(page, limit)
    items, total = post_service.list_posts(db, req, author_id=author)
    return PostListResponse(
        posts=[PostOut.model_validate(p) for p in items],
        pagination=build_pagination(req, total),
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostWrite,
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    """Create a post owned by the caller. Title is required and at most 100 characters."""
    post = post_service.create_post(db, current.account_id, body.title, body.content)
    return PostResponse(message="Post created successfully", post=PostOut.model_validate(post))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    post = post_service.get_post(db, post_id)
    return PostResponse(post=PostOut.model_validate(post))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    body: PostWrite,
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    """Update title and content. Only the author or an admin may edit."""
    post = post_service.update_post(db, post_id, current, body.title, body.content)
    return PostResponse(message="Post updated successfully", post=PostOut.model_validate(post))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    post_service.delete_post(db, post_id, current)
    return MessageResponse(message="Post deleted successfully")
