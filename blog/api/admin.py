"""Admin-only account and post management. Every route requires a token with role admin."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog.api.deps import AdminAccount, AppSettings
from blog.core.database import get_db
from blog.core.roles import Role, parse_role
from blog.schemas.auth import (
    AccountCreateRequest,
    AccountListResponse,
    AccountOut,
    AccountResponse,
    AccountUpdateRequest,
)
from blog.schemas.base import MessageResponse
from blog.schemas.posts import PostListResponse, PostOut, PostResponse, PostWrite
from blog.services import accounts
from blog.services import posts as post_service
from blog.services.errors import ValidationFailed
from blog.services.pagination import build_pagination, page_request

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/users", response_model=AccountListResponse)
def list_users(
    _admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
    page: int = 1,
    limit: int = 10,
) -> AccountListResponse:
    """List all accounts, newest first (no password hashes)."""
    req = page_request(page, limit)
    items, total = accounts.list_accounts(db, req)
    return AccountListResponse(
        users=[AccountOut.model_validate(a) for a in items],
        pagination=build_pagination(req, total),
    )


@router.post("/users", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: AccountCreateRequest,
    admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> AccountResponse:
    role = Role.USER
    if body.role:
        role = parse_role(body.role)
        if role is None:
            raise ValidationFailed("Role must be 'admin' or 'user'")
    account = accounts.create_account(
        db, body.name, body.email, body.password, role=role, rounds=settings.BCRYPT_ROUNDS
    )
    logger.info(
        "Admin created account",
        extra={"admin_id": admin.account_id, "account_id": account.id},
    )
    return AccountResponse(
        message="User created successfully",
        user=AccountOut.model_validate(account),
    )


@router.put("/users/{account_id}", response_model=AccountResponse)
def update_user(
    account_id: int,
    body: AccountUpdateRequest,
    _admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> AccountResponse:
    account = accounts.admin_update_account(
        db,
        account_id,
        name=body.name,
        email=body.email,
        role=body.role,
        password=body.password,
        protect_admins=settings.PREVENT_ADMIN_MODIFICATION,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return AccountResponse(
        message="User updated successfully",
        user=AccountOut.model_validate(account),
    )


@router.delete("/users/{account_id}", response_model=MessageResponse)
def delete_user(
    account_id: int,
    admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> MessageResponse:
    """Delete an account and all of its posts."""
    accounts.delete_account(
        db, account_id, protect_admins=settings.PREVENT_ADMIN_MODIFICATION
    )
    logger.info(
        "Admin deleted account",
        extra={"admin_id": admin.account_id, "account_id": account_id},
    )
    return MessageResponse(message="User and their posts deleted successfully")


@router.get("/posts", response_model=PostListResponse)
def list_all_posts(
    _admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
    page: int = 1,
    limit: int = 10,
) -> PostListResponse:
    req = page_request(page, limit)
    items, total = post_service.list_posts(db, req)
    return PostListResponse(
        posts=[PostOut.model_validate(p) for p in items],
        pagination=build_pagination(req, total),
    )


@router.put("/posts/{post_id}", response_model=PostResponse)
def update_any_post(
    post_id: int,
    body: PostWrite,
    admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    post = post_service.update_post(db, post_id, admin, body.title, body.content)
    return PostResponse(message="Post updated successfully", post=PostOut.model_validate(post))


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_any_post(
    post_id: int,
    admin: AdminAccount,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    post_service.delete_post(db, post_id, admin)
    return MessageResponse(message="Post deleted successfully")
