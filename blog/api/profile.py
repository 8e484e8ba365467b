"""The caller's own profile: view with posts, and edit."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from blog.api.deps import AppSettings, CurrentAccount
from blog.core.database import get_db
from blog.schemas.auth import AccountOut, AccountResponse, ProfileUpdateRequest
from blog.schemas.posts import PostOut, ProfileResponse
from blog.services import accounts
from blog.services import posts as post_service

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    account = accounts.get_account(db, current.account_id)
    own_posts = post_service.posts_by_author(db, account.id)
    return ProfileResponse(
        user=AccountOut.model_validate(account),
        posts=[PostOut.model_validate(p) for p in own_posts],
    )


@router.put("/profile", response_model=AccountResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> AccountResponse:
    """
    Update name and/or email; change the password when both currentPassword
    and newPassword are sent. 409 if the new email belongs to another account.
    """
    account = accounts.update_profile(
        db,
        current.account_id,
        name=body.name,
        email=body.email,
        current_password=body.current_password,
        new_password=body.new_password,
        rounds=settings.BCRYPT_ROUNDS,
    )
    return AccountResponse(
        message="Profile updated successfully",
        user=AccountOut.model_validate(account),
    )
