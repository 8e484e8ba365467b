"""Register, login, logout and current-account endpoints (cookie-based JWT)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from blog.api.deps import (
    AppSettings,
    CurrentAccount,
    clear_token_cookie,
    set_token_cookie,
)
from blog.core.database import get_db
from blog.core.security import create_access_token
from blog.schemas.auth import (
    AccountOut,
    AuthResponse,
    CurrentAccountResponse,
    LoginRequest,
    RegisterRequest,
)
from blog.schemas.base import MessageResponse
from blog.services import accounts

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> AuthResponse:
    """Create a regular account and sign it in (token returned and set as cookie)."""
    account = accounts.register_account(
        db, body.name, body.email, body.password, rounds=settings.BCRYPT_ROUNDS
    )
    token = create_access_token(account.id, account.email, account.role, settings)
    set_token_cookie(response, token, settings)
    return AuthResponse(
        message="User registered successfully",
        user=AccountOut.model_validate(account),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: AppSettings,
) -> AuthResponse:
    """Authenticate with email and password; the session token is set as the 'token' cookie."""
    account = accounts.authenticate(db, body.email, body.password)
    token = create_access_token(account.id, account.email, account.role, settings)
    set_token_cookie(response, token, settings)
    return AuthResponse(
        message="Login successful",
        user=AccountOut.model_validate(account),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """
    Drop the cookie. Tokens are stateless, so a copied token stays valid
    until it expires.
    """
    clear_token_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=CurrentAccountResponse)
def me(
    current: CurrentAccount,
    db: Annotated[Session, Depends(get_db)],
) -> CurrentAccountResponse:
    account = accounts.get_account(db, current.account_id)
    return CurrentAccountResponse(user=AccountOut.model_validate(account))
