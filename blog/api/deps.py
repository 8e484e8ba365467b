"""Auth dependencies shared by API routes: cookie token verification and role checks."""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Request, Response, status

from blog.core.config import Settings
from blog.core.roles import is_admin
from blog.core.security import TOKEN_COOKIE_NAME, TokenClaims, decode_access_token


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_current_account(
    settings: Annotated[Settings, Depends(get_app_settings)],
    token: Annotated[str | None, Cookie(alias=TOKEN_COOKIE_NAME)] = None,
) -> TokenClaims:
    """Dependency: require a valid session token cookie. Raises 401 if missing or invalid."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    claims = decode_access_token(token, settings)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return claims


def require_admin(
    current: Annotated[TokenClaims, Depends(get_current_account)],
) -> TokenClaims:
    """Dependency: require a token whose role is admin. Raises 403 otherwise."""
    if not is_admin(current.role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")


CurrentAccount = Annotated[TokenClaims, Depends(get_current_account)]
AdminAccount = Annotated[TokenClaims, Depends(require_admin)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
