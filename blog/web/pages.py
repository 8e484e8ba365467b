"""
Page routes.

Each page re-verifies the session cookie itself; the route gate in front
of these routes only checks that a cookie exists. Service errors are shown
as inline banners on the page that produced them.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from blog.api.deps import AppSettings, clear_token_cookie, set_token_cookie
from blog.core.config import Settings
from blog.core.gate import LOGIN_PATH
from blog.core.roles import Role, can_modify_post, is_admin, parse_role
from blog.core.security import (
    TOKEN_COOKIE_NAME,
    TokenClaims,
    create_access_token,
    decode_access_token,
)
from blog.core.database import get_db
from blog.models import Account
from blog.services import accounts
from blog.services import posts as post_service
from blog.services.errors import ServiceError, ValidationFailed
from blog.services.pagination import build_pagination, page_request
from blog.web import templates

router = APIRouter(default_response_class=HTMLResponse)

DbSession = Annotated[Session, Depends(get_db)]
HOME_RECENT_POSTS = 6


def _claims(request: Request, settings: Settings) -> TokenClaims | None:
    return decode_access_token(request.cookies.get(TOKEN_COOKIE_NAME), settings)


def _render(
    request: Request,
    template: str,
    claims: TokenClaims | None,
    status_code: int = 200,
    **context: Any,
) -> Response:
    context.setdefault("error", None)
    context.setdefault("success", None)
    context["current"] = claims
    context["current_is_admin"] = claims is not None and is_admin(claims.role)
    return templates.TemplateResponse(request, template, context, status_code=status_code)


def _path_id(raw: str) -> int:
    """Non-numeric ids map to 0, which never matches a row."""
    try:
        return int(raw)
    except ValueError:
        return 0


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _to_login() -> RedirectResponse:
    """Redirect to login and drop a cookie that failed verification."""
    response = _redirect(LOGIN_PATH)
    clear_token_cookie(response)
    return response


def _sign_in(account: Account, settings: Settings, target: str) -> RedirectResponse:
    response = _redirect(target)
    token = create_access_token(account.id, account.email, account.role, settings)
    set_token_cookie(response, token, settings)
    return response


@router.get("/")
def home(request: Request, db: DbSession, settings: AppSettings) -> Response:
    recent, total = post_service.list_posts(db, page_request(1, HOME_RECENT_POSTS))
    return _render(
        request, "home.html", _claims(request, settings), posts=recent, total_posts=total
    )


# -- auth ---------------------------------------------------------------------


@router.get("/login")
def login_page(request: Request, settings: AppSettings) -> Response:
    claims = _claims(request, settings)
    if claims is not None:
        return _redirect("/dashboard")
    return _render(request, "login.html", None)


@router.post("/login")
def login_submit(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    try:
        account = accounts.authenticate(db, email, password)
    except ServiceError as e:
        return _render(
            request, "login.html", None, status_code=e.status_code, error=e.message, email=email
        )
    return _sign_in(account, settings, "/dashboard")


@router.get("/register")
def register_page(request: Request, settings: AppSettings) -> Response:
    if _claims(request, settings) is not None:
        return _redirect("/dashboard")
    return _render(request, "register.html", None)


@router.post("/register")
def register_submit(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    confirm_password: Annotated[str, Form()] = "",
) -> Response:
    try:
        if password != confirm_password:
            raise ValidationFailed("Passwords do not match")
        account = accounts.register_account(
            db, name, email, password, rounds=settings.BCRYPT_ROUNDS
        )
    except ServiceError as e:
        return _render(
            request,
            "register.html",
            None,
            status_code=e.status_code,
            error=e.message,
            name=name,
            email=email,
        )
    return _sign_in(account, settings, "/dashboard")


@router.post("/logout")
def logout() -> Response:
    response = _redirect("/")
    clear_token_cookie(response)
    return response


# -- posts --------------------------------------------------------------------


@router.get("/posts")
def posts_index(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    page: int = 1,
    author: int | None = None,
) -> Response:
    req = page_request(page)
    items, total = post_service.list_posts(db, req, author_id=author)
    return _render(
        request,
        "posts/list.html",
        _claims(request, settings),
        posts=items,
        pagination=build_pagination(req, total),
        author=author,
    )


@router.get("/posts/create")
def create_post_page(request: Request, settings: AppSettings) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    return _render(request, "posts/form.html", claims, post=None, title="", content="")


@router.post("/posts/create")
def create_post_submit(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    title: Annotated[str, Form()] = "",
    content: Annotated[str, Form()] = "",
) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        post = post_service.create_post(db, claims.account_id, title, content)
    except ServiceError as e:
        return _render(
            request,
            "posts/form.html",
            claims,
            status_code=e.status_code,
            error=e.message,
            post=None,
            title=title,
            content=content,
        )
    return _redirect(f"/posts/{post.id}")


@router.get("/posts/edit/{post_id}")
def edit_post_page(
    post_id: str, request: Request, db: DbSession, settings: AppSettings
) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        post = post_service.get_post(db, _path_id(post_id))
    except ServiceError as e:
        return _render(request, "not_found.html", claims, status_code=404, message=e.message)
    if not can_modify_post(claims.role, claims.account_id, post.author_id):
        return _redirect("/posts")
    return _render(
        request, "posts/form.html", claims, post=post, title=post.title, content=post.content
    )


@router.post("/posts/edit/{post_id}")
def edit_post_submit(
    post_id: int,
    request: Request,
    db: DbSession,
    settings: AppSettings,
    title: Annotated[str, Form()] = "",
    content: Annotated[str, Form()] = "",
) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        post = post_service.update_post(db, post_id, claims, title, content)
    except ServiceError as e:
        return _render(
            request,
            "posts/form.html",
            claims,
            status_code=e.status_code,
            error=e.message,
            post={"id": post_id},
            title=title,
            content=content,
        )
    return _redirect(f"/posts/{post.id}")


@router.get("/posts/{post_id}")
def post_detail(
    post_id: str, request: Request, db: DbSession, settings: AppSettings
) -> Response:
    claims = _claims(request, settings)
    try:
        post = post_service.get_post(db, _path_id(post_id))
    except ServiceError as e:
        return _render(request, "not_found.html", claims, status_code=404, message=e.message)
    can_edit = claims is not None and can_modify_post(
        claims.role, claims.account_id, post.author_id
    )
    return _render(request, "posts/detail.html", claims, post=post, can_edit=can_edit)


@router.post("/posts/{post_id}/delete")
def delete_post_submit(
    post_id: int, request: Request, db: DbSession, settings: AppSettings
) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        post_service.delete_post(db, post_id, claims)
    except ServiceError as e:
        post = None
        if e.status_code != 404:
            post = post_service.get_post(db, post_id)
        if post is None:
            return _render(request, "not_found.html", claims, status_code=404, message=e.message)
        return _render(
            request,
            "posts/detail.html",
            claims,
            status_code=e.status_code,
            error=e.message,
            post=post,
            can_edit=False,
        )
    return _redirect("/posts")


# -- account pages ------------------------------------------------------------


@router.get("/dashboard")
def dashboard(request: Request, db: DbSession, settings: AppSettings) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        account = accounts.get_account(db, claims.account_id)
    except ServiceError:
        return _to_login()
    own_posts = post_service.posts_by_author(db, account.id)
    return _render(request, "dashboard.html", claims, account=account, posts=own_posts)


@router.get("/profile")
def profile_page(request: Request, db: DbSession, settings: AppSettings) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        account = accounts.get_account(db, claims.account_id)
    except ServiceError:
        return _to_login()
    return _render(request, "profile.html", claims, account=account)


@router.post("/profile")
def profile_submit(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    current_password: Annotated[str, Form()] = "",
    new_password: Annotated[str, Form()] = "",
) -> Response:
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    try:
        account = accounts.update_profile(
            db,
            claims.account_id,
            name=name,
            email=email,
            current_password=current_password,
            new_password=new_password,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except ServiceError as e:
        db.rollback()
        account = accounts.get_account(db, claims.account_id)
        return _render(
            request,
            "profile.html",
            claims,
            status_code=e.status_code,
            error=e.message,
            account=account,
        )
    # Email may have changed; reissue the token so its claims stay current
    response = _render(
        request,
        "profile.html",
        claims,
        success="Profile updated successfully",
        account=account,
    )
    token = create_access_token(account.id, account.email, account.role, settings)
    set_token_cookie(response, token, settings)
    return response


# -- admin --------------------------------------------------------------------


def _admin_claims(request: Request, settings: Settings) -> TokenClaims | Response:
    """The caller's claims if they are an admin, else the response to send instead."""
    claims = _claims(request, settings)
    if claims is None:
        return _to_login()
    if not is_admin(claims.role):
        return _render(
            request, "error.html", claims, status_code=403, message="Admin access required"
        )
    return claims


def _admin_view(
    request: Request,
    db: Session,
    claims: TokenClaims,
    users_page: int = 1,
    posts_page: int = 1,
    status_code: int = 200,
    **context: Any,
) -> Response:
    users_req = page_request(users_page)
    posts_req = page_request(posts_page)
    users, users_total = accounts.list_accounts(db, users_req)
    posts, posts_total = post_service.list_posts(db, posts_req)
    return _render(
        request,
        "admin.html",
        claims,
        status_code=status_code,
        users=users,
        users_pagination=build_pagination(users_req, users_total),
        posts=posts,
        posts_pagination=build_pagination(posts_req, posts_total),
        roles=[r.value for r in Role],
        **context,
    )


@router.get("/admin")
def admin_page(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    users_page: int = 1,
    posts_page: int = 1,
) -> Response:
    claims = _admin_claims(request, settings)
    if isinstance(claims, Response):
        return claims
    return _admin_view(request, db, claims, users_page, posts_page)


@router.post("/admin/users")
def admin_create_user(
    request: Request,
    db: DbSession,
    settings: AppSettings,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    role: Annotated[str, Form()] = "user",
) -> Response:
    claims = _admin_claims(request, settings)
    if isinstance(claims, Response):
        return claims
    try:
        new_role = parse_role(role)
        if new_role is None:
            raise ValidationFailed("Role must be 'admin' or 'user'")
        accounts.create_account(
            db, name, email, password, role=new_role, rounds=settings.BCRYPT_ROUNDS
        )
    except ServiceError as e:
        return _admin_view(request, db, claims, status_code=e.status_code, error=e.message)
    return _admin_view(request, db, claims, success="User created successfully")


@router.post("/admin/users/{account_id}/edit")
def admin_edit_user(
    account_id: int,
    request: Request,
    db: DbSession,
    settings: AppSettings,
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    role: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    claims = _admin_claims(request, settings)
    if isinstance(claims, Response):
        return claims
    try:
        accounts.admin_update_account(
            db,
            account_id,
            name=name,
            email=email,
            role=role,
            password=password,
            protect_admins=settings.PREVENT_ADMIN_MODIFICATION,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except ServiceError as e:
        db.rollback()
        return _admin_view(request, db, claims, status_code=e.status_code, error=e.message)
    return _admin_view(request, db, claims, success="User updated successfully")


@router.post("/admin/users/{account_id}/delete")
def admin_delete_user(
    account_id: int, request: Request, db: DbSession, settings: AppSettings
) -> Response:
    claims = _admin_claims(request, settings)
    if isinstance(claims, Response):
        return claims
    try:
        accounts.delete_account(
            db, account_id, protect_admins=settings.PREVENT_ADMIN_MODIFICATION
        )
    except ServiceError as e:
        return _admin_view(request, db, claims, status_code=e.status_code, error=e.message)
    return _admin_view(request, db, claims, success="User and their posts deleted successfully")


@router.post("/admin/posts/{post_id}/delete")
def admin_delete_post(
    post_id: int, request: Request, db: DbSession, settings: AppSettings
) -> Response:
    claims = _admin_claims(request, settings)
    if isinstance(claims, Response):
        return claims
    try:
        post_service.delete_post(db, post_id, claims)
    except ServiceError as e:
        return _admin_view(request, db, claims, status_code=e.status_code, error=e.message)
    return _admin_view(request, db, claims, success="Post deleted successfully")
