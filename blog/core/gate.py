"""
Route gate: a cheap pre-filter in front of the page routes.

Classifies a request path into public, protected or admin, and redirects
protected and admin paths to the login page when no token cookie is sent.
It only checks that the cookie is present. Signature, expiry and role are
verified by the handlers themselves.
"""

import enum
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from blog.core.security import TOKEN_COOKIE_NAME

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

PUBLIC_ROUTES = frozenset({"/", "/login", "/register", "/posts"})
POST_DETAIL_PREFIX = "/posts/"
# Paths under the detail prefix that are not detail views
POST_DETAIL_EXCLUDED = ("/edit", "/posts/create")
PROTECTED_PREFIXES = ("/dashboard", "/profile", "/posts/create", "/posts/edit")
ADMIN_PREFIXES = ("/admin",)


class RouteTier(str, enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    ADMIN = "admin"


class GateDecision(str, enum.Enum):
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"


def _is_post_detail(path: str) -> bool:
    if not path.startswith(POST_DETAIL_PREFIX):
        return False
    return not any(marker in path for marker in POST_DETAIL_EXCLUDED)


def classify_path(path: str) -> RouteTier:
    """
    Put a path in exactly one tier. Public is evaluated first, so post detail
    views stay public; edit and create paths fall through to protected.
    Paths no rule mentions (API, static) are public at this layer.
    """
    if path in PUBLIC_ROUTES or _is_post_detail(path):
        return RouteTier.PUBLIC
    if any(path.startswith(prefix) for prefix in PROTECTED_PREFIXES):
        return RouteTier.PROTECTED
    if any(path.startswith(prefix) for prefix in ADMIN_PREFIXES):
        return RouteTier.ADMIN
    return RouteTier.PUBLIC


def gate_decision(path: str, has_token: bool) -> GateDecision:
    tier = classify_path(path)
    if tier in (RouteTier.PROTECTED, RouteTier.ADMIN) and not has_token:
        return GateDecision.REDIRECT_TO_LOGIN
    return GateDecision.ALLOW


class RouteGateMiddleware(BaseHTTPMiddleware):
    """Redirect gated page requests without a token cookie to the login page."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        has_token = bool(request.cookies.get(TOKEN_COOKIE_NAME))
        if gate_decision(path, has_token) is GateDecision.REDIRECT_TO_LOGIN:
            logger.debug("Route gate redirecting %s to %s", path, LOGIN_PATH)
            return RedirectResponse(LOGIN_PATH, status_code=303)
        return await call_next(request)
