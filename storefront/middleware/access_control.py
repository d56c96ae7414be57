"""Access-control middleware for admin pages and admin-only APIs.

Only requests under the protected prefixes (/dashboard, /admin,
/api/products, /api/upload) are inspected; everything else passes
straight through. For inspected requests a pre-authorization check runs
first (public prefixes, or GET /api/products, need no token), then the
role decision:

- /dashboard, /admin: non-admins are redirected to the login page.
- /api/products with a non-GET method, /api/upload: non-admins get
  401 {"error": "Unauthorized"}.

The token comes from the Authorization Bearer header or the session
cookie. It is only read, never refreshed.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Callable
from urllib.parse import quote

from starlette.requests import cookie_parser
from starlette.responses import JSONResponse, RedirectResponse

from storefront.core.config import get_settings
from storefront.infrastructure.security.jwt import AuthToken, decode_auth_token

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES: tuple[str, ...] = ("/dashboard", "/admin", "/api/products", "/api/upload")
ADMIN_PAGE_PREFIXES: tuple[str, ...] = ("/dashboard", "/admin")
PRODUCTS_API_PREFIX = "/api/products"
UPLOAD_API_PREFIX = "/api/upload"


class Outcome(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"
    DENY = "deny"


@dataclass(frozen=True)
class AccessDecision:
    """Result of decide_access: outcome plus redirect target when relevant."""

    outcome: Outcome
    location: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


ALLOW = AccessDecision(Outcome.ALLOW)
DENY = AccessDecision(Outcome.DENY)


def _under(path: str, prefix: str) -> bool:
    """True when path is prefix itself or a path segment below it."""
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def is_protected_path(path: str) -> bool:
    """Return True for paths the middleware applies to."""
    return any(_under(path, prefix) for prefix in PROTECTED_PREFIXES)


def is_pre_authorized(path: str, method: str, public_prefixes: Sequence[str]) -> bool:
    """Pre-authorization check: may this request proceed without a token?

    Plain string-prefix semantics, so the default "/" prefix admits every
    path; the role decision in decide_access still applies afterwards.
    """
    if any(path.startswith(prefix) for prefix in public_prefixes):
        return True
    return _under(path, PRODUCTS_API_PREFIX) and method.upper() == "GET"


def decide_access(
    path: str,
    method: str,
    token: AuthToken | None,
    *,
    public_prefixes: Sequence[str],
    login_path: str = "/login",
) -> AccessDecision:
    """Decide one request. Pure function of path, method and token.

    Args:
        path: Request path (no query string).
        method: HTTP method.
        token: Decoded session token, or None when absent or invalid.
        public_prefixes: Prefixes admitted by the pre-authorization check.
        login_path: Sign-in page for redirects.

    Returns:
        ALLOW, a redirect to login_path (with callbackUrl when the
        pre-authorization check failed), or DENY (401).
    """
    if token is None and not is_pre_authorized(path, method, public_prefixes):
        return AccessDecision(
            Outcome.REDIRECT, f"{login_path}?callbackUrl={quote(path, safe='')}"
        )
    is_admin = token is not None and token.is_admin
    if any(_under(path, prefix) for prefix in ADMIN_PAGE_PREFIXES):
        return ALLOW if is_admin else AccessDecision(Outcome.REDIRECT, login_path)
    if _under(path, PRODUCTS_API_PREFIX) and method.upper() != "GET":
        return ALLOW if is_admin else DENY
    if _under(path, UPLOAD_API_PREFIX):
        return ALLOW if is_admin else DENY
    return ALLOW


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def token_from_scope(scope: dict, cookie_name: str) -> str | None:
    """Return the raw token from 'Authorization: Bearer' or the session cookie."""
    auth = _header(scope, b"authorization")
    if auth and auth[:7].lower() == "bearer ":
        return auth[7:].strip() or None
    raw_cookie = _header(scope, b"cookie")
    if raw_cookie:
        return cookie_parser(raw_cookie).get(cookie_name) or None
    return None


def AccessControlMiddleware(app: Callable) -> Callable:
    """Gate protected paths by token role. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or not is_protected_path(scope["path"]):
            await app(scope, receive, send)
            return

        settings = get_settings()
        token = decode_auth_token(token_from_scope(scope, settings.session_cookie_name))
        decision = decide_access(
            scope["path"],
            scope["method"],
            token,
            public_prefixes=settings.public_path_prefixes,
            login_path=settings.login_path,
        )
        if decision.outcome is Outcome.REDIRECT:
            logger.info("Redirecting %s %s to %s", scope["method"], scope["path"], decision.location)
            response = RedirectResponse(decision.location or settings.login_path, status_code=307)
            await response(scope, receive, send)
            return
        if decision.outcome is Outcome.DENY:
            logger.info("Denied %s %s", scope["method"], scope["path"])
            await JSONResponse({"error": "Unauthorized"}, status_code=401)(scope, receive, send)
            return

        await app(scope, receive, send)

    return asgi_app
