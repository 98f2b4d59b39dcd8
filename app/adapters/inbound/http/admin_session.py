"""Admin session gate backed by the signed session cookie."""

import hmac

from fastapi import Request

from app.application.errors import AdminUnauthorizedError
from app.infrastructure.config.settings import settings

ADMIN_SESSION_KEY = "admin"
ADMIN_SESSION_COOKIE = "aura_admin"


def is_admin(request: Request) -> bool:
    return bool(request.session.get(ADMIN_SESSION_KEY))


def require_admin(request: Request) -> None:
    """
    FastAPI dependency guarding admin routes.

    Raises:
        AdminUnauthorizedError: If the session does not carry the admin flag
    """
    if not is_admin(request):
        raise AdminUnauthorizedError()


def check_admin_password(password: str) -> bool:
    """
    Compare a password with ADMIN_PASSWORD in constant time.

    An unconfigured ADMIN_PASSWORD never matches.
    """
    expected = settings.admin_password
    if not expected or not password:
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
