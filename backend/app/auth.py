"""Admin capability check.

Admin routes depend on ``require_admin``, which asks an ``AdminCheck`` whether
the request may moderate. The default check compares the ``x-admin-secret``
header with the configured ``ADMIN_SECRET``; swap it by overriding
``get_admin_check`` (``app.dependency_overrides[get_admin_check] = ...``).
"""
import logging
from typing import Protocol

from fastapi import Depends, Request

from app.config import settings
from app.errors import UnauthorizedError

logger = logging.getLogger(__name__)

ADMIN_HEADER = "x-admin-secret"


class AdminCheck(Protocol):
    def is_admin(self, request: Request) -> bool: ...


class SharedSecretCheck:
    """Plain equality between a request header and a configured secret."""

    def __init__(self, secret: str, header: str = ADMIN_HEADER):
        self.secret = secret
        self.header = header

    def is_admin(self, request: Request) -> bool:
        supplied = request.headers.get(self.header)
        return bool(supplied) and bool(self.secret) and supplied == self.secret


def get_admin_check() -> AdminCheck:
    return SharedSecretCheck(settings.ADMIN_SECRET)


def require_admin(request: Request, check: AdminCheck = Depends(get_admin_check)) -> None:
    """Dependency for admin-only routes; 403 unless the check passes."""
    if not check.is_admin(request):
        logger.warning("Rejected admin request to %s %s", request.method, request.url.path)
        raise UnauthorizedError()
