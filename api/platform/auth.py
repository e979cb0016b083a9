"""
Admin gate: one shared-secret cookie compared against `ADMIN_SECRET`.
"""

from __future__ import annotations

import secrets

from fastapi import HTTPException
from starlette.requests import Request

from api.platform.env import get_admin_secret
from api.platform.observability.request_logging import http_context
from api.platform.observability.smart_logger import SmartLogger

ADMIN_SESSION_COOKIE = "admin_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7


def is_admin(request: Request) -> bool:
    token = request.cookies.get(ADMIN_SESSION_COOKIE)
    if not token:
        return False
    return secrets.compare_digest(token.encode("utf-8"), get_admin_secret().encode("utf-8"))


async def require_admin(request: Request) -> None:
    """Route dependency: 401 before the handler runs, so nothing is partially applied."""
    if is_admin(request):
        return
    SmartLogger.log(
        "WARNING",
        "Admin-only route called without a valid session cookie.",
        category="api.auth.denied",
        params=http_context(request),
    )
    raise HTTPException(status_code=401, detail="Unauthorized")
