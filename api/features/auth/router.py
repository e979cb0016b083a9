"""
Admin Auth API (feature router)

A single shared password unlocks the editor. Success sets the `admin_session`
cookie to `ADMIN_SECRET`; admin-only routes compare the cookie against it.
"""

from __future__ import annotations

import secrets
from typing import Any

from fastapi import APIRouter, HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from api.features.auth.auth_contracts import LoginRequest, SessionStatus
from api.platform.auth import ADMIN_SESSION_COOKIE, SESSION_MAX_AGE, is_admin
from api.platform.env import get_admin_password, get_admin_secret, is_production
from api.platform.observability.request_logging import http_context
from api.platform.observability.smart_logger import SmartLogger

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> JSONResponse:
    expected = get_admin_password()
    if not expected:
        SmartLogger.log(
            "ERROR",
            "Admin login attempted but ADMIN_PASSWORD is not set.",
            category="api.auth.login.unconfigured",
            params=http_context(request),
        )
        raise HTTPException(status_code=500, detail="Admin login not configured")

    if not secrets.compare_digest(body.password.encode("utf-8"), expected.encode("utf-8")):
        SmartLogger.log(
            "WARNING",
            "Admin login rejected: wrong password.",
            category="api.auth.login.denied",
            params=http_context(request),
        )
        raise HTTPException(status_code=401, detail="Invalid password")

    response = JSONResponse({"success": True})
    response.set_cookie(
        key=ADMIN_SESSION_COOKIE,
        value=get_admin_secret(),
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=is_production(),
    )
    SmartLogger.log(
        "INFO",
        "Admin login accepted: session cookie issued.",
        category="api.auth.login",
        params={**http_context(request), "secure_cookie": is_production()},
    )
    return response


@router.post("/logout")
async def logout(request: Request) -> JSONResponse:
    response = JSONResponse({"success": True})
    response.delete_cookie(key=ADMIN_SESSION_COOKIE, path="/")
    SmartLogger.log("INFO", "Admin logged out.", category="api.auth.logout", params=http_context(request))
    return response


@router.get("/session")
async def session_status(request: Request) -> dict[str, Any]:
    return SessionStatus(admin=is_admin(request)).model_dump()
