from __future__ import annotations

from fastapi import APIRouter
from starlette.requests import Request

from api.platform.content_store import ContentStoreError, content_path, load_content
from api.platform.observability.request_logging import http_context
from api.platform.observability.smart_logger import SmartLogger

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check(request: Request):
    """Health check endpoint."""
    SmartLogger.log(
        "INFO",
        "Health check requested: verifying the content document is readable.",
        category="api.health.request",
        params={**http_context(request), "content_file": str(content_path())},
    )
    try:
        load_content()
    except (ContentStoreError, ValueError) as e:
        SmartLogger.log(
            "ERROR",
            "Health check failed: content document could not be loaded.",
            category="api.health.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        return {"status": "unhealthy", "error": str(e)}

    SmartLogger.log(
        "INFO",
        "Health check OK: content document loaded.",
        category="api.health.ok",
        params={**http_context(request), "content": "readable"},
    )
    return {"status": "healthy", "content": "readable"}
