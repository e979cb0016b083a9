"""
Content API (feature router)

Business capability:
- Serve the whole presentation document to the public page
- Overwrite it from the admin editor (whole-document save)
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from starlette.requests import Request

from presentation.content import PresentationContent

from api.platform.auth import require_admin
from api.platform.content_store import ContentStoreError, load_content, save_content
from api.platform.observability.request_logging import http_context, summarize_for_log
from api.platform.observability.smart_logger import SmartLogger

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("")
async def get_content(request: Request) -> dict[str, Any]:
    try:
        content = load_content()
    except (ContentStoreError, ValidationError) as e:
        SmartLogger.log(
            "ERROR",
            "Content load failed: document missing or unparsable.",
            category="api.content.get.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail="Failed to load content") from e

    SmartLogger.log(
        "INFO",
        "Content served.",
        category="api.content.get",
        params={
            **http_context(request),
            "counts": {
                "timeline": len(content.timeline),
                "skills": len(content.skills),
                "projects": len(content.projects),
                "lessons": len(content.lessons),
            },
        },
    )
    return content.to_json_data()


@router.put("", dependencies=[Depends(require_admin)])
async def put_content(request: Request, payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
    """Replace the stored document with the submitted one. Last write wins."""
    try:
        content = PresentationContent.from_json_data(payload)
    except ValidationError as e:
        SmartLogger.log(
            "WARNING",
            "Content save rejected: submitted document does not match the content shape.",
            category="api.content.put.invalid",
            params={**http_context(request), "errors": summarize_for_log(e.errors(include_url=False))},
        )
        raise HTTPException(status_code=422, detail="Invalid content document") from e

    try:
        written = save_content(content)
    except ContentStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to save content") from e

    SmartLogger.log(
        "INFO",
        "Content saved from admin editor.",
        category="api.content.put",
        params={**http_context(request), "bytes": written},
    )
    return {"success": True}
