from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import Response

from presentation.content import PresentationContent
from presentation.layout import layout_strategy, layout_timeline
from presentation.render import render_timeline_svg

from api.features.canvas.canvas_projection import strategy_layout_json, timeline_layout_json
from api.platform.content_store import ContentStoreError, load_content
from api.platform.observability.request_logging import http_context
from api.platform.observability.smart_logger import SmartLogger

router = APIRouter()


def load_document(request: Request) -> PresentationContent:
    try:
        return load_content()
    except (ContentStoreError, ValidationError) as e:
        SmartLogger.log(
            "ERROR",
            "Canvas request failed: content document could not be loaded.",
            category="api.canvas.content.error",
            params={**http_context(request), "error": {"type": type(e).__name__, "message": str(e)}},
        )
        raise HTTPException(status_code=500, detail="Failed to load content") from e


@router.get("/timeline/layout")
async def get_timeline_layout(request: Request) -> dict[str, Any]:
    """
    GET /api/canvas/timeline/layout - positions, road path and content extent
    for the stored timeline. Manual positions win over the zig-zag default.
    """
    content = load_document(request)
    layout = layout_timeline(content.timeline)
    SmartLogger.log(
        "INFO",
        "Timeline layout computed.",
        category="api.canvas.timeline.layout",
        params={
            **http_context(request),
            "nodes": len(layout.nodes),
            "manual": sum(1 for n in layout.nodes if n.manual),
            "extent": {"width": layout.width, "height": layout.height},
        },
    )
    return timeline_layout_json(layout)


@router.get("/timeline.svg")
async def get_timeline_svg(request: Request) -> Response:
    content = load_document(request)
    svg = render_timeline_svg(layout_timeline(content.timeline), content.timeline)
    SmartLogger.log(
        "INFO",
        "Timeline SVG rendered.",
        category="api.canvas.timeline.svg",
        params={**http_context(request), "bytes": len(svg)},
    )
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/strategy/layout")
async def get_strategy_layout(request: Request) -> dict[str, Any]:
    content = load_document(request)
    layout = layout_strategy(content.strategy)
    SmartLogger.log(
        "INFO",
        "Strategy layout computed.",
        category="api.canvas.strategy.layout",
        params={**http_context(request), "cards": len(layout.positions)},
    )
    return strategy_layout_json(layout)
