from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from starlette.requests import Request

from presentation.editing import set_point_positions, update_milestone
from presentation.errors import UnknownNodeError
from presentation.interaction import GraphCanvas, StrategyCanvas, TimelineCanvas
from presentation.overlay import find_node

from api.features.canvas.canvas_contracts import (
    BackdropClickEvent,
    CanvasEvent,
    CanvasKind,
    CanvasSnapshot,
    CloseDetailEvent,
    CreateSessionRequest,
    EventBatch,
    EventOutcome,
    KeyEvent,
    OpenDetailEvent,
    PointerDownEvent,
    PointerLeaveEvent,
    PointerMoveEvent,
    PointerUpEvent,
    ToggleEvent,
    WheelEvent,
)
from api.features.canvas.canvas_projection import strategy_layout_json, timeline_layout_json
from api.features.canvas.canvas_session_store import (
    CanvasSession,
    active_session_count,
    create_session,
    delete_session,
    get_session,
)
from api.features.canvas.routes.canvas_layout import load_document
from api.platform.auth import require_admin
from api.platform.content_store import ContentStoreError, save_content
from api.platform.observability.request_logging import http_context, summarize_for_log
from api.platform.observability.smart_logger import SmartLogger

router = APIRouter(prefix="/sessions")


def _require_session(session_id: str, request: Request) -> CanvasSession:
    session = get_session(session_id)
    if session is None:
        SmartLogger.log(
            "WARNING",
            "Canvas session not found.",
            category="api.canvas.session.not_found",
            params={**http_context(request), "session_id": session_id},
        )
        raise HTTPException(status_code=404, detail=f"Canvas session {session_id} not found")
    return session


def _snapshot(session: CanvasSession, outcomes: Optional[list[EventOutcome]] = None) -> dict[str, Any]:
    canvas = session.canvas
    overlay_node = None
    if isinstance(canvas, TimelineCanvas):
        layout = timeline_layout_json(canvas.layout())
        node = canvas.detail_node()
        if node is not None:
            overlay_node = node.model_dump(mode="json", exclude_none=True)
    else:
        layout = strategy_layout_json(canvas.layout())
    return CanvasSnapshot(
        id=session.id,
        kind=session.kind,
        state=canvas.state.value,
        viewport=canvas.viewport.as_dict(),
        expandedId=canvas.expansion.expanded_id,
        draggingNodeId=canvas.dragging_node_id,
        overlayNode=overlay_node,
        layout=layout,
        outcomes=outcomes or [],
    ).model_dump()


def _timeline_only(canvas: GraphCanvas, event_type: str) -> TimelineCanvas:
    if not isinstance(canvas, TimelineCanvas):
        raise HTTPException(status_code=400, detail=f"Event {event_type} is not supported on a strategy canvas")
    return canvas


def _apply_event(canvas: GraphCanvas, event: CanvasEvent) -> EventOutcome:
    if isinstance(event, PointerDownEvent):
        before = canvas.state
        after = canvas.on_pointer_down(event.x, event.y, event.target.to_target())
        return EventOutcome(type=event.type, changed=after != before)
    if isinstance(event, PointerMoveEvent):
        return EventOutcome(type=event.type, changed=canvas.on_pointer_move(event.x, event.y))
    if isinstance(event, PointerUpEvent):
        clicked = canvas.on_pointer_up()
        return EventOutcome(type=event.type, changed=clicked is not None, clicked=clicked)
    if isinstance(event, PointerLeaveEvent):
        canvas.on_pointer_leave()
        return EventOutcome(type=event.type)
    if isinstance(event, WheelEvent):
        before = canvas.viewport.scale
        return EventOutcome(type=event.type, changed=canvas.on_wheel(event.deltaY) != before)
    if isinstance(event, KeyEvent):
        if isinstance(canvas, TimelineCanvas):
            return EventOutcome(type=event.type, changed=canvas.overlay.on_key(event.key))
        return EventOutcome(type=event.type)

    timeline = _timeline_only(canvas, event.type)
    if isinstance(event, OpenDetailEvent):
        if find_node(timeline.milestones, event.nodeId) is None:
            raise UnknownNodeError(event.nodeId)
        timeline.overlay.open(event.nodeId)
        return EventOutcome(type=event.type, changed=True)
    if isinstance(event, (CloseDetailEvent, BackdropClickEvent)):
        was_open = timeline.overlay.is_open
        if isinstance(event, BackdropClickEvent):
            timeline.overlay.on_backdrop_click()
        else:
            timeline.overlay.close()
        return EventOutcome(type=event.type, changed=was_open)
    if isinstance(event, ToggleEvent):
        if find_node(timeline.milestones, event.nodeId) is None:
            raise UnknownNodeError(event.nodeId)
        timeline.toggle_expanded(event.nodeId)
        return EventOutcome(type=event.type, changed=True)
    raise HTTPException(status_code=400, detail=f"Unsupported event {event.type}")


@router.post("")
async def create_canvas_session(body: CreateSessionRequest, request: Request) -> dict[str, Any]:
    """
    POST /api/canvas/sessions - seed a canvas from the stored document.
    Timeline canvases start at the initial zoom; strategy canvases are fixed at 1.
    """
    content = load_document(request)
    if body.kind == CanvasKind.TIMELINE:
        canvas: GraphCanvas = TimelineCanvas(content.timeline)
    else:
        canvas = StrategyCanvas(content.strategy)
    session = create_session(body.kind, canvas)
    SmartLogger.log(
        "INFO",
        "Canvas session created.",
        category="api.canvas.session.create",
        params={
            **http_context(request),
            "session_id": session.id,
            "kind": body.kind.value,
            "nodes": len(canvas.node_ids()),
            "active_sessions": active_session_count(),
        },
    )
    return _snapshot(session)


@router.get("/{session_id}")
async def get_canvas_session(session_id: str, request: Request) -> dict[str, Any]:
    return _snapshot(_require_session(session_id, request))


@router.post("/{session_id}/events")
async def post_canvas_events(session_id: str, body: EventBatch, request: Request) -> dict[str, Any]:
    """
    Apply events in order. An event naming an unknown node stops the batch with 404;
    events before it stay applied, as they would in the browser.
    """
    session = _require_session(session_id, request)
    outcomes: list[EventOutcome] = []
    for event in body.events:
        try:
            outcomes.append(_apply_event(session.canvas, event))
        except UnknownNodeError as e:
            SmartLogger.log(
                "WARNING",
                "Canvas event referenced an unknown node.",
                category="api.canvas.session.unknown_node",
                params={
                    **http_context(request),
                    "session_id": session_id,
                    "event": summarize_for_log(event.model_dump()),
                    "applied": len(outcomes),
                },
            )
            raise HTTPException(status_code=404, detail=str(e)) from e

    SmartLogger.log(
        "INFO",
        "Canvas events applied.",
        category="api.canvas.session.events",
        params={
            **http_context(request),
            "session_id": session_id,
            "events": len(outcomes),
            "changed": sum(1 for o in outcomes if o.changed),
            "state": session.canvas.state.value,
        },
    )
    return _snapshot(session, outcomes)


@router.post("/{session_id}/commit", dependencies=[Depends(require_admin)])
async def commit_canvas_session(session_id: str, request: Request) -> dict[str, Any]:
    """
    Write the session's node positions into the stored document.

    Timeline: each manually placed milestone's position is copied onto the
    milestone with the same id; milestones deleted since the session started are skipped.
    Strategy: the full position list replaces `pointPositions`; a changed point
    count since the session started is a 409.
    """
    session = _require_session(session_id, request)
    content = load_document(request)
    canvas = session.canvas

    if isinstance(canvas, TimelineCanvas):
        written = 0
        for m in canvas.milestones:
            if m.position is None:
                continue
            try:
                content = update_milestone(content, m.id, position=m.position)
            except UnknownNodeError:
                continue
            written += 1
    else:
        positions = canvas.collection()
        if len(positions) != len(content.strategy.points):
            SmartLogger.log(
                "WARNING",
                "Canvas commit rejected: strategy point count changed since the session started.",
                category="api.canvas.session.commit.conflict",
                params={
                    **http_context(request),
                    "session_id": session_id,
                    "session_points": len(positions),
                    "stored_points": len(content.strategy.points),
                },
            )
            raise HTTPException(status_code=409, detail="Strategy points changed since the session started")
        content = set_point_positions(content, positions)
        written = len(positions)

    try:
        save_content(content)
    except ContentStoreError as e:
        raise HTTPException(status_code=500, detail="Failed to save content") from e

    SmartLogger.log(
        "INFO",
        "Canvas session committed to the content document.",
        category="api.canvas.session.commit",
        params={**http_context(request), "session_id": session_id, "positions": written, "changes": session.changes},
    )
    return {"success": True, "positions": written}


@router.delete("/{session_id}")
async def delete_canvas_session(session_id: str, request: Request) -> dict[str, Any]:
    _require_session(session_id, request)
    delete_session(session_id)
    SmartLogger.log(
        "INFO",
        "Canvas session deleted.",
        category="api.canvas.session.delete",
        params={**http_context(request), "session_id": session_id, "active_sessions": active_session_count()},
    )
    return {"success": True}
