"""
Canvas Contracts (DTOs)

Business capability: drive a server-held timeline or strategy canvas with the same
pointer/wheel/key events the browser produces, and read back its snapshot.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from presentation.interaction import PointerTarget, TargetKind


class CanvasKind(str, Enum):
    TIMELINE = "timeline"
    STRATEGY = "strategy"


class CreateSessionRequest(BaseModel):
    kind: CanvasKind = CanvasKind.TIMELINE


class TargetSpec(BaseModel):
    kind: TargetKind = TargetKind.BACKGROUND
    nodeId: Optional[str] = None

    @model_validator(mode="after")
    def _node_needs_id(self) -> "TargetSpec":
        if self.kind == TargetKind.NODE and not self.nodeId:
            raise ValueError("a node target needs a nodeId")
        return self

    def to_target(self) -> PointerTarget:
        return PointerTarget(self.kind, self.nodeId)


class PointerDownEvent(BaseModel):
    type: Literal["pointer_down"]
    x: float
    y: float
    target: TargetSpec = Field(default_factory=TargetSpec)


class PointerMoveEvent(BaseModel):
    type: Literal["pointer_move"]
    x: float
    y: float


class PointerUpEvent(BaseModel):
    type: Literal["pointer_up"]


class PointerLeaveEvent(BaseModel):
    type: Literal["pointer_leave"]


class WheelEvent(BaseModel):
    type: Literal["wheel"]
    deltaY: float


class KeyEvent(BaseModel):
    type: Literal["key"]
    key: str


class OpenDetailEvent(BaseModel):
    type: Literal["open_detail"]
    nodeId: str


class CloseDetailEvent(BaseModel):
    type: Literal["close_detail"]


class BackdropClickEvent(BaseModel):
    type: Literal["backdrop_click"]


class ToggleEvent(BaseModel):
    type: Literal["toggle"]
    nodeId: str


CanvasEvent = Annotated[
    Union[
        PointerDownEvent,
        PointerMoveEvent,
        PointerUpEvent,
        PointerLeaveEvent,
        WheelEvent,
        KeyEvent,
        OpenDetailEvent,
        CloseDetailEvent,
        BackdropClickEvent,
        ToggleEvent,
    ],
    Field(discriminator="type"),
]


class EventBatch(BaseModel):
    """Events are applied in order; a later event sees the effect of earlier ones."""

    events: List[CanvasEvent] = Field(default_factory=list)


class EventOutcome(BaseModel):
    type: str
    changed: bool = False
    clicked: Optional[str] = None


class CanvasSnapshot(BaseModel):
    id: str
    kind: CanvasKind
    state: str
    viewport: dict[str, Any]
    expandedId: Optional[str] = None
    draggingNodeId: Optional[str] = None
    overlayNode: Optional[dict[str, Any]] = None
    layout: dict[str, Any]
    outcomes: List[EventOutcome] = Field(default_factory=list)
