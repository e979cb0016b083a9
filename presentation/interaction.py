"""
Portfolio Presenter - pan/zoom/drag interaction

Toolkit-independent state machine behind the interactive canvases. A host feeds
pointer and wheel events in screen coordinates; the canvas keeps its own
viewport and gesture state and reports every node move through `on_change`
with the whole updated collection. The collection handed in is never mutated.

States:
    IDLE -> PANNING           pointer-down on the background
    IDLE -> DRAGGING_NODE     pointer-down on a node
    PANNING/DRAGGING -> IDLE  pointer-up or pointer-leave
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from .content import Position, StrategyContent, TimelineMilestone
from .errors import UnknownNodeError
from .layout import (
    CARD_HEIGHT,
    CARD_WIDTH,
    DRAG_PAD_X,
    DRAG_PAD_Y,
    SEA_HEIGHT,
    SEA_WIDTH,
    Point,
    StrategyLayout,
    TimelineLayout,
    build_path,
    content_extent,
    layout_strategy,
    layout_timeline,
    resolve_strategy_positions,
    resolve_timeline_positions,
    timeline_base_size,
)
from .overlay import DetailOverlay, ExpansionState

MIN_ZOOM = 0.25
MAX_ZOOM = 2.0
ZOOM_WHEEL_FACTOR = 0.003
DRAG_THRESHOLD = 5
TIMELINE_INITIAL_ZOOM = 0.85


def clamp_zoom(scale: float) -> float:
    return min(MAX_ZOOM, max(MIN_ZOOM, scale))


class InteractionState(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    DRAGGING_NODE = "dragging_node"


class TargetKind(str, Enum):
    BACKGROUND = "background"
    CONTROL = "control"
    NODE = "node"


@dataclass(frozen=True)
class PointerTarget:
    """What a pointer-down landed on."""

    kind: TargetKind
    node_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == TargetKind.NODE and not self.node_id:
            raise ValueError("a node target needs a node_id")

    @classmethod
    def background(cls) -> "PointerTarget":
        return cls(TargetKind.BACKGROUND)

    @classmethod
    def control(cls) -> "PointerTarget":
        return cls(TargetKind.CONTROL)

    @classmethod
    def node(cls, node_id: str) -> "PointerTarget":
        return cls(TargetKind.NODE, node_id)


@dataclass(frozen=True)
class DragBounds:
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: Optional[float] = None
    max_y: Optional[float] = None

    def clamp(self, point: Point) -> Point:
        x = max(self.min_x, point.x)
        y = max(self.min_y, point.y)
        if self.max_x is not None:
            x = min(self.max_x, x)
        if self.max_y is not None:
            y = min(self.max_y, y)
        return Point(x, y)


# Timeline nodes only stop at the origin; strategy cards also stay near the sea.
TIMELINE_BOUNDS = DragBounds()
STRATEGY_BOUNDS = DragBounds(
    max_x=SEA_WIDTH - CARD_WIDTH + DRAG_PAD_X,
    max_y=SEA_HEIGHT - CARD_HEIGHT + DRAG_PAD_Y,
)


@dataclass
class Viewport:
    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = 1.0

    def as_dict(self) -> dict:
        return {"pan": {"x": self.pan_x, "y": self.pan_y}, "scale": self.scale}


@dataclass
class _Gesture:
    origin: Point
    start: Point
    pressed_id: Optional[str] = None
    owner_id: Optional[str] = None
    dragged: bool = False


ChangeCallback = Callable[[List[Any]], None]


class GraphCanvas:
    """Viewport plus gesture tracking shared by the timeline and strategy canvases."""

    pannable = True
    zoomable = True
    expandable = True
    bounds = DragBounds()

    def __init__(self, on_change: Optional[ChangeCallback] = None, scale: float = 1.0):
        self.on_change = on_change
        self.viewport = Viewport(scale=clamp_zoom(scale))
        self.state = InteractionState.IDLE
        self.expansion = ExpansionState()
        self._gesture: Optional[_Gesture] = None

    # ------------------------------------------------------------------
    # Collection hooks
    # ------------------------------------------------------------------

    def node_ids(self) -> List[str]:
        raise NotImplementedError

    def positions(self) -> List[Point]:
        raise NotImplementedError

    def collection(self) -> List[Any]:
        raise NotImplementedError

    def drag_owner(self, node_id: str) -> str:
        if node_id not in self.node_ids():
            raise UnknownNodeError(node_id)
        return node_id

    def _move(self, node_id: str, point: Point) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Derived
    # ------------------------------------------------------------------

    def position_of(self, node_id: str) -> Point:
        ids = self.node_ids()
        if node_id not in ids:
            raise UnknownNodeError(node_id)
        return self.positions()[ids.index(node_id)]

    def path(self) -> str:
        return build_path(self.positions())

    @property
    def dragging_node_id(self) -> Optional[str]:
        if self.state != InteractionState.DRAGGING_NODE or self._gesture is None:
            return None
        return self._gesture.owner_id

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_pointer_down(self, x: float, y: float, target: PointerTarget) -> InteractionState:
        if self.state != InteractionState.IDLE:
            return self.state
        origin = Point(x, y)
        if target.kind == TargetKind.NODE:
            owner = self.drag_owner(target.node_id)
            self._gesture = _Gesture(
                origin=origin,
                start=self.position_of(owner),
                pressed_id=target.node_id,
                owner_id=owner,
            )
            self.state = InteractionState.DRAGGING_NODE
        elif target.kind == TargetKind.BACKGROUND and self.pannable:
            self._gesture = _Gesture(origin=origin, start=Point(self.viewport.pan_x, self.viewport.pan_y))
            self.state = InteractionState.PANNING
        return self.state

    def on_pointer_move(self, x: float, y: float) -> bool:
        """Returns True when the move changed the pan offset or a node position."""
        g = self._gesture
        if g is None or self.state == InteractionState.IDLE:
            return False
        sx, sy = x - g.origin.x, y - g.origin.y

        if self.state == InteractionState.PANNING:
            self.viewport.pan_x = g.start.x + sx
            self.viewport.pan_y = g.start.y + sy
            return True

        if not g.dragged:
            if math.hypot(sx, sy) <= DRAG_THRESHOLD:
                return False
            g.dragged = True
        scale = self.viewport.scale
        target = self.bounds.clamp(g.start.offset(sx / scale, sy / scale))
        self._move(g.owner_id, target)
        if self.on_change is not None:
            self.on_change(self.collection())
        return True

    def on_pointer_up(self) -> Optional[str]:
        """
        Ends the gesture. A node press that never crossed the drag threshold is a
        click: it toggles that node's expansion and the node id is returned.
        """
        g = self._gesture
        clicked = None
        if self.state == InteractionState.DRAGGING_NODE and g is not None and not g.dragged:
            clicked = g.pressed_id
            if self.expandable:
                self.expansion.toggle(clicked)
        self._end_gesture()
        return clicked

    def on_pointer_leave(self) -> None:
        self._end_gesture()

    def on_wheel(self, delta_y: float) -> float:
        # Scale about the viewport center: the pan offset is left alone.
        if self.zoomable:
            self.viewport.scale = clamp_zoom(self.viewport.scale - delta_y * ZOOM_WHEEL_FACTOR)
        return self.viewport.scale

    def toggle_expanded(self, node_id: str) -> Optional[str]:
        return self.expansion.toggle(node_id)

    def _end_gesture(self) -> None:
        self._gesture = None
        self.state = InteractionState.IDLE


class TimelineCanvas(GraphCanvas):
    """Career timeline: zig-zag default layout, draggable milestones, one road through them."""

    bounds = TIMELINE_BOUNDS

    def __init__(
        self,
        milestones: Sequence[TimelineMilestone],
        on_change: Optional[ChangeCallback] = None,
        scale: float = TIMELINE_INITIAL_ZOOM,
    ):
        super().__init__(on_change=on_change, scale=scale)
        self._milestones: List[TimelineMilestone] = list(milestones)
        self.overlay = DetailOverlay()

    @property
    def milestones(self) -> List[TimelineMilestone]:
        return list(self._milestones)

    def set_nodes(self, milestones: Sequence[TimelineMilestone]) -> None:
        self._milestones = list(milestones)

    def node_ids(self) -> List[str]:
        return [m.id for m in self._milestones]

    def positions(self) -> List[Point]:
        return resolve_timeline_positions(self._milestones)

    def collection(self) -> List[TimelineMilestone]:
        return list(self._milestones)

    def drag_owner(self, node_id: str) -> str:
        # Pressing a child card drags the parent it hangs from.
        for m in self._milestones:
            if m.id == node_id:
                return m.id
            if any(c.id == node_id for c in m.children or []):
                return m.id
        raise UnknownNodeError(node_id)

    def _move(self, node_id: str, point: Point) -> None:
        self._milestones = [
            m.model_copy(update={"position": Position(x=point.x, y=point.y)}) if m.id == node_id else m
            for m in self._milestones
        ]

    def extent(self) -> tuple[float, float]:
        base_width, base_height = timeline_base_size(len(self._milestones))
        return content_extent(self.positions(), base_width, base_height)

    def layout(self) -> TimelineLayout:
        return layout_timeline(self._milestones)

    def detail_node(self) -> Optional[TimelineMilestone]:
        return self.overlay.resolve(self._milestones)


class StrategyCanvas(GraphCanvas):
    """Strategy cards floating in a fixed sea; drag only, no pan, zoom or expansion."""

    pannable = False
    zoomable = False
    expandable = False
    bounds = STRATEGY_BOUNDS

    def __init__(self, strategy: StrategyContent, on_change: Optional[ChangeCallback] = None):
        super().__init__(on_change=on_change, scale=1.0)
        self._strategy = strategy
        self._positions: List[Point] = resolve_strategy_positions(strategy)

    def set_nodes(self, strategy: StrategyContent) -> None:
        self._strategy = strategy
        self._positions = resolve_strategy_positions(strategy)

    def node_ids(self) -> List[str]:
        return [str(i) for i in range(len(self._positions))]

    def positions(self) -> List[Point]:
        return list(self._positions)

    def collection(self) -> List[Position]:
        return [Position(x=p.x, y=p.y) for p in self._positions]

    def _move(self, node_id: str, point: Point) -> None:
        index = int(node_id)
        self._positions = [point if i == index else p for i, p in enumerate(self._positions)]

    def layout(self) -> StrategyLayout:
        return layout_strategy(self._strategy.model_copy(update={"pointPositions": self.collection()}))
