"""
Portfolio Presenter - canvas layout

Default positions for unplaced nodes, resolution of manual overrides, content
extent and the connecting path. Everything here is a pure function of its
arguments so re-renders never move an unplaced node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .content import NodeShape, StrategyContent, TimelineMilestone
from .palette import Gradient, gradient_for

# Timeline canvas
SEGMENT_WIDTH = 280
TIMELINE_HEIGHT = 320
TIMELINE_MIN_WIDTH = 600
TOP_BAND = 0.18
BOTTOM_BAND = 0.82
CONTENT_PADDING = 100

# Children hang under their parent card
CHILD_WIDTH = 200
CHILD_GAP = 8
CHILD_OFFSET_Y = 120

# Strategy "sea"
SEA_WIDTH = 1100
SEA_HEIGHT = 650
CARD_WIDTH = 280
CARD_HEIGHT = 80
DRAG_PAD_X = 120
DRAG_PAD_Y = 80
V_TOP = 24
V_ROW_STEP = 72
V_X_MARGIN = 24
V_X_STEP = 44


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


class Band(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


# ==========================================
# Default layouts
# ==========================================

def timeline_band(index: int) -> Band:
    if index == 0:
        return Band.CENTER
    return Band.TOP if index % 2 == 1 else Band.BOTTOM


def timeline_base_size(count: int) -> Tuple[float, float]:
    return float(max(TIMELINE_MIN_WIDTH, count * SEGMENT_WIDTH)), float(TIMELINE_HEIGHT)


def timeline_default_position(index: int, count: int, width: float, height: float) -> Point:
    """
    Zig-zag placement: fixed horizontal spacing, first node on the center band,
    then alternating top/bottom. Indexes outside the collection land at the
    canvas center.
    """
    if index < 0 or index >= count:
        return Point(width / 2, height / 2)
    x = (index + 0.5) * SEGMENT_WIDTH
    band = timeline_band(index)
    if band == Band.CENTER:
        y = height / 2
    elif band == Band.TOP:
        y = height * TOP_BAND
    else:
        y = height * BOTTOM_BAND
    return Point(x, y)


def timeline_default_positions(count: int, width: float, height: float) -> List[Point]:
    return [timeline_default_position(i, count, width, height) for i in range(count)]


def strategy_default_positions(n: int) -> List[Point]:
    """
    V-shape on the sea: pair `row` takes index `row` on the left edge and index
    `n - 1 - row` mirrored on the right edge, stepping inward and down. An odd
    middle card sits centered below the last pair.
    """
    if n <= 0:
        return []
    pairs = n // 2
    positions: List[Optional[Point]] = [None] * n
    for row in range(pairs):
        y = V_TOP + row * V_ROW_STEP
        positions[row] = Point(V_X_MARGIN + row * V_X_STEP, y)
        positions[n - 1 - row] = Point(SEA_WIDTH - V_X_MARGIN - CARD_WIDTH - row * V_X_STEP, y)
    if n % 2 == 1:
        positions[pairs] = Point((SEA_WIDTH - CARD_WIDTH) / 2, V_TOP + pairs * V_ROW_STEP)
    return [p for p in positions if p is not None]


# ==========================================
# Override resolution
# ==========================================

def resolve_timeline_positions(milestones: Sequence[TimelineMilestone]) -> List[Point]:
    """Stored position when present, default layout otherwise."""
    count = len(milestones)
    width, height = timeline_base_size(count)
    out: List[Point] = []
    for i, m in enumerate(milestones):
        if m.position is not None:
            out.append(Point(m.position.x, m.position.y))
        else:
            out.append(timeline_default_position(i, count, width, height))
    return out


def resolve_strategy_positions(strategy: StrategyContent) -> List[Point]:
    # Stored positions only count when they line up one-to-one with the points.
    n = len(strategy.points)
    stored = strategy.pointPositions
    if stored is not None and len(stored) == n:
        return [Point(p.x, p.y) for p in stored]
    return strategy_default_positions(n)


def content_extent(
    positions: Sequence[Point],
    min_width: float,
    min_height: float,
    padding: float = CONTENT_PADDING,
) -> Tuple[float, float]:
    width = max([min_width, *(p.x for p in positions)]) + padding
    height = max([min_height, *(p.y for p in positions)]) + padding
    return width, height


# ==========================================
# Path
# ==========================================

def fmt_number(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def build_path(points: Sequence[Point]) -> str:
    """SVG path data visiting every point in order (`M` then one `L` per point)."""
    if not points:
        return ""
    first, rest = points[0], points[1:]
    parts = [f"M {fmt_number(first.x)} {fmt_number(first.y)}"]
    parts.extend(f"L {fmt_number(p.x)} {fmt_number(p.y)}" for p in rest)
    return " ".join(parts)


def path_segments(points: Sequence[Point]) -> List[Tuple[Point, Point]]:
    return [(points[i], points[i + 1]) for i in range(len(points) - 1)]


# ==========================================
# Projections
# ==========================================

@dataclass(frozen=True)
class ChildLayout:
    id: str
    dx: float
    dy: float
    gradient: Gradient


@dataclass(frozen=True)
class NodeLayout:
    id: str
    x: float
    y: float
    gradient: Gradient
    shape: NodeShape
    manual: bool
    children: Tuple[ChildLayout, ...] = ()


@dataclass(frozen=True)
class TimelineLayout:
    nodes: Tuple[NodeLayout, ...]
    path: str
    width: float
    height: float
    points: Tuple[Point, ...] = field(default=())


@dataclass(frozen=True)
class StrategyLayout:
    positions: Tuple[Point, ...]
    width: float
    height: float


def layout_children(parent: TimelineMilestone) -> Tuple[ChildLayout, ...]:
    """Children sit in one row under the parent, centered on it, relative offsets only."""
    children = parent.children or []
    if not children:
        return ()
    pitch = CHILD_WIDTH + CHILD_GAP
    row_width = len(children) * pitch - CHILD_GAP
    left = -row_width / 2 + CHILD_WIDTH / 2
    return tuple(
        ChildLayout(id=child.id, dx=left + i * pitch, dy=CHILD_OFFSET_Y, gradient=gradient_for(child))
        for i, child in enumerate(children)
    )


def layout_timeline(milestones: Sequence[TimelineMilestone]) -> TimelineLayout:
    base_width, base_height = timeline_base_size(len(milestones))
    points = resolve_timeline_positions(milestones)
    nodes = tuple(
        NodeLayout(
            id=m.id,
            x=p.x,
            y=p.y,
            gradient=gradient_for(m),
            shape=m.resolved_shape,
            manual=m.position is not None,
            children=layout_children(m),
        )
        for m, p in zip(milestones, points)
    )
    width, height = content_extent(points, base_width, base_height)
    return TimelineLayout(nodes=nodes, path=build_path(points), width=width, height=height, points=tuple(points))


def layout_strategy(strategy: StrategyContent) -> StrategyLayout:
    positions = resolve_strategy_positions(strategy)
    width, height = content_extent(positions, SEA_WIDTH, SEA_HEIGHT, padding=0)
    return StrategyLayout(positions=tuple(positions), width=width, height=height)
