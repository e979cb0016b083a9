"""
Portfolio Presenter - core package
"""

from .content import (
    CareerPhase,
    NodeShape,
    PlaceLabel,
    Position,
    PresentationContent,
    StrategyContent,
    TimelineMilestone,
    place_display,
)
from .errors import PresentationError, UnknownNodeError
from .interaction import (
    DragBounds,
    GraphCanvas,
    InteractionState,
    PointerTarget,
    StrategyCanvas,
    TimelineCanvas,
)
from .layout import Point, build_path, layout_strategy, layout_timeline
from .overlay import DetailOverlay, ExpansionState
from .palette import Gradient, resolve_gradient
from .render import render_timeline_svg

__all__ = [
    "CareerPhase",
    "NodeShape",
    "PlaceLabel",
    "Position",
    "PresentationContent",
    "StrategyContent",
    "TimelineMilestone",
    "place_display",
    "PresentationError",
    "UnknownNodeError",
    "DragBounds",
    "GraphCanvas",
    "InteractionState",
    "PointerTarget",
    "StrategyCanvas",
    "TimelineCanvas",
    "Point",
    "build_path",
    "layout_strategy",
    "layout_timeline",
    "DetailOverlay",
    "ExpansionState",
    "Gradient",
    "resolve_gradient",
    "render_timeline_svg",
]
