"""
JSON projections of the core layout objects returned by the canvas routes.
"""

from __future__ import annotations

from typing import Any

from presentation.interaction import STRATEGY_BOUNDS, DragBounds
from presentation.layout import ChildLayout, NodeLayout, StrategyLayout, TimelineLayout
from presentation.palette import Gradient


def gradient_json(g: Gradient) -> dict[str, Any]:
    return {"className": g.css_class, "from": g.start_hex, "to": g.end_hex}


def _child_json(c: ChildLayout) -> dict[str, Any]:
    return {"id": c.id, "dx": c.dx, "dy": c.dy, "gradient": gradient_json(c.gradient)}


def _node_json(n: NodeLayout) -> dict[str, Any]:
    return {
        "id": n.id,
        "x": n.x,
        "y": n.y,
        "shape": n.shape.value,
        "manual": n.manual,
        "gradient": gradient_json(n.gradient),
        "children": [_child_json(c) for c in n.children],
    }


def bounds_json(b: DragBounds) -> dict[str, Any]:
    return {"minX": b.min_x, "minY": b.min_y, "maxX": b.max_x, "maxY": b.max_y}


def timeline_layout_json(layout: TimelineLayout) -> dict[str, Any]:
    return {
        "nodes": [_node_json(n) for n in layout.nodes],
        "path": layout.path,
        "width": layout.width,
        "height": layout.height,
    }


def strategy_layout_json(layout: StrategyLayout) -> dict[str, Any]:
    return {
        "positions": [p.as_dict() for p in layout.positions],
        "width": layout.width,
        "height": layout.height,
        "bounds": bounds_json(STRATEGY_BOUNDS),
    }
