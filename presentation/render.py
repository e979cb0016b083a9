"""
Portfolio Presenter - timeline SVG

Static rendering of a computed `TimelineLayout`: the road (wide translucent
stroke plus a dashed center line, both drawn from `build_path`) and one shape
per node. Children are drawn under their parent at their relative offsets.
"""

from __future__ import annotations

import html
from typing import List

from .content import NodeShape, TimelineMilestone, place_display
from .layout import CARD_WIDTH, CHILD_WIDTH, TimelineLayout, fmt_number

ROAD_WIDTH = 24
ROAD_DASH = "12 8"
CARD_HEIGHT = 96
CHILD_HEIGHT = 64
CIRCLE_RADIUS = 52


def _text(x: float, y: float, value: str, size: int, weight: str = "normal") -> str:
    return (
        f'<text x="{fmt_number(x)}" y="{fmt_number(y)}" text-anchor="middle" font-size="{size}" '
        f'font-weight="{weight}" fill="#ffffff">{html.escape(value)}</text>'
    )


def _card(x: float, y: float, width: float, height: float, fill: str, m: TimelineMilestone, size: int) -> List[str]:
    return [
        f'<rect x="{fmt_number(x - width / 2)}" y="{fmt_number(y - height / 2)}" width="{fmt_number(width)}" '
        f'height="{fmt_number(height)}" rx="16" fill="{fill}"/>',
        _text(x, y - 8, m.role, size + 2, "bold"),
        _text(x, y + 12, place_display(m), size),
    ]


def render_timeline_svg(layout: TimelineLayout, milestones: List[TimelineMilestone]) -> str:
    w, h = fmt_number(layout.width), fmt_number(layout.height)
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w} {h}" width="{w}" height="{h}">',
        f'<path d="{layout.path}" fill="none" stroke="rgba(255,255,255,0.35)" '
        f'stroke-width="{ROAD_WIDTH}" stroke-linecap="round" stroke-linejoin="round"/>',
        f'<path d="{layout.path}" fill="none" stroke="rgba(255,255,255,0.5)" '
        f'stroke-width="2" stroke-linecap="round" stroke-linejoin="round" stroke-dasharray="{ROAD_DASH}"/>',
    ]
    # Nodes line up with the milestones they were laid out from; children with their parent's children.
    for node, m in zip(layout.nodes, milestones):
        parts.append(f'<g data-node-id="{html.escape(node.id)}">')
        if node.shape == NodeShape.CIRCLE:
            parts.append(
                f'<circle cx="{fmt_number(node.x)}" cy="{fmt_number(node.y)}" r="{CIRCLE_RADIUS}" '
                f'fill="{node.gradient.start_hex}"/>'
            )
            parts.append(_text(node.x, node.y - 4, m.role, 12, "bold"))
            parts.append(_text(node.x, node.y + 12, place_display(m), 10))
        else:
            parts.extend(_card(node.x, node.y, CARD_WIDTH - 20, CARD_HEIGHT, node.gradient.start_hex, m, 14))
            for child, child_m in zip(node.children, m.children or []):
                parts.extend(
                    _card(
                        node.x + child.dx,
                        node.y + child.dy,
                        CHILD_WIDTH,
                        CHILD_HEIGHT,
                        child.gradient.start_hex,
                        child_m,
                        10,
                    )
                )
        parts.append("</g>")
    parts.append("</svg>")
    return "\n".join(parts)
