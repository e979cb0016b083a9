"""
Portfolio Presenter - node colors

Gradients are kept as Tailwind class pairs (what the page styles with) plus the
hex stops the SVG renderer needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .content import CareerPhase, TimelineMilestone


@dataclass(frozen=True)
class Gradient:
    start: str
    end: str
    start_hex: str
    end_hex: str

    @property
    def css_class(self) -> str:
        return f"from-{self.start} to-{self.end}"


EMERALD = Gradient("emerald-500", "teal-600", "#10b981", "#0d9488")
CYAN = Gradient("cyan-500", "blue-600", "#06b6d4", "#2563eb")
VIOLET = Gradient("violet-500", "purple-600", "#8b5cf6", "#9333ea")
AMBER = Gradient("amber-500", "orange-600", "#f59e0b", "#ea580c")
ROSE = Gradient("rose-500", "pink-600", "#f43f5e", "#db2777")
BLUE = Gradient("blue-500", "indigo-600", "#3b82f6", "#4f46e5")
GREEN = Gradient("green-500", "emerald-600", "#22c55e", "#059669")
GRAY = Gradient("gray-500", "gray-600", "#6b7280", "#4b5563")

PHASE_COLORS: Dict[CareerPhase, Gradient] = {
    CareerPhase.EDUCATION: EMERALD,
    CareerPhase.EARLY: CYAN,
    CareerPhase.GROWTH: VIOLET,
    CareerPhase.CURRENT: AMBER,
}

# Preset keys offered by the admin editor; "default" means "use the phase color".
MILESTONE_COLORS: Dict[str, Optional[Gradient]] = {
    "default": None,
    "emerald": EMERALD,
    "cyan": CYAN,
    "violet": VIOLET,
    "amber": AMBER,
    "rose": ROSE,
    "blue": BLUE,
    "green": GREEN,
    "gray": GRAY,
}

FALLBACK = GRAY


def resolve_gradient(phase: Optional[CareerPhase | str], color: Optional[str] = None) -> Gradient:
    """Override color when it names a known preset, else the phase color, else gray."""
    override = MILESTONE_COLORS.get(color) if color else None
    if override is not None:
        return override
    try:
        return PHASE_COLORS[CareerPhase(phase)]
    except (ValueError, KeyError):
        return FALLBACK


def gradient_for(milestone: TimelineMilestone) -> Gradient:
    return resolve_gradient(milestone.phase, milestone.color)
