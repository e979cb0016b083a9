"""
Canvas API (feature router)

- Timeline and strategy layout projections
- Rendered timeline SVG
- Server-held interactive canvas sessions (pointer/wheel/key events, commit)
"""

from __future__ import annotations

from fastapi import APIRouter

from .routes.canvas_layout import router as canvas_layout_router
from .routes.canvas_sessions import router as canvas_sessions_router

router = APIRouter(prefix="/api/canvas", tags=["canvas"])

router.include_router(canvas_layout_router)
router.include_router(canvas_sessions_router)
