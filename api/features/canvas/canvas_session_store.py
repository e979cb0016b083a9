"""
Canvas Sessions (in-memory)

Business capability: keep one interactive canvas alive across event batches,
then hand its node collection back for saving.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from presentation.interaction import StrategyCanvas, TimelineCanvas

from api.features.canvas.canvas_contracts import CanvasKind


@dataclass
class CanvasSession:
    """A canvas plus the latest collection reported through its change callback."""

    id: str
    kind: CanvasKind
    canvas: Union[TimelineCanvas, StrategyCanvas]
    changes: int = 0
    latest: Optional[List[Any]] = field(default=None, repr=False)

    def record_change(self, collection: List[Any]) -> None:
        self.latest = collection
        self.changes += 1


# Active sessions (feature-local, in-memory)
_sessions: dict[str, CanvasSession] = {}


def create_session(kind: CanvasKind, canvas: Union[TimelineCanvas, StrategyCanvas]) -> CanvasSession:
    session_id = str(uuid.uuid4())[:8]
    session = CanvasSession(id=session_id, kind=kind, canvas=canvas)
    canvas.on_change = session.record_change
    _sessions[session_id] = session
    return session


def get_session(session_id: str) -> Optional[CanvasSession]:
    return _sessions.get(session_id)


def delete_session(session_id: str) -> bool:
    return _sessions.pop(session_id, None) is not None


def active_session_count() -> int:
    return len(_sessions)


def clear_sessions() -> None:
    _sessions.clear()
