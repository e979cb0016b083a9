"""
Portfolio Presenter - expand/collapse and detail overlay state
"""

from __future__ import annotations

from typing import Optional, Sequence

from .content import TimelineMilestone, iter_milestones


def find_node(milestones: Sequence[TimelineMilestone], node_id: str) -> Optional[TimelineMilestone]:
    """Look a node up by id among top-level milestones and their children."""
    for m in iter_milestones(list(milestones)):
        if m.id == node_id:
            return m
    return None


class ExpansionState:
    """At most one expanded node; expanding another replaces it."""

    def __init__(self, expanded_id: Optional[str] = None):
        self.expanded_id = expanded_id

    def toggle(self, node_id: str) -> Optional[str]:
        self.expanded_id = None if self.expanded_id == node_id else node_id
        return self.expanded_id

    def is_expanded(self, node_id: str) -> bool:
        return self.expanded_id == node_id

    def collapse(self) -> None:
        self.expanded_id = None


class DetailOverlay:
    """
    Enlarged view of one node.

    Only the id is held. `resolve` is called with the collection being rendered,
    so edits made while the overlay is open show up immediately.
    """

    ESCAPE_KEY = "Escape"

    def __init__(self) -> None:
        self.node_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.node_id is not None

    def open(self, node_id: str) -> None:
        self.node_id = node_id

    def close(self) -> None:
        self.node_id = None

    def on_key(self, key: str) -> bool:
        if key == self.ESCAPE_KEY and self.is_open:
            self.close()
            return True
        return False

    def on_backdrop_click(self) -> None:
        self.close()

    def resolve(self, milestones: Sequence[TimelineMilestone]) -> Optional[TimelineMilestone]:
        if self.node_id is None:
            return None
        return find_node(milestones, self.node_id)
