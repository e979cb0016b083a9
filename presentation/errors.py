"""
Portfolio Presenter - core exceptions
"""


class PresentationError(Exception):
    """Base class for errors raised by the presentation core."""


class UnknownNodeError(PresentationError, KeyError):
    """A node id did not resolve against the current collection."""

    def __init__(self, node_id: str):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"Node {self.node_id} not found"


class ItemIndexError(PresentationError, IndexError):
    """A list position is outside the list it addresses."""

    def __init__(self, index: int, size: int):
        super().__init__(index)
        self.index = index
        self.size = size

    def __str__(self) -> str:
        return f"Index {self.index} out of range for {self.size} items"
