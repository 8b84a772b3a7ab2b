"""Exceptions raised while converting trees."""


class GridTableError(Exception):
    """Base class for errors raised by gridtable_html."""


class UnknownNodeTypeError(GridTableError, ValueError):
    """Raised when the conversion context has no handler for a node type."""

    def __init__(self, node_type: str | None):
        self.node_type = node_type
        super().__init__(f"No handler registered for node type {node_type!r}")


class InvalidNodeError(GridTableError, TypeError):
    """Raised when a tree position holds something other than a node dict."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Expected a node object, got {type(value).__name__}: {value!r:.60}")
