"""Exception types shared by all xml_node_tree components."""

from typing import Optional


class XmlTreeError(Exception):
    """Base exception for xml_node_tree errors."""


class NodeKindError(XmlTreeError, TypeError):
    """Raised when an operation is used on a node of the wrong kind.

    This is a programming error: element-only accessors such as ``tag`` or
    ``children`` were called on a leaf, or ``text`` was read from an element.
    """

    def __init__(self, operation: str, kind: object, expected: str) -> None:
        super().__init__(f"'{operation}' requires {expected} node, got {kind}")
        self.operation = operation
        self.kind = kind
        self.expected = expected


class SerializationDepthError(XmlTreeError, RecursionError):
    """Raised when a tree is nested deeper than the configured maximum."""

    def __init__(self, depth: int, max_depth: int) -> None:
        super().__init__(
            f"Tree depth {depth} exceeds configured max_depth {max_depth}"
        )
        self.depth = depth
        self.max_depth = max_depth


class AdapterError(XmlTreeError):
    """Raised when a tree adapter is unavailable or a conversion fails."""

    def __init__(self, message: str, adapter: Optional[str] = None) -> None:
        super().__init__(message)
        self.adapter = adapter
