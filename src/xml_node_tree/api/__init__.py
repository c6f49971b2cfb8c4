"""Integration adapters for third-party XML libraries."""

from .adapters import (
    ElementTreeAdapter,
    LxmlAdapter,
    TreeAdapter,
    get_adapter,
    list_available_adapters,
)

__all__ = [
    "ElementTreeAdapter",
    "LxmlAdapter",
    "TreeAdapter",
    "get_adapter",
    "list_available_adapters",
]
