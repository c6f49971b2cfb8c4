"""Shared utilities for xml_node_tree.

This module provides the configuration objects, exception types and logging
helpers used by the tree, serialization, adapter and CLI layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    SerializerConfig,
)
from .errors import (
    AdapterError,
    NodeKindError,
    SerializationDepthError,
    XmlTreeError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "SerializerConfig",
    "AdapterError",
    "NodeKindError",
    "SerializationDepthError",
    "XmlTreeError",
    "CorrelationLogger",
    "get_logger",
]
