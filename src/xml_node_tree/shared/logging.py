"""Structured logging utilities for xml_node_tree.

Log records carry the emitting component and an optional correlation ID in
their ``extra`` data so output from several trees or CLI runs can be told
apart.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name; defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rsplit(".", 1)[-1]

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined_extra: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            combined_extra.update(extra)
        self.logger.log(level, message, extra=combined_extra, exc_info=exc_info)

    def is_enabled_for(self, level: int) -> bool:
        """Check whether messages at ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self._log(logging.DEBUG, message, extra, exc_info=False)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self._log(logging.INFO, message, extra, exc_info=False)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self._log(logging.WARNING, message, extra, exc_info=False)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log error message with correlation info."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
