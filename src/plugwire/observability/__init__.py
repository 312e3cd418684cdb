"""Observability module for plugwire.

Provides structured logging with plugin context:
- JSON logging for production
- Console logging for development
"""

from plugwire.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    plugin_var,
)

__all__ = [
    "configure_logging",
    "LogContext",
    "JsonFormatter",
    "ConsoleFormatter",
    "plugin_var",
]
