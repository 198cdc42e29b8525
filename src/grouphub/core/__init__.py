"""Core GroupHub utilities.

This module exports configuration and logging helpers for use throughout
the package.
"""

from grouphub.core.config import Settings, get_settings
from grouphub.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
