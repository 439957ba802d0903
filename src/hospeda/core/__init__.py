"""Core Hospeda utilities.

This module exports core utilities for use throughout the application.
"""

from hospeda.core.config import Settings, get_settings
from hospeda.core.context import ServiceContext
from hospeda.core.logging import (
    LoggingContext,
    ServiceLogger,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "ServiceContext",
    "ServiceLogger",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
