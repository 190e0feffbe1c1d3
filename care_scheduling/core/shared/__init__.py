"""
Shared utilities module

Domain-agnostic helpers used across the package.
"""

from .logger import (
    ContextLogger,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    get_repository_logger,
    get_service_logger,
)

__all__ = [
    "ContextLogger",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "get_repository_logger",
    "get_service_logger",
]
