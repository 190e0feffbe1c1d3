"""
Notification adapters.
"""

from .logging_notifier import LoggingNotifier

__all__ = ["LoggingNotifier"]
