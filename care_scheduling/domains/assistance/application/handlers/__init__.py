"""
Assistance Event Handlers
"""

from .notification_handler import NotificationHandler, event_name_for
from .record_projection_handler import RecordProjectionHandler

__all__ = ["NotificationHandler", "RecordProjectionHandler", "event_name_for"]
