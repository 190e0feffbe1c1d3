"""
Notifier Port

Interface for outbound notifications (SMS, e-mail, WhatsApp, ...).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class INotifier(Protocol):
    """
    Notification interface.

    Fire-and-forget: callers never let a notifier error fail the operation
    that triggered it.
    """

    async def notify(self, event_name: str, payload: dict[str, Any]) -> None:
        """
        Send a notification.

        Args:
            event_name: Snake-case event name, e.g. "appointment_confirmed"
            payload: Event data
        """
        ...
