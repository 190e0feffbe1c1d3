"""
Notification Handler

Forwards appointment events to the notifier.
"""

import re

from care_scheduling.core.domain import DomainEvent

from ..ports import INotifier

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def event_name_for(event: DomainEvent) -> str:
    """AppointmentMarkedNoShow -> appointment_marked_no_show."""
    return _CAMEL_BOUNDARY.sub("_", event.event_type).lower()


class NotificationHandler:
    """Subscriber that sends every appointment event to the notifier."""

    def __init__(self, notifier: INotifier):
        self._notifier = notifier

    async def __call__(self, event: DomainEvent) -> None:
        await self._notifier.notify(event_name_for(event), event.to_dict())
