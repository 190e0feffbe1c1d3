"""
Logging Notifier

Notifier that writes every notification to the log and keeps the last ones
in memory. Stands in for SMS / e-mail gateways until one is configured.
"""

from collections import deque
from typing import Any

from care_scheduling.core.shared.logger import get_service_logger


class LoggingNotifier:
    """INotifier implementation that logs notifications."""

    def __init__(self, history_size: int = 100):
        self._log = get_service_logger("notifier")
        self._sent: deque[tuple[str, dict[str, Any]]] = deque(maxlen=history_size)

    async def notify(self, event_name: str, payload: dict[str, Any]) -> None:
        self._sent.append((event_name, payload))
        self._log.info(
            f"Notification: {event_name}",
            appointment_id=payload.get("appointment_id"),
            patient_id=payload.get("patient_id"),
        )

    @property
    def sent(self) -> list[tuple[str, dict[str, Any]]]:
        """Notifications sent so far, oldest first."""
        return list(self._sent)
