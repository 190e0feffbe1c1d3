"""
Appointment history entries.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from care_scheduling.core.domain import ValueObject

from .appointment_status import AppointmentStatus, HistoryAction


@dataclass(frozen=True)
class HistoryEntry(ValueObject):
    """One immutable line of an appointment's audit trail."""

    timestamp: datetime
    action: HistoryAction
    actor_id: str
    note: str = ""
    previous_status: AppointmentStatus | None = None
    new_status: AppointmentStatus | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "action": self.action.value,
            "actor_id": self.actor_id,
            "note": self.note,
            "previous_status": self.previous_status.value if self.previous_status else None,
            "new_status": self.new_status.value if self.new_status else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            action=HistoryAction.from_string(data["action"]),
            actor_id=data.get("actor_id") or "",
            note=data.get("note") or "",
            previous_status=AppointmentStatus.from_string(data["previous_status"])
            if data.get("previous_status")
            else None,
            new_status=AppointmentStatus.from_string(data["new_status"]) if data.get("new_status") else None,
        )
