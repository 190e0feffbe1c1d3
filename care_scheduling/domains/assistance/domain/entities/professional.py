"""
Professional Entity for Assistance Domain

Read model of a professional as provided by the professional directory.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from care_scheduling.core.domain import Entity

from ..value_objects import ProfessionalStatus, Specialty, WorkingHours


@dataclass
class Professional(Entity[str]):
    """
    Professional offering consultations.

    Empty working hours or a missing consultation duration are allowed here;
    the availability calculator substitutes its configured defaults.

    Example:
        ```python
        professional = Professional(
            id="prof-1",
            name="Ana Souza",
            specialty=Specialty.PHYSIOTHERAPY,
            working_hours=[WorkingHours.from_dict({"weekday": 1, "start_time": "08:00", "end_time": "18:00"})],
            consultation_duration_minutes=50,
        )
        ```
    """

    name: str = ""
    specialty: Specialty = Specialty.MEDICAL
    working_hours: list[WorkingHours] = field(default_factory=list)
    consultation_duration_minutes: int | None = None
    status: ProfessionalStatus = ProfessionalStatus.ACTIVE
    consultation_price: Decimal | None = None
    online_link: str | None = None
    email: str | None = None
    phone: str | None = None

    def can_accept_appointments(self) -> bool:
        """Only active professionals receive new bookings."""
        return self.status == ProfessionalStatus.ACTIVE

    def has_configured_hours(self) -> bool:
        return bool(self.working_hours)

    def windows_for_weekday(self, weekday: int) -> list[WorkingHours]:
        """Configured windows for a weekday (0 = Sunday), ordered by start."""
        return sorted((w for w in self.working_hours if w.weekday == weekday), key=lambda w: w.start_time)

    def to_summary_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty.value,
            "status": self.status.value,
            "consultation_duration_minutes": self.consultation_duration_minutes,
        }
