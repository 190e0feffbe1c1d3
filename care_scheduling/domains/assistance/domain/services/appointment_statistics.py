"""
Appointment statistics for reporting.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from ..entities import Appointment
from ..value_objects import AppointmentModality, AppointmentStatus, Specialty


@dataclass
class AppointmentStatistics:
    """Aggregated figures over a set of appointments."""

    total: int = 0
    today: int = 0
    last_7_days: int = 0
    this_month: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_specialty: dict[str, int] = field(default_factory=dict)
    by_modality: dict[str, int] = field(default_factory=dict)
    by_professional: dict[str, int] = field(default_factory=dict)
    completion_rate: float = 0.0
    average_duration_minutes: float = 0.0
    billed_total: Decimal = field(default_factory=lambda: Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "today": self.today,
            "last_7_days": self.last_7_days,
            "this_month": self.this_month,
            "by_status": self.by_status,
            "by_specialty": self.by_specialty,
            "by_modality": self.by_modality,
            "by_professional": self.by_professional,
            "completion_rate": self.completion_rate,
            "average_duration_minutes": self.average_duration_minutes,
            "billed_total": str(self.billed_total),
        }


def calculate_statistics(appointments: Iterable[Appointment], now: datetime) -> AppointmentStatistics:
    """
    Compute statistics for a set of appointments.

    Args:
        appointments: Appointments to aggregate
        now: Reference time for the today / week / month counters

    Returns:
        AppointmentStatistics; every status, specialty and modality key is
        present even when its count is zero
    """
    items = [a for a in appointments if a.scheduled_start is not None]
    week_start = now - timedelta(days=7)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    by_status = Counter(a.status.value for a in items)
    by_specialty = Counter(a.specialty.value for a in items)
    by_modality = Counter(a.modality.value for a in items)
    by_professional = Counter(a.professional_name or a.professional_id for a in items)

    completed = [a for a in items if a.status == AppointmentStatus.COMPLETED]
    completion_rate = round(len(completed) / len(items) * 100, 2) if items else 0.0
    average_duration = (
        round(sum(a.duration_minutes for a in completed) / len(completed), 2) if completed else 0.0
    )

    return AppointmentStatistics(
        total=len(items),
        today=sum(1 for a in items if a.scheduled_start.date() == now.date()),
        last_7_days=sum(1 for a in items if a.scheduled_start >= week_start),
        this_month=sum(1 for a in items if a.scheduled_start >= month_start),
        by_status={status.value: by_status.get(status.value, 0) for status in AppointmentStatus},
        by_specialty={specialty.value: by_specialty.get(specialty.value, 0) for specialty in Specialty},
        by_modality={modality.value: by_modality.get(modality.value, 0) for modality in AppointmentModality},
        by_professional=dict(by_professional),
        completion_rate=completion_rate,
        average_duration_minutes=average_duration,
        billed_total=sum((a.final_price for a in completed), Decimal("0")),
    )
