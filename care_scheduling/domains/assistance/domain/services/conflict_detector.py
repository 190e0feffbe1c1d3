"""
Conflict Detector for Assistance Domain

Decides whether a candidate interval collides with a professional's
active bookings.
"""

from collections.abc import Iterable
from datetime import datetime

from care_scheduling.core.domain import ValidationException

from ..entities import Appointment
from ..value_objects import Interval


class ConflictDetector:
    """
    Domain service for booking conflict detection.

    Cancelled, no-show and completed appointments never block a slot.
    Overlap is half-open, so an appointment ending at 11:00 does not
    collide with one starting at 11:00.

    Example:
        ```python
        detector = ConflictDetector()
        if detector.has_conflict("prof-1", start, end, existing, exclude_appointment_id=appointment.id):
            ...
        ```
    """

    def find_conflicts(
        self,
        professional_id: str,
        interval_start: datetime,
        interval_end: datetime,
        existing_appointments: Iterable[Appointment],
        exclude_appointment_id: str | None = None,
    ) -> list[Appointment]:
        """
        List the active appointments that overlap the candidate interval.

        Args:
            professional_id: Professional whose agenda is checked
            interval_start: Candidate start
            interval_end: Candidate end
            existing_appointments: Appointments to check against
            exclude_appointment_id: Appointment being moved, ignored

        Returns:
            Overlapping appointments, in input order

        Raises:
            ValidationException: If the candidate does not end after it starts
        """
        if interval_end <= interval_start:
            raise ValidationException("End time must be after start time", field="scheduled_end")
        candidate = Interval(start=interval_start, end=interval_end)
        conflicts = []
        for apt in existing_appointments:
            if apt.professional_id != professional_id:
                continue
            if exclude_appointment_id is not None and apt.id == exclude_appointment_id:
                continue
            if not apt.blocks_schedule:
                continue
            if apt.scheduled_start is None or apt.scheduled_end is None:
                continue
            if candidate.overlaps(apt.interval):
                conflicts.append(apt)
        return conflicts

    def has_conflict(
        self,
        professional_id: str,
        interval_start: datetime,
        interval_end: datetime,
        existing_appointments: Iterable[Appointment],
        exclude_appointment_id: str | None = None,
    ) -> bool:
        """Check if there's a scheduling conflict."""
        return bool(
            self.find_conflicts(
                professional_id,
                interval_start,
                interval_end,
                existing_appointments,
                exclude_appointment_id,
            )
        )
