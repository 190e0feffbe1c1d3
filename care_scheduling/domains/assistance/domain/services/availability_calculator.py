"""
Availability Calculator for Assistance Domain

Computes open booking slots from a professional's working hours,
consultation duration and existing bookings.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, time, timedelta
from typing import TYPE_CHECKING

from ..entities import Appointment, Professional
from ..value_objects import Interval, WorkingHours, weekday_of

if TYPE_CHECKING:
    from care_scheduling.config.settings import Settings

DEFAULT_WORKING_DAYS = (1, 2, 3, 4, 5)
DEFAULT_WORKING_START = time(7, 0)
DEFAULT_WORKING_END = time(21, 0)
DEFAULT_CONSULTATION_MINUTES = 50


def default_working_hours(
    weekdays: Iterable[int] = DEFAULT_WORKING_DAYS,
    start_time: time = DEFAULT_WORKING_START,
    end_time: time = DEFAULT_WORKING_END,
) -> tuple[WorkingHours, ...]:
    """Build the fallback week (Monday to Friday, 07:00-21:00 unless configured)."""
    return tuple(WorkingHours(weekday=day, start_time=start_time, end_time=end_time) for day in weekdays)


class AvailabilityCalculator:
    """
    Domain service for slot generation.

    Handles:
    - Fallback hours and duration for unconfigured professionals
    - Slot stepping inside each working window
    - Removal of slots that hit a booking or a break

    The calculator is pure: it never mutates its inputs and returns a new
    tuple on every call.

    Example:
        ```python
        calculator = AvailabilityCalculator()
        slots = calculator.available_slots(
            professional=professional,
            range_start=datetime(2024, 1, 15),
            range_end=datetime(2024, 1, 16),
            existing_appointments=appointments,
        )
        ```
    """

    def __init__(
        self,
        default_hours: Sequence[WorkingHours] | None = None,
        default_duration_minutes: int = DEFAULT_CONSULTATION_MINUTES,
        horizon_days: int = 30,
    ):
        """
        Initialize availability calculator.

        Args:
            default_hours: Week used when a professional has no working hours
            default_duration_minutes: Duration used when a professional has none
            horizon_days: How far ahead next_available_slots searches
        """
        if default_duration_minutes <= 0:
            raise ValueError("Default duration must be positive")
        self.default_hours = tuple(default_hours) if default_hours is not None else default_working_hours()
        self.default_duration_minutes = default_duration_minutes
        self.horizon_days = horizon_days

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AvailabilityCalculator":
        return cls(
            default_hours=default_working_hours(
                settings.DEFAULT_WORKING_DAYS,
                settings.default_working_start_time,
                settings.default_working_end_time,
            ),
            default_duration_minutes=settings.DEFAULT_CONSULTATION_MINUTES,
            horizon_days=settings.SCHEDULING_HORIZON_DAYS,
        )

    def effective_working_hours(self, professional: Professional) -> tuple[WorkingHours, ...]:
        """Configured hours, or the defaults when none are set."""
        if professional.working_hours:
            return tuple(professional.working_hours)
        return self.default_hours

    def effective_duration_minutes(self, professional: Professional) -> int:
        """Configured duration, or the default when unset or not positive."""
        duration = professional.consultation_duration_minutes
        if duration is None or duration <= 0:
            return self.default_duration_minutes
        return duration

    def available_slots(
        self,
        professional: Professional,
        range_start: datetime,
        range_end: datetime,
        existing_appointments: Iterable[Appointment],
        not_before: datetime | None = None,
    ) -> tuple[datetime, ...]:
        """
        Find open slot starts for a professional.

        Args:
            professional: Professional to find slots for
            range_start: Start of the search range
            range_end: End of the search range; slots must end by then
            existing_appointments: Bookings to avoid (inactive ones are ignored)
            not_before: Optional earliest allowed start (e.g. now)

        Returns:
            Ascending slot starts, empty when nothing qualifies
        """
        if range_end <= range_start:
            return ()

        duration = timedelta(minutes=self.effective_duration_minutes(professional))
        windows_by_day: dict[int, list[WorkingHours]] = {}
        for window in self.effective_working_hours(professional):
            windows_by_day.setdefault(window.weekday, []).append(window)

        booked = [
            apt.interval
            for apt in existing_appointments
            if apt.blocks_schedule
            and apt.professional_id == professional.id
            and apt.scheduled_start is not None
            and apt.scheduled_end is not None
        ]
        search_range = Interval(start=range_start, end=range_end)

        slots: set[datetime] = set()
        current_date = range_start.date()
        while current_date <= range_end.date():
            for window in windows_by_day.get(weekday_of(current_date), []):
                window_end = datetime.combine(current_date, window.end_time)
                breaks = window.breaks_on(current_date)
                slot_start = datetime.combine(current_date, window.start_time)

                while slot_start + duration <= window_end:
                    slot = Interval(start=slot_start, end=slot_start + duration)
                    if (
                        search_range.contains(slot)
                        and (not_before is None or slot.start >= not_before)
                        and not any(slot.overlaps(b) for b in breaks)
                        and not any(slot.overlaps(b) for b in booked)
                    ):
                        slots.add(slot_start)
                    slot_start += duration

            current_date += timedelta(days=1)

        return tuple(sorted(slots))

    def next_available_slots(
        self,
        professional: Professional,
        existing_appointments: Iterable[Appointment],
        after: datetime,
        limit: int = 5,
    ) -> tuple[datetime, ...]:
        """
        First open slots at or after a moment, within the search horizon.

        Args:
            professional: Professional to find slots for
            existing_appointments: Bookings to avoid
            after: Earliest allowed start
            limit: Maximum slots returned

        Returns:
            Up to ``limit`` ascending slot starts
        """
        range_start = datetime.combine(after.date(), time.min)
        range_end = range_start + timedelta(days=self.horizon_days + 1)
        slots = self.available_slots(
            professional=professional,
            range_start=range_start,
            range_end=range_end,
            existing_appointments=list(existing_appointments),
            not_before=after,
        )
        return slots[:limit]
