"""
Time Window Value Objects

Half-open intervals and weekly working-hour windows used by availability
and conflict detection.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from care_scheduling.core.domain import ValueObject


def weekday_of(day: date) -> int:
    """Weekday number with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def parse_hhmm(value: str | time) -> time:
    """Parse an 'HH:MM' string (times pass through unchanged)."""
    if isinstance(value, time):
        return value
    try:
        hours, minutes = value.strip().split(":")[:2]
        return time(int(hours), int(minutes))
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid time '{value}', expected HH:MM") from e


@dataclass(frozen=True)
class Interval(ValueObject):
    """
    Half-open time interval [start, end).

    Two intervals overlap when each one starts before the other ends, so
    back-to-back bookings (one ending exactly when the next starts) do not
    overlap.
    """

    start: datetime
    end: datetime

    def _validate(self) -> None:
        if self.end <= self.start:
            raise ValueError("Interval end must be after its start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)

    def overlaps(self, other: "Interval") -> bool:
        """Check if this interval overlaps another."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "Interval") -> bool:
        """Check if other lies entirely within this interval."""
        return self.start <= other.start and other.end <= self.end

    def shifted_to(self, new_start: datetime) -> "Interval":
        """Same duration, starting at new_start."""
        return Interval(start=new_start, end=new_start + self.duration)

    def __str__(self) -> str:
        return f"{self.start.isoformat(timespec='minutes')} - {self.end.isoformat(timespec='minutes')}"


@dataclass(frozen=True)
class BreakInterval(ValueObject):
    """Daily pause inside a working window (lunch, meetings)."""

    start_time: time
    end_time: time

    def _validate(self) -> None:
        if self.start_time >= self.end_time:
            raise ValueError("Break start must be before its end")

    def on(self, day: date) -> Interval:
        return Interval(start=datetime.combine(day, self.start_time), end=datetime.combine(day, self.end_time))


@dataclass(frozen=True)
class WorkingHours(ValueObject):
    """
    Weekly working window of a professional.

    Weekday uses 0 = Sunday ... 6 = Saturday.

    Example:
        ```python
        monday = WorkingHours.from_dict({"weekday": 1, "start_time": "08:00", "end_time": "18:00"})
        ```
    """

    weekday: int
    start_time: time
    end_time: time
    breaks: tuple[BreakInterval, ...] = field(default=())

    def _validate(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise ValueError(f"Invalid weekday {self.weekday}; expected 0 (Sunday) to 6 (Saturday)")
        if self.start_time >= self.end_time:
            raise ValueError("Working window start must be before its end")
        object.__setattr__(self, "breaks", tuple(self.breaks))

    def window_on(self, day: date) -> Interval:
        return Interval(start=datetime.combine(day, self.start_time), end=datetime.combine(day, self.end_time))

    def breaks_on(self, day: date) -> list[Interval]:
        return [b.on(day) for b in self.breaks]

    def to_dict(self) -> dict[str, Any]:
        return {
            "weekday": self.weekday,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "breaks": [
                {"start": b.start_time.strftime("%H:%M"), "end": b.end_time.strftime("%H:%M")} for b in self.breaks
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkingHours":
        return cls(
            weekday=int(data["weekday"]),
            start_time=parse_hhmm(data["start_time"]),
            end_time=parse_hhmm(data["end_time"]),
            breaks=tuple(
                BreakInterval(start_time=parse_hhmm(b["start"]), end_time=parse_hhmm(b["end"]))
                for b in data.get("breaks") or []
            ),
        )

    def __str__(self) -> str:
        return f"{self.weekday}: {self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')}"
