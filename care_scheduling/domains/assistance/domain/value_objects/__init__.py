"""
Assistance Domain Value Objects
"""

from .appointment_status import (
    NON_BLOCKING_STATUSES,
    AppointmentModality,
    AppointmentPriority,
    AppointmentStatus,
    HistoryAction,
    ProfessionalStatus,
    Specialty,
    TrackingRecordStatus,
)
from .history import HistoryEntry
from .time_window import BreakInterval, Interval, WorkingHours, parse_hhmm, weekday_of

__all__ = [
    "NON_BLOCKING_STATUSES",
    "AppointmentModality",
    "AppointmentPriority",
    "AppointmentStatus",
    "BreakInterval",
    "HistoryAction",
    "HistoryEntry",
    "Interval",
    "ProfessionalStatus",
    "Specialty",
    "TrackingRecordStatus",
    "WorkingHours",
    "parse_hhmm",
    "weekday_of",
]
