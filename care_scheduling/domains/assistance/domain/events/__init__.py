"""
Assistance Domain Events
"""

from .appointment_events import (
    APPOINTMENT_EVENT_TYPES,
    AppointmentCancelled,
    AppointmentConfirmed,
    AppointmentCreated,
    AppointmentEvent,
    AppointmentMarkedNoShow,
    AppointmentRescheduled,
    ConsultationCompleted,
    ConsultationStarted,
    TrackingRecordCreated,
)

__all__ = [
    "APPOINTMENT_EVENT_TYPES",
    "AppointmentCancelled",
    "AppointmentConfirmed",
    "AppointmentCreated",
    "AppointmentEvent",
    "AppointmentMarkedNoShow",
    "AppointmentRescheduled",
    "ConsultationCompleted",
    "ConsultationStarted",
    "TrackingRecordCreated",
]
