"""
Assistance Domain Events

Recorded by the Appointment and TrackingRecord aggregates and published by
the application layer after the aggregate has been stored.
"""

from dataclasses import dataclass
from datetime import datetime

from care_scheduling.core.domain import DomainEvent


@dataclass(frozen=True, kw_only=True)
class AppointmentEvent(DomainEvent):
    """Common payload of every appointment event."""

    appointment_id: str
    patient_id: str
    professional_id: str
    actor_id: str
    status: str


@dataclass(frozen=True, kw_only=True)
class AppointmentCreated(AppointmentEvent):
    specialty: str
    scheduled_start: datetime
    scheduled_end: datetime


@dataclass(frozen=True, kw_only=True)
class AppointmentConfirmed(AppointmentEvent):
    scheduled_start: datetime


@dataclass(frozen=True, kw_only=True)
class AppointmentCancelled(AppointmentEvent):
    reason: str


@dataclass(frozen=True, kw_only=True)
class AppointmentRescheduled(AppointmentEvent):
    previous_start: datetime
    scheduled_start: datetime
    scheduled_end: datetime


@dataclass(frozen=True, kw_only=True)
class ConsultationStarted(AppointmentEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class ConsultationCompleted(AppointmentEvent):
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class AppointmentMarkedNoShow(AppointmentEvent):
    pass


@dataclass(frozen=True, kw_only=True)
class TrackingRecordCreated(DomainEvent):
    record_id: str
    patient_id: str
    professional_id: str
    specialty: str
    source_appointment_id: str | None = None


APPOINTMENT_EVENT_TYPES: tuple[type[AppointmentEvent], ...] = (
    AppointmentCreated,
    AppointmentConfirmed,
    AppointmentCancelled,
    AppointmentRescheduled,
    ConsultationStarted,
    ConsultationCompleted,
    AppointmentMarkedNoShow,
)
