# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Data Transfer Objects for appointment operations.
# ============================================================================
"""Appointment DTOs.

Request and response objects for booking, availability and reporting.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from care_scheduling.domains.assistance.domain.entities import Professional
from care_scheduling.domains.assistance.domain.value_objects import (
    AppointmentModality,
    AppointmentPriority,
    Specialty,
)

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class CreateAppointmentRequest:
    """Request DTO for booking a new appointment.

    ``scheduled_end`` defaults to start plus the professional's consultation
    duration. ``price`` defaults to the professional's consultation price.
    ``intake`` accepts a raw dict (with ``kind``) or an intake model.
    """

    patient_id: str
    patient_name: str
    patient_phone: str
    professional_id: str
    scheduled_start: datetime
    reason: str
    actor_id: str
    scheduled_end: datetime | None = None
    specialty: Specialty | None = None
    patient_email: str | None = None
    priority: AppointmentPriority = AppointmentPriority.NORMAL
    modality: AppointmentModality = AppointmentModality.IN_PERSON
    price: Decimal | float | int | None = None
    discount: Decimal | float | int = 0
    patient_notes: str | None = None
    intake: Any = None


@dataclass(frozen=True)
class GetAvailableSlotsRequest:
    """Request DTO for getting available time slots."""

    professional_id: str
    range_start: datetime
    range_end: datetime
    not_before: datetime | None = None


@dataclass(frozen=True)
class FindAvailableProfessionalsRequest:
    """Request DTO for professionals with free slots on a day."""

    specialty: Specialty
    day: date
    slots_per_professional: int = 3


@dataclass(frozen=True)
class AppointmentActionRequest:
    """Request DTO for transitions that only need the appointment and actor."""

    appointment_id: str
    actor_id: str


@dataclass(frozen=True)
class CancelAppointmentRequest:
    """Request DTO for cancelling an appointment."""

    appointment_id: str
    reason: str
    actor_id: str


@dataclass(frozen=True)
class RescheduleAppointmentRequest:
    """Request DTO for moving an appointment; ``new_end`` keeps the duration when omitted."""

    appointment_id: str
    new_start: datetime
    actor_id: str
    new_end: datetime | None = None


@dataclass(frozen=True)
class CompleteConsultationRequest:
    appointment_id: str
    actor_id: str
    notes: str | None = None


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class ProfessionalAvailabilityDTO:
    """A professional and the first free slots found."""

    professional_id: str
    professional_name: str
    specialty: str
    slots: list[datetime] = field(default_factory=list)
    total_available: int = 0

    @classmethod
    def from_slots(
        cls, professional: Professional, slots: tuple[datetime, ...], limit: int
    ) -> "ProfessionalAvailabilityDTO":
        return cls(
            professional_id=professional.id or "",
            professional_name=professional.name,
            specialty=professional.specialty.value,
            slots=list(slots[:limit]),
            total_available=len(slots),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "professional_id": self.professional_id,
            "professional_name": self.professional_name,
            "specialty": self.specialty,
            "slots": [s.strftime("%Y-%m-%d %H:%M") for s in self.slots],
            "total_available": self.total_available,
        }
