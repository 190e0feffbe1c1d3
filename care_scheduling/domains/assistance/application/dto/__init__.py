"""
Assistance DTOs
"""

from .appointment_dtos import (
    AppointmentActionRequest,
    CancelAppointmentRequest,
    CompleteConsultationRequest,
    CreateAppointmentRequest,
    FindAvailableProfessionalsRequest,
    GetAvailableSlotsRequest,
    ProfessionalAvailabilityDTO,
    RescheduleAppointmentRequest,
)

__all__ = [
    "AppointmentActionRequest",
    "CancelAppointmentRequest",
    "CompleteConsultationRequest",
    "CreateAppointmentRequest",
    "FindAvailableProfessionalsRequest",
    "GetAvailableSlotsRequest",
    "ProfessionalAvailabilityDTO",
    "RescheduleAppointmentRequest",
]
