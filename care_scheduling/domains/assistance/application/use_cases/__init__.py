"""
Assistance Use Cases
"""

from .book_appointment import BookAppointmentUseCase
from .cancel_appointment import CancelAppointmentUseCase
from .confirm_appointment import ConfirmAppointmentUseCase
from .find_available_professionals import FindAvailableProfessionalsUseCase
from .get_appointment_statistics import GetAppointmentStatisticsUseCase
from .get_available_slots import GetAvailableSlotsUseCase
from .manage_consultation import CompleteConsultationUseCase, MarkNoShowUseCase, StartConsultationUseCase
from .reschedule_appointment import RescheduleAppointmentUseCase

__all__ = [
    "BookAppointmentUseCase",
    "CancelAppointmentUseCase",
    "CompleteConsultationUseCase",
    "ConfirmAppointmentUseCase",
    "FindAvailableProfessionalsUseCase",
    "GetAppointmentStatisticsUseCase",
    "GetAvailableSlotsUseCase",
    "MarkNoShowUseCase",
    "RescheduleAppointmentUseCase",
    "StartConsultationUseCase",
]
