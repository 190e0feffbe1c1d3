"""
Assistance Application Services
"""

from .appointment_lifecycle import AppointmentLifecycleService
from .appointment_queries import AppointmentQueryService

__all__ = ["AppointmentLifecycleService", "AppointmentQueryService"]
