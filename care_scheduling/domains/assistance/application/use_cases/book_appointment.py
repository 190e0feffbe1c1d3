# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for booking a new appointment.
# ============================================================================
"""Book Appointment Use Case.

Validates the request, rejects double bookings and stores the new
appointment in the scheduled state.
"""

import logging
from typing import TYPE_CHECKING

from ..dto import CreateAppointmentRequest

if TYPE_CHECKING:
    from ...domain.entities import Appointment
    from ..services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class BookAppointmentUseCase:
    """Use case for booking an appointment with a professional."""

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        """Initialize use case.

        Args:
            lifecycle: Appointment lifecycle service.
        """
        self._lifecycle = lifecycle

    async def execute(self, request: CreateAppointmentRequest) -> "Appointment":
        """Execute the book appointment use case.

        Args:
            request: Booking request.

        Returns:
            The stored appointment.

        Raises:
            ValidationException: Invalid input or inactive professional.
            EntityNotFoundException: Unknown professional.
            AppointmentConflictException: Slot already taken.
        """
        logger.info(f"Booking appointment for patient {request.patient_id} with {request.professional_id}")
        return await self._lifecycle.create(request)
