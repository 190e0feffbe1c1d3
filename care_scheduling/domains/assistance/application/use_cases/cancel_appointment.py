# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for cancelling an appointment.
# ============================================================================
"""Cancel Appointment Use Case.

Handles the cancellation of scheduled or confirmed appointments.
"""

import logging
from typing import TYPE_CHECKING

from ..dto import CancelAppointmentRequest

if TYPE_CHECKING:
    from ...domain.entities import Appointment
    from ..services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class CancelAppointmentUseCase:
    """Use case for cancelling an appointment."""

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        """Initialize use case.

        Args:
            lifecycle: Appointment lifecycle service.
        """
        self._lifecycle = lifecycle

    async def execute(self, request: CancelAppointmentRequest) -> "Appointment":
        """Execute the cancel appointment use case.

        Args:
            request: Cancellation request with appointment ID and reason.

        Returns:
            The cancelled appointment.
        """
        logger.info(f"Cancelling appointment {request.appointment_id}")
        return await self._lifecycle.cancel(
            request.appointment_id,
            reason=request.reason,
            actor_id=request.actor_id,
        )
