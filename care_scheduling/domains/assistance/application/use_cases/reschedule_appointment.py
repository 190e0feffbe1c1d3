# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for moving an appointment to a new time.
# ============================================================================
"""Reschedule Appointment Use Case."""

import logging
from typing import TYPE_CHECKING

from ..dto import RescheduleAppointmentRequest

if TYPE_CHECKING:
    from ...domain.entities import Appointment
    from ..services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class RescheduleAppointmentUseCase:
    """Use case for rescheduling an appointment.

    The moved appointment goes back to scheduled and needs a new
    confirmation.
    """

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        self._lifecycle = lifecycle

    async def execute(self, request: RescheduleAppointmentRequest) -> "Appointment":
        """Execute the reschedule use case.

        Raises:
            InvalidTransitionException: Appointment cannot be rescheduled.
            AppointmentConflictException: New slot already taken.
        """
        logger.info(f"Rescheduling appointment {request.appointment_id} to {request.new_start.isoformat()}")
        return await self._lifecycle.reschedule(
            request.appointment_id,
            request.new_start,
            actor_id=request.actor_id,
            new_end=request.new_end,
        )
