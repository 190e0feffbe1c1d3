# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for confirming an appointment.
# ============================================================================
"""Confirm Appointment Use Case."""

import logging
from typing import TYPE_CHECKING

from ..dto import AppointmentActionRequest

if TYPE_CHECKING:
    from ...domain.entities import Appointment
    from ..services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class ConfirmAppointmentUseCase:
    """Use case for confirming a scheduled appointment.

    Confirmation triggers the tracking record projection through the
    ``AppointmentConfirmed`` event.
    """

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        self._lifecycle = lifecycle

    async def execute(self, request: AppointmentActionRequest) -> "Appointment":
        logger.info(f"Confirming appointment {request.appointment_id}")
        return await self._lifecycle.confirm(request.appointment_id, actor_id=request.actor_id)
