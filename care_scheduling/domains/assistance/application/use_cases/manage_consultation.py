# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use cases for the consultation itself (start, complete, no-show).
# ============================================================================
"""Consultation Use Cases."""

import logging
from typing import TYPE_CHECKING

from ..dto import AppointmentActionRequest, CompleteConsultationRequest

if TYPE_CHECKING:
    from ...domain.entities import Appointment
    from ..services import AppointmentLifecycleService

logger = logging.getLogger(__name__)


class StartConsultationUseCase:
    """Use case for starting the consultation of a confirmed appointment."""

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        self._lifecycle = lifecycle

    async def execute(self, request: AppointmentActionRequest) -> "Appointment":
        logger.info(f"Starting consultation {request.appointment_id}")
        return await self._lifecycle.start_consultation(request.appointment_id, actor_id=request.actor_id)


class CompleteConsultationUseCase:
    """Use case for completing an in-progress consultation."""

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        self._lifecycle = lifecycle

    async def execute(self, request: CompleteConsultationRequest) -> "Appointment":
        logger.info(f"Completing consultation {request.appointment_id}")
        return await self._lifecycle.complete_consultation(
            request.appointment_id,
            actor_id=request.actor_id,
            notes=request.notes,
        )


class MarkNoShowUseCase:
    """Use case for recording that the patient did not attend."""

    def __init__(self, lifecycle: "AppointmentLifecycleService") -> None:
        self._lifecycle = lifecycle

    async def execute(self, request: AppointmentActionRequest) -> "Appointment":
        logger.info(f"Marking appointment {request.appointment_id} as no-show")
        return await self._lifecycle.mark_no_show(request.appointment_id, actor_id=request.actor_id)
