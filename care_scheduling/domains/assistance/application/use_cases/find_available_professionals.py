# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for finding professionals of a specialty with free
#              slots on a given day.
# ============================================================================
"""Find Available Professionals Use Case."""

import logging
from datetime import datetime, time, timedelta

from ...domain.services import AvailabilityCalculator
from ..dto import FindAvailableProfessionalsRequest, ProfessionalAvailabilityDTO
from ..ports import IAppointmentStore, IProfessionalDirectory

logger = logging.getLogger(__name__)


class FindAvailableProfessionalsUseCase:
    """Use case listing active professionals that still have room on a day."""

    def __init__(
        self,
        professional_directory: IProfessionalDirectory,
        appointment_store: IAppointmentStore,
        availability_calculator: AvailabilityCalculator | None = None,
    ) -> None:
        self._directory = professional_directory
        self._appointments = appointment_store
        self._calculator = availability_calculator or AvailabilityCalculator()

    async def execute(self, request: FindAvailableProfessionalsRequest) -> list[ProfessionalAvailabilityDTO]:
        """Execute the use case.

        Returns:
            One entry per professional with at least one free slot, in
            directory order.
        """
        day_start = datetime.combine(request.day, time.min)
        day_end = day_start + timedelta(days=1)

        professionals = await self._directory.find_by_specialty(request.specialty)
        result: list[ProfessionalAvailabilityDTO] = []

        for professional in professionals:
            if not professional.can_accept_appointments() or professional.id is None:
                continue

            existing = await self._appointments.find_by_professional_and_range(professional.id, day_start, day_end)
            slots = self._calculator.available_slots(professional, day_start, day_end, existing)
            if slots:
                result.append(
                    ProfessionalAvailabilityDTO.from_slots(professional, slots, request.slots_per_professional)
                )

        logger.info(
            f"{len(result)} of {len(professionals)} {request.specialty.value} professionals available on {request.day}"
        )
        return result
