# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for listing a professional's free slots.
# ============================================================================
"""Get Available Slots Use Case."""

import logging
from datetime import datetime

from care_scheduling.core.domain import EntityNotFoundException

from ...domain.services import AvailabilityCalculator
from ..dto import GetAvailableSlotsRequest
from ..ports import IAppointmentStore, IProfessionalDirectory

logger = logging.getLogger(__name__)


class GetAvailableSlotsUseCase:
    """Use case for computing open slots from stored bookings."""

    def __init__(
        self,
        professional_directory: IProfessionalDirectory,
        appointment_store: IAppointmentStore,
        availability_calculator: AvailabilityCalculator | None = None,
    ) -> None:
        """Initialize use case.

        Args:
            professional_directory: Source of professionals.
            appointment_store: Source of existing bookings.
            availability_calculator: Slot generator.
        """
        self._directory = professional_directory
        self._appointments = appointment_store
        self._calculator = availability_calculator or AvailabilityCalculator()

    async def execute(self, request: GetAvailableSlotsRequest) -> tuple[datetime, ...]:
        """Execute the get available slots use case.

        Returns:
            Ascending tuple of slot starts.

        Raises:
            EntityNotFoundException: If the professional does not exist.
        """
        if request.range_end <= request.range_start:
            return ()

        professional = await self._directory.find_by_id(request.professional_id)
        if professional is None:
            raise EntityNotFoundException(entity_type="Professional", entity_id=request.professional_id)

        existing = await self._appointments.find_by_professional_and_range(
            request.professional_id, request.range_start, request.range_end
        )
        slots = self._calculator.available_slots(
            professional=professional,
            range_start=request.range_start,
            range_end=request.range_end,
            existing_appointments=existing,
            not_before=request.not_before,
        )
        logger.debug(f"{len(slots)} free slots for professional {request.professional_id}")
        return slots
