# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Use case for appointment statistics (overall or per professional).
# ============================================================================
"""Get Appointment Statistics Use Case."""

from collections.abc import Callable
from datetime import datetime

from ...domain.services import AppointmentStatistics, calculate_statistics
from ..ports import IAppointmentStore


class GetAppointmentStatisticsUseCase:
    """Use case for reporting figures over stored appointments."""

    def __init__(
        self,
        appointment_store: IAppointmentStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._appointments = appointment_store
        self._clock = clock or datetime.now

    async def execute(self, professional_id: str | None = None) -> AppointmentStatistics:
        """Compute statistics, optionally restricted to one professional."""
        appointments = await self._appointments.find_all()
        if professional_id is not None:
            appointments = [a for a in appointments if a.professional_id == professional_id]
        return calculate_statistics(appointments, now=self._clock())
