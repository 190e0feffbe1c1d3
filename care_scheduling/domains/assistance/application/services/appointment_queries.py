"""
Appointment Query Service

Read-side helpers over the appointment store: upcoming, overdue, search.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from ...domain.entities import Appointment
from ..ports import IAppointmentStore

logger = logging.getLogger(__name__)


class AppointmentQueryService:
    """Queries that read the whole store and filter in memory."""

    def __init__(
        self,
        appointment_store: IAppointmentStore,
        upcoming_window_days: int = 7,
        clock: Callable[[], datetime] | None = None,
    ):
        self._appointments = appointment_store
        self._upcoming_window_days = upcoming_window_days
        self._clock = clock or datetime.now

    async def find_upcoming(self, days: int | None = None) -> list[Appointment]:
        """Active appointments starting within the next ``days`` days, soonest first."""
        now = self._clock()
        horizon = now + timedelta(days=days if days is not None else self._upcoming_window_days)
        appointments = await self._appointments.find_all()
        upcoming = [
            a
            for a in appointments
            if a.blocks_schedule and a.scheduled_start is not None and now <= a.scheduled_start <= horizon
        ]
        return sorted(upcoming, key=lambda a: a.scheduled_start)

    async def find_overdue(self, now: datetime | None = None) -> list[Appointment]:
        """Scheduled or confirmed appointments whose end already passed."""
        now = now or self._clock()
        appointments = await self._appointments.find_all()
        overdue = [a for a in appointments if a.is_overdue(now)]
        if overdue:
            logger.info(f"Found {len(overdue)} overdue appointments")
        return sorted(overdue, key=lambda a: a.scheduled_start)

    async def search(self, term: str) -> list[Appointment]:
        """Case-insensitive search on patient name, professional name and reason."""
        appointments = await self._appointments.find_all()
        return [a for a in appointments if a.matches(term)]

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        return await self._appointments.find_by_patient(patient_id)
