"""
Appointment Store Port

Interface for appointment persistence following Clean Architecture.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from care_scheduling.domains.assistance.domain.entities import Appointment


@runtime_checkable
class IAppointmentStore(Protocol):
    """
    Appointment store interface.

    Appointments are never deleted; cancellation is a terminal status.
    Implementations return detached copies, so mutating a returned entity
    does not change stored state until ``update`` is called.
    """

    async def create(self, appointment: Appointment) -> Appointment:
        """
        Persist a new appointment.

        Args:
            appointment: Appointment with its id already assigned

        Returns:
            The stored appointment
        """
        ...

    async def update(self, appointment_id: str, appointment: Appointment) -> Appointment:
        """
        Replace the stored state of an appointment.

        Args:
            appointment_id: Appointment to update
            appointment: New state (status, times, history, ...)

        Returns:
            The stored appointment

        Raises:
            EntityNotFoundException: If the appointment does not exist
        """
        ...

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        """Find appointment by ID."""
        ...

    async def find_by_professional_and_range(
        self,
        professional_id: str,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """
        Find a professional's appointments whose interval overlaps [start, end).

        Appointments in every status are returned; callers filter.
        """
        ...

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        """Find all appointments of a patient, ordered by start."""
        ...

    async def find_all(self) -> list[Appointment]:
        """Find every appointment, ordered by start."""
        ...
