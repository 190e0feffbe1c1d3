"""
In-memory implementations of the assistance ports.

Entities are deep-copied on the way in and on the way out, so callers never
share state with the store.
"""

import logging
from copy import deepcopy
from datetime import datetime

from care_scheduling.core.domain import EntityNotFoundException, ValidationException

from ....domain.entities import Appointment, Professional, TrackingRecord
from ....domain.value_objects import Specialty

logger = logging.getLogger(__name__)


def _by_start(appointment: Appointment) -> datetime:
    return appointment.scheduled_start or datetime.min


class InMemoryProfessionalDirectory:
    """Professional directory backed by a dict."""

    def __init__(self, professionals: list[Professional] | None = None):
        self._professionals: dict[str, Professional] = {}
        for professional in professionals or []:
            self.add(professional)

    def add(self, professional: Professional) -> Professional:
        """Register or replace a professional."""
        if not professional.id:
            raise ValidationException("Professional id is required", field="id")
        self._professionals[professional.id] = deepcopy(professional)
        return deepcopy(professional)

    async def find_by_id(self, professional_id: str) -> Professional | None:
        professional = self._professionals.get(professional_id)
        return deepcopy(professional) if professional else None

    async def find_by_specialty(self, specialty: Specialty) -> list[Professional]:
        return [deepcopy(p) for p in self._professionals.values() if p.specialty == specialty]

    async def find_active(self) -> list[Professional]:
        return [deepcopy(p) for p in self._professionals.values() if p.can_accept_appointments()]


class InMemoryAppointmentStore:
    """Appointment store backed by a dict keyed by id."""

    def __init__(self):
        self._appointments: dict[str, Appointment] = {}

    async def create(self, appointment: Appointment) -> Appointment:
        if not appointment.id:
            raise ValidationException("Appointment id is required", field="id")
        if appointment.id in self._appointments:
            raise ValidationException(f"Appointment {appointment.id} already exists", field="id")
        self._appointments[appointment.id] = deepcopy(appointment)
        logger.debug(f"Stored appointment {appointment.id}")
        return deepcopy(appointment)

    async def update(self, appointment_id: str, appointment: Appointment) -> Appointment:
        if appointment_id not in self._appointments:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        self._appointments[appointment_id] = deepcopy(appointment)
        return deepcopy(appointment)

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        appointment = self._appointments.get(appointment_id)
        return deepcopy(appointment) if appointment else None

    async def find_by_professional_and_range(
        self,
        professional_id: str,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        found = [
            a
            for a in self._appointments.values()
            if a.professional_id == professional_id
            and a.scheduled_start is not None
            and a.scheduled_end is not None
            and a.scheduled_start < end
            and a.scheduled_end > start
        ]
        return [deepcopy(a) for a in sorted(found, key=_by_start)]

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        found = [a for a in self._appointments.values() if a.patient_id == patient_id]
        return [deepcopy(a) for a in sorted(found, key=_by_start)]

    async def find_all(self) -> list[Appointment]:
        return [deepcopy(a) for a in sorted(self._appointments.values(), key=_by_start)]


class InMemoryTrackingRecordStore:
    """Tracking record store backed by a dict keyed by id."""

    def __init__(self):
        self._records: dict[str, TrackingRecord] = {}

    async def find_by_patient(self, patient_id: str) -> list[TrackingRecord]:
        return [deepcopy(r) for r in self._records.values() if r.patient_id == patient_id]

    async def create(self, record: TrackingRecord) -> TrackingRecord:
        if not record.id:
            raise ValidationException("Tracking record id is required", field="id")
        self._records[record.id] = deepcopy(record)
        return deepcopy(record)
