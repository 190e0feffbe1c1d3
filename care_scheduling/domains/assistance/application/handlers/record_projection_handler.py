"""
Record Projection Handler

Opens a tracking record when an appointment is confirmed.
"""

import logging

from care_scheduling.core.domain import DomainEventPublisher, EntityNotFoundException

from ...domain.entities import TrackingRecord
from ...domain.events import AppointmentConfirmed
from ...domain.services import SpecializedRecordProjector
from ..ports import IAppointmentStore, ITrackingRecordStore

logger = logging.getLogger(__name__)


class RecordProjectionHandler:
    """
    Subscriber of AppointmentConfirmed.

    Re-reads the appointment and the patient's records, so it works from
    stored state even when it runs after other writes. Any exception is left
    to the publisher, which logs it without affecting the confirmation.
    """

    def __init__(
        self,
        appointment_store: IAppointmentStore,
        record_store: ITrackingRecordStore,
        projector: SpecializedRecordProjector | None = None,
        event_publisher: DomainEventPublisher | None = None,
    ):
        self._appointments = appointment_store
        self._records = record_store
        self._projector = projector or SpecializedRecordProjector()
        self._publisher = event_publisher

    async def __call__(self, event: AppointmentConfirmed) -> None:
        await self.handle(event)

    async def handle(self, event: AppointmentConfirmed) -> TrackingRecord | None:
        appointment = await self._appointments.find_by_id(event.appointment_id)
        if appointment is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=event.appointment_id)

        existing = await self._records.find_by_patient(appointment.patient_id)
        record = self._projector.project_on_confirm(appointment, existing, actor_id=event.actor_id)
        if record is None:
            logger.info(
                f"Patient {appointment.patient_id} already has a live record with "
                f"professional {appointment.professional_id}, skipping"
            )
            return None

        events = record.pull_domain_events()
        stored = await self._records.create(record)
        logger.info(f"Tracking record {stored.id} created from appointment {appointment.id}")
        if self._publisher is not None:
            await self._publisher.publish_all(events)
        return stored
