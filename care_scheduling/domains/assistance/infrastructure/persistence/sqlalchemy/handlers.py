"""
Event handlers bound to their own database session.

Background handlers must not share the caller's ``AsyncSession``; these open
one session per event through ``session_scope``.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from care_scheduling.core.domain import DomainEventPublisher
from care_scheduling.domains.assistance.application.handlers import RecordProjectionHandler
from care_scheduling.domains.assistance.domain.entities import TrackingRecord
from care_scheduling.domains.assistance.domain.events import AppointmentConfirmed
from care_scheduling.domains.assistance.domain.services import SpecializedRecordProjector

from .database import session_scope
from .repositories import SQLAlchemyAppointmentStore, SQLAlchemyTrackingRecordStore


class SessionScopedRecordProjectionHandler:
    """RecordProjectionHandler running on a fresh session for each event."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        projector: SpecializedRecordProjector | None = None,
        event_publisher: DomainEventPublisher | None = None,
    ):
        self._session_factory = session_factory
        self._projector = projector or SpecializedRecordProjector()
        self._publisher = event_publisher

    async def __call__(self, event: AppointmentConfirmed) -> None:
        await self.handle(event)

    async def handle(self, event: AppointmentConfirmed) -> TrackingRecord | None:
        async with session_scope(self._session_factory) as session:
            handler = RecordProjectionHandler(
                appointment_store=SQLAlchemyAppointmentStore(session),
                record_store=SQLAlchemyTrackingRecordStore(session),
                projector=self._projector,
                event_publisher=self._publisher,
            )
            return await handler.handle(event)
