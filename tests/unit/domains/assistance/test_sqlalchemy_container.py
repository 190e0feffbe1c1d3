# ============================================================================
# Tests for AssistanceContainer.for_session
# ============================================================================
"""Integration tests wiring the lifecycle to the SQLAlchemy adapters.

Uses a file-backed SQLite database so that handler sessions get their own
connections.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from care_scheduling.config import Settings
from care_scheduling.core.container import AssistanceContainer
from care_scheduling.domains.assistance.application.dto import CreateAppointmentRequest
from care_scheduling.domains.assistance.domain.value_objects import AppointmentStatus, Specialty, TrackingRecordStatus
from care_scheduling.domains.assistance.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyAppointmentStore,
    SQLAlchemyProfessionalDirectory,
    SQLAlchemyTrackingRecordStore,
    create_session_factory,
    init_models,
    session_scope,
)
from tests.utils import at, make_professional, physiotherapy_intake

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'care_scheduling.db'}")
    await init_models(engine)
    factory = create_session_factory(engine)
    async with session_scope(factory) as session:
        await SQLAlchemyProfessionalDirectory(session).save(make_professional())
    yield factory
    await engine.dispose()


def booking(patient_id: str, hour: int, **overrides) -> CreateAppointmentRequest:
    data = {
        "patient_id": patient_id,
        "patient_name": f"Patient {patient_id}",
        "patient_phone": "11987654321",
        "professional_id": "prof-1",
        "scheduled_start": at(hour),
        "reason": "Lower back pain for two weeks",
        "actor_id": "staff-1",
    }
    data.update(overrides)
    return CreateAppointmentRequest(**data)


async def records_of(session_factory, patient_id: str):
    async with session_factory() as session:
        return await SQLAlchemyTrackingRecordStore(session).find_by_patient(patient_id)


class TestSharedSession:
    """Tests for for_session without a session factory."""

    @pytest.mark.asyncio
    async def test_dispatches_inline(self, session_factory) -> None:
        """Should not run background handlers on the caller's session."""
        async with session_factory() as session:
            container = AssistanceContainer.for_session(session, Settings(_env_file=None))

        assert container.settings.EVENT_DISPATCH_MODE == "inline"
        assert container.event_publisher.dispatch_mode == "inline"

    @pytest.mark.asyncio
    async def test_back_to_back_confirmations(self, session_factory) -> None:
        """Should confirm two bookings in a row and keep the session usable."""
        async with session_factory() as session:
            container = AssistanceContainer.for_session(session, Settings(_env_file=None))
            lifecycle = container.create_lifecycle_service()

            first = await lifecycle.create(booking("pat-1", 8))
            second = await lifecycle.create(booking("pat-2", 10))
            confirmed_first = await lifecycle.confirm(first.id, actor_id="staff-1")
            confirmed_second = await lifecycle.confirm(second.id, actor_id="staff-1")
            third = await lifecycle.create(booking("pat-3", 14))

        assert confirmed_first.status == AppointmentStatus.CONFIRMED
        assert confirmed_second.status == AppointmentStatus.CONFIRMED
        assert third.status == AppointmentStatus.SCHEDULED
        assert len(await records_of(session_factory, "pat-1")) == 1
        assert len(await records_of(session_factory, "pat-2")) == 1


class TestSessionFactory:
    """Tests for for_session with background handlers on their own sessions."""

    @pytest.mark.asyncio
    async def test_back_to_back_confirmations_in_background(self, session_factory) -> None:
        async with session_factory() as session:
            container = AssistanceContainer.for_session(
                session,
                Settings(_env_file=None, EVENT_DISPATCH_MODE="background"),
                session_factory=session_factory,
            )
            lifecycle = container.create_lifecycle_service()

            first = await lifecycle.create(booking("pat-1", 8))
            second = await lifecycle.create(booking("pat-2", 10))
            confirmed_first = await lifecycle.confirm(first.id, actor_id="staff-1")
            confirmed_second = await lifecycle.confirm(second.id, actor_id="staff-1")
            third = await lifecycle.create(booking("pat-3", 14))
            await container.event_publisher.drain()

        assert container.event_publisher.dispatch_mode == "background"
        assert confirmed_first.status == AppointmentStatus.CONFIRMED
        assert confirmed_second.status == AppointmentStatus.CONFIRMED
        assert third.status == AppointmentStatus.SCHEDULED
        assert len(await records_of(session_factory, "pat-1")) == 1
        assert len(await records_of(session_factory, "pat-2")) == 1

    @pytest.mark.asyncio
    async def test_full_lifecycle_projects_physiotherapy_record(self, session_factory) -> None:
        """Should book, confirm, attend and complete, leaving one projected record."""
        async with session_factory() as session:
            container = AssistanceContainer.for_session(
                session,
                Settings(_env_file=None, EVENT_DISPATCH_MODE="background"),
                session_factory=session_factory,
            )
            lifecycle = container.create_lifecycle_service()

            appointment = await lifecycle.create(booking("pat-1", 10, intake=physiotherapy_intake()))
            await lifecycle.confirm(appointment.id, actor_id="staff-1")
            await container.event_publisher.drain()
            await lifecycle.start_consultation(appointment.id, actor_id="prof-1")
            await lifecycle.complete_consultation(appointment.id, actor_id="prof-1", notes="Home exercises")
            await container.event_publisher.drain()

        async with session_factory() as session:
            stored = await SQLAlchemyAppointmentStore(session).find_by_id(appointment.id)
        records = await records_of(session_factory, "pat-1")

        assert stored.status == AppointmentStatus.COMPLETED
        assert [h.new_status for h in stored.history][-1] == AppointmentStatus.COMPLETED
        assert len(stored.history) == 4

        assert len(records) == 1
        record = records[0]
        assert record.specialty == Specialty.PHYSIOTHERAPY
        assert record.status == TrackingRecordStatus.ACTIVE
        assert record.source_appointment_id == appointment.id
        assert record.specialized_data["physiotherapy"]["pain_scale"] == 7
        assert record.specialized_data["physiotherapy"]["presentation"] == ["walking"]

        names = [name for name, _ in container.notifier.sent]
        assert names == [
            "appointment_created",
            "appointment_confirmed",
            "consultation_started",
            "consultation_completed",
        ]
