"""
Assistance Repository Implementations

SQLAlchemy implementations of the assistance ports.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from care_scheduling.core.domain import EntityNotFoundException
from care_scheduling.core.shared.logger import get_repository_logger
from care_scheduling.domains.assistance.domain.entities import Appointment, Professional, TrackingRecord
from care_scheduling.domains.assistance.domain.intake import dump_intake, parse_intake
from care_scheduling.domains.assistance.domain.value_objects import HistoryEntry, Specialty, WorkingHours

from .models import AppointmentModel, ProfessionalModel, TrackingRecordModel


async def _commit_and_refresh(session: AsyncSession, model: object) -> None:
    """Commit the pending write and reload the model, rolling back on failure."""
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    await session.refresh(model)


class SQLAlchemyProfessionalDirectory:
    """
    SQLAlchemy implementation of the professional directory.

    ``save`` exists for seeding and administration; the scheduling engine
    itself only reads.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._log = get_repository_logger("professional_directory")

    async def find_by_id(self, professional_id: str) -> Professional | None:
        """Find professional by ID."""
        model = await self.session.get(ProfessionalModel, professional_id)
        return self._to_entity(model) if model else None

    async def find_by_specialty(self, specialty: Specialty) -> list[Professional]:
        """Find professionals of a specialty."""
        result = await self.session.execute(
            select(ProfessionalModel)
            .where(ProfessionalModel.specialty == specialty)
            .order_by(ProfessionalModel.name)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_active(self) -> list[Professional]:
        """Find professionals accepting appointments."""
        result = await self.session.execute(select(ProfessionalModel).order_by(ProfessionalModel.name))
        professionals = [self._to_entity(m) for m in result.scalars().all()]
        return [p for p in professionals if p.can_accept_appointments()]

    async def save(self, professional: Professional) -> Professional:
        """Save or update professional."""
        model = await self.session.get(ProfessionalModel, professional.id)
        if model is None:
            model = ProfessionalModel(id=professional.id)
            self.session.add(model)
        model.name = professional.name
        model.specialty = professional.specialty
        model.status = professional.status
        model.working_hours = [w.to_dict() for w in professional.working_hours]
        model.consultation_duration_minutes = professional.consultation_duration_minutes
        model.consultation_price = professional.consultation_price
        model.online_link = professional.online_link
        model.email = professional.email
        model.phone = professional.phone

        await _commit_and_refresh(self.session, model)
        self._log.debug("Professional saved", professional_id=professional.id)
        return self._to_entity(model)

    # Mapping methods

    def _to_entity(self, model: ProfessionalModel) -> Professional:
        """Convert model to entity."""
        professional = Professional(
            id=model.id,  # type: ignore[arg-type]
            name=model.name or "",  # type: ignore[arg-type]
            specialty=model.specialty,  # type: ignore[arg-type]
            working_hours=[WorkingHours.from_dict(w) for w in model.working_hours or []],
            consultation_duration_minutes=model.consultation_duration_minutes,  # type: ignore[arg-type]
            status=model.status,  # type: ignore[arg-type]
            consultation_price=model.consultation_price,  # type: ignore[arg-type]
            online_link=model.online_link,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
        )
        if model.created_at:
            professional.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            professional.updated_at = model.updated_at  # type: ignore[assignment]
        return professional


class SQLAlchemyAppointmentStore:
    """
    SQLAlchemy implementation of the appointment store.

    Each write commits on its own; history and intake are stored as JSON.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._log = get_repository_logger("appointment_store")

    async def create(self, appointment: Appointment) -> Appointment:
        """Persist a new appointment."""
        model = self._to_model(appointment)
        self.session.add(model)

        await _commit_and_refresh(self.session, model)
        self._log.debug("Appointment inserted", appointment_id=appointment.id)
        return self._to_entity(model)

    async def update(self, appointment_id: str, appointment: Appointment) -> Appointment:
        """Replace the stored state of an appointment."""
        model = await self.session.get(AppointmentModel, appointment_id)
        if model is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        self._update_model(model, appointment)

        await _commit_and_refresh(self.session, model)
        self._log.debug("Appointment updated", appointment_id=appointment_id, status=appointment.status.value)
        return self._to_entity(model)

    async def find_by_id(self, appointment_id: str) -> Appointment | None:
        """Find appointment by ID."""
        model = await self.session.get(AppointmentModel, appointment_id)
        return self._to_entity(model) if model else None

    async def find_by_professional_and_range(
        self,
        professional_id: str,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """Find a professional's appointments overlapping [start, end)."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(
                and_(
                    AppointmentModel.professional_id == professional_id,
                    # Time overlap check
                    AppointmentModel.scheduled_start < end,
                    AppointmentModel.scheduled_end > start,
                )
            )
            .order_by(AppointmentModel.scheduled_start)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_patient(self, patient_id: str) -> list[Appointment]:
        """Find appointments for a patient."""
        result = await self.session.execute(
            select(AppointmentModel)
            .where(AppointmentModel.patient_id == patient_id)
            .order_by(AppointmentModel.scheduled_start)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_all(self) -> list[Appointment]:
        """Find every appointment."""
        result = await self.session.execute(select(AppointmentModel).order_by(AppointmentModel.scheduled_start))
        return [self._to_entity(m) for m in result.scalars().all()]

    # Mapping methods

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert model to entity."""
        # Column() attributes return plain values at instance level
        appointment = Appointment(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            patient_name=model.patient_name,  # type: ignore[arg-type]
            patient_phone=model.patient_phone,  # type: ignore[arg-type]
            patient_email=model.patient_email,  # type: ignore[arg-type]
            professional_id=model.professional_id,  # type: ignore[arg-type]
            professional_name=model.professional_name or "",  # type: ignore[arg-type]
            specialty=model.specialty,  # type: ignore[arg-type]
            scheduled_start=model.scheduled_start,  # type: ignore[arg-type]
            scheduled_end=model.scheduled_end,  # type: ignore[arg-type]
            status=model.status,  # type: ignore[arg-type]
            priority=model.priority,  # type: ignore[arg-type]
            modality=model.modality,  # type: ignore[arg-type]
            online_link=model.online_link,  # type: ignore[arg-type]
            reason=model.reason or "",  # type: ignore[arg-type]
            patient_notes=model.patient_notes,  # type: ignore[arg-type]
            professional_notes=model.professional_notes,  # type: ignore[arg-type]
            intake=parse_intake(model.intake),
            price=Decimal(str(model.price or 0)),
            discount=Decimal(str(model.discount or 0)),
            history=[HistoryEntry.from_dict(h) for h in model.history or []],
            created_by=model.created_by,  # type: ignore[arg-type]
            version=model.version or 0,  # type: ignore[arg-type]
            confirmed_at=model.confirmed_at,  # type: ignore[arg-type]
            started_at=model.started_at,  # type: ignore[arg-type]
            completed_at=model.completed_at,  # type: ignore[arg-type]
            cancelled_at=model.cancelled_at,  # type: ignore[arg-type]
            cancellation_reason=model.cancellation_reason,  # type: ignore[arg-type]
        )

        if model.created_at:
            appointment.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            appointment.updated_at = model.updated_at  # type: ignore[assignment]

        return appointment

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        model = AppointmentModel(id=appointment.id)
        self._update_model(model, appointment)
        return model

    def _update_model(self, model: AppointmentModel, appointment: Appointment) -> None:
        """Copy every entity field onto the model."""
        model.patient_id = appointment.patient_id
        model.patient_name = appointment.patient_name
        model.patient_phone = appointment.patient_phone
        model.patient_email = appointment.patient_email
        model.professional_id = appointment.professional_id
        model.professional_name = appointment.professional_name
        model.specialty = appointment.specialty
        model.scheduled_start = appointment.scheduled_start
        model.scheduled_end = appointment.scheduled_end
        model.status = appointment.status
        model.priority = appointment.priority
        model.modality = appointment.modality
        model.online_link = appointment.online_link
        model.reason = appointment.reason
        model.patient_notes = appointment.patient_notes
        model.professional_notes = appointment.professional_notes
        model.intake = dump_intake(appointment.intake)
        model.price = appointment.price
        model.discount = appointment.discount
        model.history = [h.to_dict() for h in appointment.history]
        model.created_by = appointment.created_by
        model.version = appointment.version
        model.confirmed_at = appointment.confirmed_at
        model.started_at = appointment.started_at
        model.completed_at = appointment.completed_at
        model.cancelled_at = appointment.cancelled_at
        model.cancellation_reason = appointment.cancellation_reason


class SQLAlchemyTrackingRecordStore:
    """SQLAlchemy implementation of the tracking record store."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_repository_logger("tracking_record_store")

    async def find_by_patient(self, patient_id: str) -> list[TrackingRecord]:
        """Find all records of a patient."""
        result = await self.session.execute(
            select(TrackingRecordModel)
            .where(TrackingRecordModel.patient_id == patient_id)
            .order_by(TrackingRecordModel.created_at)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def create(self, record: TrackingRecord) -> TrackingRecord:
        """Persist a new record."""
        model = self._to_model(record)
        self.session.add(model)

        await _commit_and_refresh(self.session, model)
        self._log.debug("Tracking record inserted", record_id=record.id, patient_id=record.patient_id)
        return self._to_entity(model)

    def _to_model(self, record: TrackingRecord) -> TrackingRecordModel:
        return TrackingRecordModel(
            id=record.id,
            patient_id=record.patient_id,
            patient_name=record.patient_name,
            professional_id=record.professional_id,
            professional_name=record.professional_name,
            specialty=record.specialty,
            status=record.status,
            start_date=record.start_date,
            objective=record.objective,
            initial_diagnosis=record.initial_diagnosis,
            notes=record.notes,
            specialized_data=record.specialized_data,
            source_appointment_id=record.source_appointment_id,
            created_by=record.created_by,
            closed_at=record.closed_at,
        )

    def _to_entity(self, model: TrackingRecordModel) -> TrackingRecord:
        """Convert model to entity."""
        record = TrackingRecord(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            patient_name=model.patient_name or "",  # type: ignore[arg-type]
            professional_id=model.professional_id,  # type: ignore[arg-type]
            professional_name=model.professional_name or "",  # type: ignore[arg-type]
            specialty=model.specialty,  # type: ignore[arg-type]
            status=model.status,  # type: ignore[arg-type]
            start_date=model.start_date,  # type: ignore[arg-type]
            objective=model.objective or "",  # type: ignore[arg-type]
            initial_diagnosis=model.initial_diagnosis,  # type: ignore[arg-type]
            notes=model.notes,  # type: ignore[arg-type]
            specialized_data=model.specialized_data or {},  # type: ignore[arg-type]
            source_appointment_id=model.source_appointment_id,  # type: ignore[arg-type]
            created_by=model.created_by,  # type: ignore[arg-type]
            closed_at=model.closed_at,  # type: ignore[arg-type]
        )
        if model.created_at:
            record.created_at = model.created_at  # type: ignore[assignment]
        return record
