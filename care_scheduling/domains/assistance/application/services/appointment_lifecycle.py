# ============================================================================
# SCOPE: APPLICATION LAYER (Assistance)
# Description: Appointment lifecycle: create, confirm, cancel, reschedule,
#              start, complete and no-show.
# ============================================================================
"""Appointment Lifecycle Service.

Each operation reads what it needs from the ports, validates, performs one
write and then publishes the domain events recorded by the aggregate.
Notification and tracking-record projection are event subscribers, so their
failures never change the result of the operation.

There is no lock between the conflict check and the write: two concurrent
bookings for the same slot can both pass the check. Strict exclusion needs a
fence in the storage layer.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from care_scheduling.core.domain import (
    AppointmentConflictException,
    DomainEventPublisher,
    EntityNotFoundException,
    ValidationException,
)
from care_scheduling.core.shared.logger import get_service_logger

from ...domain.entities import Appointment, Professional
from ...domain.services import AvailabilityCalculator, ConflictDetector
from ...domain.value_objects import AppointmentStatus, Interval
from ..dto import CreateAppointmentRequest
from ..ports import IAppointmentStore, IProfessionalDirectory


class AppointmentLifecycleService:
    """
    Application service driving appointments through their states.

    Example:
        ```python
        lifecycle = AppointmentLifecycleService(directory, store, publisher)
        appointment = await lifecycle.create(request)
        appointment = await lifecycle.confirm(appointment.id, actor_id="staff-1")
        ```
    """

    def __init__(
        self,
        professional_directory: IProfessionalDirectory,
        appointment_store: IAppointmentStore,
        event_publisher: DomainEventPublisher,
        availability_calculator: AvailabilityCalculator | None = None,
        conflict_detector: ConflictDetector | None = None,
        min_reason_length: int = 10,
    ):
        """
        Initialize lifecycle service.

        Args:
            professional_directory: Source of professionals
            appointment_store: Appointment persistence
            event_publisher: Publisher for post-write side effects
            availability_calculator: Provides default consultation duration
            conflict_detector: Booking overlap checks
            min_reason_length: Minimum characters of the booking reason
        """
        self._directory = professional_directory
        self._appointments = appointment_store
        self._publisher = event_publisher
        self._availability = availability_calculator or AvailabilityCalculator()
        self._conflicts = conflict_detector or ConflictDetector()
        self._min_reason_length = min_reason_length
        self._log = get_service_logger("appointment_lifecycle")

    async def create(self, request: CreateAppointmentRequest) -> Appointment:
        """
        Book a new appointment.

        Raises:
            ValidationException: Invalid request or professional not accepting bookings
            EntityNotFoundException: Unknown professional
            AppointmentConflictException: Slot already taken
        """
        if not (request.professional_id or "").strip():
            raise ValidationException("Professional is required", field="professional_id")

        professional = await self._get_professional(request.professional_id)
        if not professional.can_accept_appointments():
            raise ValidationException(
                f"Professional {professional.id} is not accepting appointments ({professional.status.value})",
                field="professional_id",
            )
        specialty = request.specialty or professional.specialty
        if specialty != professional.specialty:
            raise ValidationException(
                f"Professional {professional.id} does not attend {specialty.value}",
                field="specialty",
            )

        scheduled_end = request.scheduled_end
        if scheduled_end is None and request.scheduled_start is not None:
            duration = self._availability.effective_duration_minutes(professional)
            scheduled_end = request.scheduled_start + timedelta(minutes=duration)

        price = request.price
        if price is None:
            price = professional.consultation_price or Decimal("0")

        appointment = Appointment.schedule(
            patient_id=request.patient_id,
            patient_name=request.patient_name,
            patient_phone=request.patient_phone,
            patient_email=request.patient_email,
            professional_id=professional.id or request.professional_id,
            professional_name=professional.name,
            specialty=specialty,
            scheduled_start=request.scheduled_start,
            scheduled_end=scheduled_end,
            reason=request.reason,
            actor_id=request.actor_id,
            priority=request.priority,
            modality=request.modality,
            online_link=professional.online_link if request.modality.is_remote else None,
            price=price,
            discount=request.discount,
            patient_notes=request.patient_notes,
            intake=request.intake,
            min_reason_length=self._min_reason_length,
        )

        await self._ensure_no_conflict(appointment.professional_id, appointment.interval)

        stored = await self._persist(appointment, created=True)
        self._log.info(
            "Appointment created",
            appointment_id=stored.id,
            professional_id=stored.professional_id,
            scheduled_start=str(stored.scheduled_start),
        )
        return stored

    async def confirm(self, appointment_id: str, actor_id: str) -> Appointment:
        """Confirm a scheduled appointment; a tracking record is projected afterwards."""
        appointment = await self._get_appointment(appointment_id)
        appointment.confirm(actor_id=actor_id)
        return await self._save_transition(appointment, "confirmed", actor_id)

    async def cancel(self, appointment_id: str, reason: str, actor_id: str) -> Appointment:
        """Cancel a scheduled or confirmed appointment."""
        appointment = await self._get_appointment(appointment_id)
        appointment.cancel(reason=reason, actor_id=actor_id)
        return await self._save_transition(appointment, "cancelled", actor_id)

    async def reschedule(
        self,
        appointment_id: str,
        new_start: datetime,
        actor_id: str,
        new_end: datetime | None = None,
    ) -> Appointment:
        """
        Move an appointment to a new time, keeping its duration by default.

        Raises:
            InvalidTransitionException: Appointment cannot be rescheduled
            AppointmentConflictException: New slot already taken
        """
        appointment = await self._get_appointment(appointment_id)
        appointment.ensure_can_transition("reschedule", AppointmentStatus.RESCHEDULED)

        new_end = new_end or new_start + appointment.interval.duration
        Appointment.validate_window(new_start, new_end)
        await self._ensure_no_conflict(
            appointment.professional_id,
            Interval(start=new_start, end=new_end),
            exclude_appointment_id=appointment.id,
        )

        appointment.reschedule(new_start, actor_id=actor_id, new_end=new_end)
        return await self._save_transition(appointment, "rescheduled", actor_id)

    async def start_consultation(self, appointment_id: str, actor_id: str) -> Appointment:
        """Move a confirmed appointment to in progress."""
        appointment = await self._get_appointment(appointment_id)
        appointment.start_consultation(actor_id=actor_id)
        return await self._save_transition(appointment, "started", actor_id)

    async def complete_consultation(
        self,
        appointment_id: str,
        actor_id: str,
        notes: str | None = None,
    ) -> Appointment:
        """Complete an in-progress consultation."""
        appointment = await self._get_appointment(appointment_id)
        appointment.complete_consultation(actor_id=actor_id, notes=notes)
        return await self._save_transition(appointment, "completed", actor_id)

    async def mark_no_show(self, appointment_id: str, actor_id: str) -> Appointment:
        """Record that the patient did not attend."""
        appointment = await self._get_appointment(appointment_id)
        appointment.mark_no_show(actor_id=actor_id)
        return await self._save_transition(appointment, "marked as no-show", actor_id)

    # Helpers

    async def _get_professional(self, professional_id: str) -> Professional:
        professional = await self._directory.find_by_id(professional_id)
        if professional is None:
            raise EntityNotFoundException(entity_type="Professional", entity_id=professional_id)
        return professional

    async def _get_appointment(self, appointment_id: str) -> Appointment:
        appointment = await self._appointments.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        return appointment

    async def _ensure_no_conflict(
        self,
        professional_id: str,
        interval: Interval,
        exclude_appointment_id: str | None = None,
    ) -> None:
        existing = await self._appointments.find_by_professional_and_range(
            professional_id, interval.start, interval.end
        )
        conflicts = self._conflicts.find_conflicts(
            professional_id,
            interval.start,
            interval.end,
            existing,
            exclude_appointment_id=exclude_appointment_id,
        )
        if conflicts:
            self._log.warning(
                "Booking rejected: slot taken",
                professional_id=professional_id,
                time_slot=str(interval),
                conflicting_ids=[c.id for c in conflicts],
            )
            raise AppointmentConflictException(
                professional_id=professional_id,
                time_slot=str(interval),
                message=f"Professional {professional_id} already has an appointment at {interval}",
            )

    async def _save_transition(self, appointment: Appointment, verb: str, actor_id: str) -> Appointment:
        stored = await self._persist(appointment, created=False)
        self._log.info(
            f"Appointment {verb}",
            appointment_id=stored.id,
            status=stored.status.value,
            actor_id=actor_id,
        )
        return stored

    async def _persist(self, appointment: Appointment, created: bool) -> Appointment:
        # Events leave the aggregate before the write and go out only after it
        events = appointment.pull_domain_events()
        if created:
            stored = await self._appointments.create(appointment)
        else:
            stored = await self._appointments.update(appointment.id or "", appointment)
        await self._publisher.publish_all(events)
        return stored
