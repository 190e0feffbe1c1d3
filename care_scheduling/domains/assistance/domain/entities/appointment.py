"""
Appointment Entity for Assistance Domain

Represents a booked consultation with a professional, its lifecycle and
its append-only history.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from care_scheduling.core.domain import (
    AggregateRoot,
    Email,
    InvalidTransitionException,
    PhoneNumber,
    ValidationException,
    generate_uuid_str,
)

from ..events import (
    AppointmentCancelled,
    AppointmentConfirmed,
    AppointmentCreated,
    AppointmentMarkedNoShow,
    AppointmentRescheduled,
    ConsultationCompleted,
    ConsultationStarted,
)
from ..intake import IntakeVariant, parse_intake
from ..value_objects import (
    AppointmentModality,
    AppointmentPriority,
    AppointmentStatus,
    HistoryAction,
    HistoryEntry,
    Interval,
    Specialty,
)

NO_SHOW_NOTE = "Patient did not attend"


def _to_decimal(value: Any, field_name: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationException(f"Invalid amount: {value}", field=field_name) from e
    if amount < 0:
        raise ValidationException("Amount cannot be negative", field=field_name)
    return amount


def calculate_final_price(price: Decimal | float | int, discount: Decimal | float | int = 0) -> Decimal:
    """Price charged to the patient: price minus discount."""
    price_amount = _to_decimal(price, "price")
    discount_amount = _to_decimal(discount, "discount")
    if discount_amount > price_amount:
        raise ValidationException("Discount cannot exceed the consultation price", field="discount")
    return price_amount - discount_amount


@dataclass
class Appointment(AggregateRoot[str]):
    """
    Appointment aggregate root for assistance domain.

    Every transition checks the status graph before touching any field, then
    appends exactly one history entry and records one domain event. History
    entries are never edited or removed.

    Example:
        ```python
        appointment = Appointment.schedule(
            patient_id="pat-1",
            patient_name="Maria Silva",
            patient_phone="11987654321",
            professional_id="prof-1",
            specialty=Specialty.PHYSIOTHERAPY,
            scheduled_start=datetime(2024, 1, 15, 10, 0),
            scheduled_end=datetime(2024, 1, 15, 10, 50),
            reason="Lower back pain for two weeks",
            actor_id="staff-1",
        )
        appointment.confirm(actor_id="staff-1")
        appointment.start_consultation(actor_id="prof-1")
        appointment.complete_consultation(actor_id="prof-1", notes="Home exercises prescribed")
        ```
    """

    # Patient
    patient_id: str = ""
    patient_name: str = ""
    patient_phone: str = ""
    patient_email: str | None = None

    # Professional
    professional_id: str = ""
    professional_name: str = ""
    specialty: Specialty = Specialty.MEDICAL

    # Scheduling
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    priority: AppointmentPriority = AppointmentPriority.NORMAL
    modality: AppointmentModality = AppointmentModality.IN_PERSON
    online_link: str | None = None

    # Clinical information
    reason: str = ""
    patient_notes: str | None = None
    professional_notes: str | None = None
    intake: IntakeVariant | None = None

    # Billing
    price: Decimal = field(default_factory=lambda: Decimal("0"))
    discount: Decimal = field(default_factory=lambda: Decimal("0"))

    # Audit
    history: list[HistoryEntry] = field(default_factory=list)
    created_by: str | None = None
    confirmed_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    # Properties

    @property
    def interval(self) -> Interval:
        if self.scheduled_start is None or self.scheduled_end is None:
            raise ValidationException("Appointment has no scheduled time", field="scheduled_start")
        return Interval(start=self.scheduled_start, end=self.scheduled_end)

    @property
    def duration_minutes(self) -> int:
        return self.interval.duration_minutes

    @property
    def final_price(self) -> Decimal:
        return calculate_final_price(self.price, self.discount)

    @property
    def blocks_schedule(self) -> bool:
        """Active appointments occupy their slot."""
        return self.status.is_active()

    # Factory

    @classmethod
    def schedule(
        cls,
        *,
        patient_id: str,
        patient_name: str,
        patient_phone: str,
        professional_id: str,
        specialty: Specialty,
        scheduled_start: datetime,
        scheduled_end: datetime,
        reason: str,
        actor_id: str,
        professional_name: str = "",
        patient_email: str | None = None,
        priority: AppointmentPriority = AppointmentPriority.NORMAL,
        modality: AppointmentModality = AppointmentModality.IN_PERSON,
        online_link: str | None = None,
        price: Decimal | float | int = 0,
        discount: Decimal | float | int = 0,
        patient_notes: str | None = None,
        intake: Any = None,
        min_reason_length: int = 10,
    ) -> "Appointment":
        """Validate a booking request and build a new scheduled appointment.

        Raises:
            ValidationException: On missing or malformed input.
        """
        appointment = cls(
            id=generate_uuid_str(),
            patient_id=(patient_id or "").strip(),
            patient_name=(patient_name or "").strip(),
            patient_phone=patient_phone or "",
            patient_email=patient_email or None,
            professional_id=(professional_id or "").strip(),
            professional_name=professional_name,
            specialty=specialty,
            scheduled_start=scheduled_start,
            scheduled_end=scheduled_end,
            priority=priority,
            modality=modality,
            online_link=online_link,
            reason=(reason or "").strip(),
            patient_notes=patient_notes,
            intake=parse_intake(intake),
            price=_to_decimal(price, "price"),
            discount=_to_decimal(discount, "discount"),
            created_by=actor_id,
        )
        appointment.validate(min_reason_length=min_reason_length)
        appointment._append_history(
            HistoryAction.CREATED,
            actor_id,
            note="Appointment created",
            previous_status=None,
            new_status=AppointmentStatus.SCHEDULED,
        )
        appointment._record_event(
            AppointmentCreated(
                **appointment._event_payload(actor_id),
                specialty=appointment.specialty.value,
                scheduled_start=appointment.scheduled_start,
                scheduled_end=appointment.scheduled_end,
            )
        )
        return appointment

    def validate(self, min_reason_length: int = 10) -> None:
        """Check the booking invariants.

        Raises:
            ValidationException: On the first violated rule.
        """
        if not self.patient_name:
            raise ValidationException("Patient name is required", field="patient_name")
        if not self.patient_id:
            raise ValidationException("Patient id is required", field="patient_id")
        try:
            self.patient_phone = PhoneNumber(self.patient_phone).number
        except ValueError as e:
            raise ValidationException("Phone must have 10 or 11 digits", field="patient_phone") from e
        if self.patient_email:
            try:
                self.patient_email = Email(self.patient_email).address
            except ValueError as e:
                raise ValidationException("Invalid email address", field="patient_email") from e
        if not self.professional_id:
            raise ValidationException("Professional is required", field="professional_id")
        self.validate_window(self.scheduled_start, self.scheduled_end)
        if len(self.reason) < min_reason_length:
            raise ValidationException(
                f"Reason must have at least {min_reason_length} characters",
                field="reason",
            )
        self._validate_intake()
        if self.discount > self.price:
            raise ValidationException("Discount cannot exceed the consultation price", field="discount")

    # Status Transitions

    def ensure_can_transition(self, operation: str, target: AppointmentStatus) -> None:
        """Raise InvalidTransitionException unless target is reachable."""
        if not self.status.can_transition_to(target):
            raise InvalidTransitionException(
                operation=operation,
                current_state=self.status.value,
                target_state=target.value,
            )

    def confirm(self, actor_id: str) -> None:
        """Confirm a scheduled appointment."""
        previous = self._transition("confirm", AppointmentStatus.CONFIRMED)
        self.confirmed_at = datetime.now(UTC)
        self._append_history(HistoryAction.CONFIRMED, actor_id, "Appointment confirmed", previous, self.status)
        self._record_event(
            AppointmentConfirmed(**self._event_payload(actor_id), scheduled_start=self.scheduled_start)
        )

    def cancel(self, reason: str, actor_id: str) -> None:
        """Cancel the appointment."""
        reason = (reason or "").strip()
        self.ensure_can_transition("cancel", AppointmentStatus.CANCELLED)
        if not reason:
            raise ValidationException("Cancellation reason is required", field="reason")
        previous = self._transition("cancel", AppointmentStatus.CANCELLED)
        self.cancelled_at = datetime.now(UTC)
        self.cancellation_reason = reason
        self._append_history(HistoryAction.CANCELLED, actor_id, reason, previous, self.status)
        self._record_event(AppointmentCancelled(**self._event_payload(actor_id), reason=reason))

    def reschedule(self, new_start: datetime, actor_id: str, new_end: datetime | None = None) -> None:
        """Move the appointment to a new time.

        The booking passes through RESCHEDULED and lands back on SCHEDULED,
        so a confirmed appointment needs a new confirmation. Without new_end
        the original duration is kept.
        """
        self.ensure_can_transition("reschedule", AppointmentStatus.RESCHEDULED)
        old_interval = self.interval
        new_end = new_end or new_start + old_interval.duration
        self.validate_window(new_start, new_end)

        previous = self.status
        self.scheduled_start = new_start
        self.scheduled_end = new_end
        self.status = AppointmentStatus.SCHEDULED
        self.confirmed_at = None
        self._mark_changed()

        note = (
            f"Superseded booking {old_interval.start.isoformat(timespec='minutes')} -> "
            f"{new_start.isoformat(timespec='minutes')}"
        )
        self._append_history(HistoryAction.RESCHEDULED, actor_id, note, previous, self.status)
        self._record_event(
            AppointmentRescheduled(
                **self._event_payload(actor_id),
                previous_start=old_interval.start,
                scheduled_start=new_start,
                scheduled_end=new_end,
            )
        )

    def start_consultation(self, actor_id: str) -> None:
        """Start the consultation (patient arrived)."""
        previous = self._transition("start_consultation", AppointmentStatus.IN_PROGRESS)
        self.started_at = datetime.now(UTC)
        self._append_history(HistoryAction.STARTED, actor_id, "Consultation started", previous, self.status)
        self._record_event(ConsultationStarted(**self._event_payload(actor_id)))

    def complete_consultation(self, actor_id: str, notes: str | None = None) -> None:
        """Complete the consultation."""
        previous = self._transition("complete_consultation", AppointmentStatus.COMPLETED)
        self.completed_at = datetime.now(UTC)
        if notes:
            self.professional_notes = notes
        self._append_history(
            HistoryAction.COMPLETED, actor_id, notes or "Consultation completed", previous, self.status
        )
        self._record_event(ConsultationCompleted(**self._event_payload(actor_id), notes=notes))

    def mark_no_show(self, actor_id: str) -> None:
        """Mark patient as no-show."""
        previous = self._transition("mark_no_show", AppointmentStatus.NO_SHOW)
        self._append_history(HistoryAction.NO_SHOW, actor_id, NO_SHOW_NOTE, previous, self.status)
        self._record_event(AppointmentMarkedNoShow(**self._event_payload(actor_id)))

    # Helpers

    def conflicts_with(self, other: "Appointment") -> bool:
        """Check if both appointments occupy overlapping time for the same professional."""
        if self.professional_id != other.professional_id:
            return False
        return self.interval.overlaps(other.interval)

    def is_overdue(self, now: datetime) -> bool:
        """Still scheduled or confirmed although its end has passed."""
        if self.scheduled_end is None:
            return False
        return (
            self.status in (AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED)
            and self.scheduled_end < now
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive match on patient, professional or reason."""
        needle = term.strip().lower()
        if not needle:
            return True
        haystack = (self.patient_name, self.professional_name, self.reason)
        return any(needle in (value or "").lower() for value in haystack)

    def _transition(self, operation: str, target: AppointmentStatus) -> AppointmentStatus:
        self.ensure_can_transition(operation, target)
        previous = self.status
        self.status = target
        self._mark_changed()
        return previous

    def _append_history(
        self,
        action: HistoryAction,
        actor_id: str,
        note: str,
        previous_status: AppointmentStatus | None,
        new_status: AppointmentStatus | None,
    ) -> None:
        self.history.append(
            HistoryEntry(
                timestamp=datetime.now(UTC),
                action=action,
                actor_id=actor_id,
                note=note,
                previous_status=previous_status,
                new_status=new_status,
            )
        )

    def _event_payload(self, actor_id: str) -> dict[str, Any]:
        return {
            "appointment_id": self.id or "",
            "patient_id": self.patient_id,
            "professional_id": self.professional_id,
            "actor_id": actor_id,
            "status": self.status.value,
        }

    @staticmethod
    def validate_window(start: datetime | None, end: datetime | None) -> None:
        if start is None or end is None:
            raise ValidationException("Start and end times are required", field="scheduled_start")
        if start.tzinfo is not None or end.tzinfo is not None:
            raise ValidationException(
                "Scheduled times must be local (naive) datetimes", field="scheduled_start"
            )
        if end <= start:
            raise ValidationException("End time must be after start time", field="scheduled_end")

    def _validate_intake(self) -> None:
        if self.intake is None:
            return
        if not self.specialty.has_intake or self.intake.kind != self.specialty.value:
            raise ValidationException(
                f"Intake '{self.intake.kind}' does not match specialty '{self.specialty.value}'",
                field="intake",
            )

    # Serialization

    def to_summary_dict(self) -> dict[str, Any]:
        """Convert to summary dictionary."""
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "patient_name": self.patient_name,
            "professional_id": self.professional_id,
            "professional_name": self.professional_name,
            "specialty": self.specialty.value,
            "scheduled_start": self.scheduled_start.isoformat() if self.scheduled_start else None,
            "scheduled_end": self.scheduled_end.isoformat() if self.scheduled_end else None,
            "status": self.status.value,
            "status_display": self.status.display_name,
            "modality": self.modality.value,
            "priority": self.priority.value,
            "final_price": str(self.final_price),
        }
