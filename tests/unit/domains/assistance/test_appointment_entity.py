# ============================================================================
# Tests for the Appointment aggregate
# ============================================================================
"""Unit tests for Appointment.

Tests booking validation, the lifecycle transitions, the append-only
history and the domain events recorded along the way.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from care_scheduling.core.domain import InvalidTransitionException, ValidationException
from care_scheduling.domains.assistance.domain.entities import NO_SHOW_NOTE, Appointment, calculate_final_price
from care_scheduling.domains.assistance.domain.events import (
    AppointmentCancelled,
    AppointmentConfirmed,
    AppointmentCreated,
    AppointmentMarkedNoShow,
    AppointmentRescheduled,
    ConsultationCompleted,
    ConsultationStarted,
)
from care_scheduling.domains.assistance.domain.intake import PhysiotherapyIntake
from care_scheduling.domains.assistance.domain.value_objects import (
    AppointmentStatus,
    HistoryAction,
    Specialty,
)
from tests.utils import at, make_appointment, physiotherapy_intake

pytestmark = pytest.mark.unit


class TestSchedule:
    """Tests for Appointment.schedule."""

    def test_creates_scheduled_appointment(self) -> None:
        """Should start scheduled with one history entry and one event."""
        appointment = Appointment.schedule(
            patient_id="pat-1",
            patient_name="  Maria Silva ",
            patient_phone="(11) 98765-4321",
            professional_id="prof-1",
            specialty=Specialty.PHYSIOTHERAPY,
            scheduled_start=at(10),
            scheduled_end=at(10, 50),
            reason="Lower back pain for two weeks",
            actor_id="staff-1",
        )

        assert appointment.id
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.patient_name == "Maria Silva"
        assert appointment.patient_phone == "11987654321"
        assert appointment.created_by == "staff-1"
        assert [h.action for h in appointment.history] == [HistoryAction.CREATED]
        events = appointment.get_domain_events()
        assert len(events) == 1
        assert isinstance(events[0], AppointmentCreated)
        assert events[0].scheduled_start == at(10)

    def test_requires_patient_name(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(patient_name="  ")
        assert exc_info.value.field == "patient_name"

    def test_requires_valid_phone(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(patient_phone="12345")
        assert exc_info.value.field == "patient_phone"

    def test_normalizes_email(self) -> None:
        appointment = make_appointment(patient_email="Maria@Example.COM")
        assert appointment.patient_email == "maria@example.com"

    def test_rejects_invalid_email(self) -> None:
        with pytest.raises(ValidationException):
            make_appointment(patient_email="not-an-email")

    def test_requires_professional(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(professional_id="")
        assert exc_info.value.field == "professional_id"

    def test_requires_minimum_reason(self) -> None:
        """Should reject reasons shorter than ten characters."""
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(reason="pain")
        assert exc_info.value.field == "reason"

    def test_reason_length_is_configurable(self) -> None:
        appointment = make_appointment(reason="pain", min_reason_length=3)
        assert appointment.reason == "pain"

    def test_rejects_end_before_start(self) -> None:
        with pytest.raises(ValidationException):
            make_appointment(scheduled_start=at(11), scheduled_end=at(10))

    def test_rejects_timezone_aware_times(self) -> None:
        """Should only accept local wall-clock times."""
        with pytest.raises(ValidationException):
            make_appointment(
                scheduled_start=datetime(2024, 1, 15, 10, tzinfo=UTC),
                scheduled_end=datetime(2024, 1, 15, 11, tzinfo=UTC),
            )

    def test_rejects_discount_above_price(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(price=100, discount=150)
        assert exc_info.value.field == "discount"

    def test_parses_raw_intake(self) -> None:
        appointment = make_appointment(intake=physiotherapy_intake())
        assert isinstance(appointment.intake, PhysiotherapyIntake)
        assert appointment.intake.pain_scale == 7

    def test_rejects_intake_of_other_specialty(self) -> None:
        """Should refuse a nutrition intake on a physiotherapy booking."""
        with pytest.raises(ValidationException) as exc_info:
            make_appointment(intake={"kind": "nutrition", "weight_kg": 70})
        assert exc_info.value.field == "intake"

    def test_rejects_intake_for_specialty_without_one(self) -> None:
        with pytest.raises(ValidationException):
            make_appointment(specialty=Specialty.LEGAL, intake=physiotherapy_intake())


class TestTransitions:
    """Tests for the lifecycle transitions."""

    def test_full_happy_path(self) -> None:
        """Should go scheduled -> confirmed -> in progress -> completed."""
        appointment = make_appointment()

        appointment.confirm(actor_id="staff-1")
        appointment.start_consultation(actor_id="prof-1")
        appointment.complete_consultation(actor_id="prof-1", notes="Home exercises prescribed")

        assert appointment.status == AppointmentStatus.COMPLETED
        assert appointment.confirmed_at is not None
        assert appointment.started_at is not None
        assert appointment.completed_at is not None
        assert appointment.professional_notes == "Home exercises prescribed"
        assert [type(e) for e in appointment.pull_domain_events()] == [
            AppointmentConfirmed,
            ConsultationStarted,
            ConsultationCompleted,
        ]
        assert appointment.get_domain_events() == []

    def test_cannot_complete_scheduled_appointment(self) -> None:
        """Should reject scheduled -> completed and leave the appointment untouched."""
        appointment = make_appointment()
        history_before = list(appointment.history)

        with pytest.raises(InvalidTransitionException) as exc_info:
            appointment.complete_consultation(actor_id="prof-1")

        assert exc_info.value.details["current_state"] == "scheduled"
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.history == history_before
        assert appointment.get_domain_events() == []

    def test_cannot_cancel_in_progress(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-1")
        appointment.start_consultation(actor_id="prof-1")

        with pytest.raises(InvalidTransitionException):
            appointment.cancel(reason="Patient left", actor_id="staff-1")

    def test_cannot_confirm_twice(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-1")
        with pytest.raises(InvalidTransitionException):
            appointment.confirm(actor_id="staff-1")

    def test_cancel_records_reason(self) -> None:
        appointment = make_appointment()

        appointment.cancel(reason="  Patient travelling  ", actor_id="staff-1")

        assert appointment.status == AppointmentStatus.CANCELLED
        assert appointment.cancellation_reason == "Patient travelling"
        assert appointment.cancelled_at is not None
        assert appointment.history[-1].note == "Patient travelling"
        event = appointment.pull_domain_events()[-1]
        assert isinstance(event, AppointmentCancelled)
        assert event.reason == "Patient travelling"

    def test_cancel_requires_reason(self) -> None:
        appointment = make_appointment()
        with pytest.raises(ValidationException):
            appointment.cancel(reason=" ", actor_id="staff-1")
        assert appointment.status == AppointmentStatus.SCHEDULED

    def test_cancelled_is_terminal(self) -> None:
        appointment = make_appointment()
        appointment.cancel(reason="Patient travelling", actor_id="staff-1")
        with pytest.raises(InvalidTransitionException):
            appointment.confirm(actor_id="staff-1")

    def test_mark_no_show(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-1")

        appointment.mark_no_show(actor_id="staff-1")

        assert appointment.status == AppointmentStatus.NO_SHOW
        assert appointment.history[-1].note == NO_SHOW_NOTE
        assert isinstance(appointment.pull_domain_events()[-1], AppointmentMarkedNoShow)

    def test_reschedule_keeps_duration_and_needs_new_confirmation(self) -> None:
        """Should move the booking, keep its duration and land on scheduled."""
        appointment = make_appointment(scheduled_start=at(10), scheduled_end=at(10, 50))
        appointment.confirm(actor_id="staff-1")
        appointment.clear_domain_events()

        appointment.reschedule(at(14), actor_id="staff-1")

        assert appointment.scheduled_start == at(14)
        assert appointment.scheduled_end == at(14, 50)
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.confirmed_at is None
        entry = appointment.history[-1]
        assert entry.action == HistoryAction.RESCHEDULED
        assert entry.previous_status == AppointmentStatus.CONFIRMED
        assert "10:00" in entry.note and "14:00" in entry.note
        event = appointment.pull_domain_events()[0]
        assert isinstance(event, AppointmentRescheduled)
        assert event.previous_start == at(10)

    def test_reschedule_with_explicit_end(self) -> None:
        appointment = make_appointment()
        appointment.reschedule(at(15), actor_id="staff-1", new_end=at(15, 30))
        assert appointment.duration_minutes == 30

    def test_reschedule_rejects_invalid_window(self) -> None:
        appointment = make_appointment()
        with pytest.raises(ValidationException):
            appointment.reschedule(at(15), actor_id="staff-1", new_end=at(14))
        assert appointment.scheduled_start == at(10)

    def test_version_increments_per_transition(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-1")
        appointment.start_consultation(actor_id="prof-1")
        assert appointment.version == 2


class TestHistory:
    """Tests for the append-only history."""

    def test_history_only_grows(self) -> None:
        """Should keep earlier entries unchanged as transitions happen."""
        appointment = make_appointment()
        snapshots = [list(appointment.history)]

        appointment.confirm(actor_id="staff-1")
        snapshots.append(list(appointment.history))
        appointment.reschedule(at(15), actor_id="staff-2")
        snapshots.append(list(appointment.history))
        appointment.cancel(reason="Patient moved away", actor_id="staff-3")
        snapshots.append(list(appointment.history))

        for earlier, later in zip(snapshots, snapshots[1:]):
            assert len(later) == len(earlier) + 1
            assert later[: len(earlier)] == earlier

    def test_entries_record_actor_and_statuses(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-7")

        entry = appointment.history[-1]
        assert entry.actor_id == "staff-7"
        assert entry.previous_status == AppointmentStatus.SCHEDULED
        assert entry.new_status == AppointmentStatus.CONFIRMED
        assert entry.timestamp.tzinfo is not None


class TestHelpers:
    """Tests for query helpers and pricing."""

    def test_final_price(self) -> None:
        assert calculate_final_price(Decimal("120.00"), Decimal("20")) == Decimal("100.00")
        assert make_appointment(price=80, discount=10).final_price == Decimal("70")

    def test_final_price_rejects_negative_amounts(self) -> None:
        with pytest.raises(ValidationException):
            calculate_final_price(-1)

    def test_is_overdue(self) -> None:
        appointment = make_appointment()
        assert appointment.is_overdue(at(12))
        assert not appointment.is_overdue(at(9))
        appointment.cancel(reason="Patient travelling", actor_id="staff-1")
        assert not appointment.is_overdue(at(12))

    def test_matches_search_term(self) -> None:
        appointment = make_appointment()
        assert appointment.matches("maria")
        assert appointment.matches("SOUZA")
        assert appointment.matches("back pain")
        assert not appointment.matches("knee")

    def test_summary_dict(self) -> None:
        summary = make_appointment().to_summary_dict()
        assert summary["status"] == "scheduled"
        assert summary["scheduled_start"] == "2024-01-15T10:00:00"
