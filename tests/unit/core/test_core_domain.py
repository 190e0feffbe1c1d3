"""Unit tests for the core DDD building blocks."""

import pytest

from care_scheduling.core.domain import (
    AppointmentConflictException,
    DependencyException,
    Email,
    EntityNotFoundException,
    InvalidTransitionException,
    PhoneNumber,
    ValidationException,
    generate_uuid_str,
)
from care_scheduling.domains.assistance.domain.value_objects import Specialty
from tests.utils import make_appointment

pytestmark = pytest.mark.unit


class TestValueObjects:
    """Tests for Email and PhoneNumber."""

    def test_email_is_normalized(self) -> None:
        assert Email(" Ana@Example.com ").address == "ana@example.com"

    @pytest.mark.parametrize("address", ["", "ana", "ana@example", "ana @example.com"])
    def test_invalid_email(self, address) -> None:
        with pytest.raises(ValueError):
            Email(address)

    @pytest.mark.parametrize("raw,digits", [("(11) 98765-4321", "11987654321"), ("11 3456-7890", "1134567890")])
    def test_phone_keeps_digits(self, raw, digits) -> None:
        assert PhoneNumber(raw).number == digits

    @pytest.mark.parametrize("raw", ["12345", "+55 11 98765-4321"])
    def test_invalid_phone(self, raw) -> None:
        with pytest.raises(ValueError):
            PhoneNumber(raw)

    def test_status_enum_from_string(self) -> None:
        assert Specialty.from_string("Nutrition") == Specialty.NUTRITION
        assert "legal" in Specialty.values()
        with pytest.raises(ValueError):
            Specialty.from_string("dentistry")


class TestEntities:
    """Tests for Entity and AggregateRoot."""

    def test_transition_bumps_version_and_timestamp(self) -> None:
        appointment = make_appointment()
        before = appointment.updated_at

        appointment.confirm(actor_id="staff-1")

        assert appointment.version == 1
        assert appointment.updated_at >= before
        assert appointment.created_at.tzinfo is not None

    def test_pull_domain_events_clears_them(self) -> None:
        appointment = make_appointment()
        appointment.confirm(actor_id="staff-1")

        assert len(appointment.pull_domain_events()) == 1
        assert appointment.pull_domain_events() == []

    def test_generated_ids_are_unique(self) -> None:
        assert generate_uuid_str() != generate_uuid_str()


class TestExceptions:
    """Tests for the domain exception hierarchy."""

    def test_validation_to_dict(self) -> None:
        error = ValidationException("Reason too short", field="reason")
        assert error.to_dict() == {
            "error": "VALIDATION_ERROR",
            "message": "Reason too short",
            "details": {"field": "reason"},
        }

    def test_not_found(self) -> None:
        error = EntityNotFoundException(entity_type="Appointment", entity_id="apt-1")
        assert error.code == "ENTITY_NOT_FOUND"
        assert "apt-1" in error.message

    def test_conflict(self) -> None:
        error = AppointmentConflictException(professional_id="prof-1", time_slot="10:00 - 11:00")
        assert error.code == "APPOINTMENT_CONFLICT"
        assert error.details == {"professional_id": "prof-1", "time_slot": "10:00 - 11:00"}

    def test_invalid_transition(self) -> None:
        error = InvalidTransitionException("complete_consultation", "scheduled", "completed")
        assert error.code == "INVALID_TRANSITION"
        assert error.details["target_state"] == "completed"

    def test_dependency_keeps_original_error(self) -> None:
        cause = RuntimeError("timeout")
        error = DependencyException(service="notifier", message="Notification failed", original_error=cause)
        assert error.original_error is cause
        assert error.details["original_error"] == "timeout"
