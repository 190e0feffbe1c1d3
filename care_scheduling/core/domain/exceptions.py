"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
Validation, conflict, not-found and transition errors are failures of the
primary operation; dependency errors come from best-effort side effects and
are logged by the event publisher instead of reaching the caller.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "APPOINTMENT_CONFLICT")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for missing required input, malformed values, invalid time windows, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidTransitionException(DomainException):
    """Raised when a lifecycle transition is not reachable from the current state."""

    def __init__(
        self,
        operation: str,
        current_state: str,
        target_state: str | None = None,
        message: str | None = None,
    ):
        self.operation = operation
        self.current_state = current_state
        self.target_state = target_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        details: dict[str, Any] = {"operation": operation, "current_state": current_state}
        if target_state:
            details["target_state"] = target_state
        super().__init__(msg, "INVALID_TRANSITION", details)


class DependencyException(DomainException):
    """Raised when a secondary effect (notification, record projection) fails."""

    def __init__(self, service: str, message: str, original_error: Exception | None = None):
        self.service = service
        self.original_error = original_error
        details: dict[str, Any] = {"service": service}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, "DEPENDENCY_ERROR", details)


class AppointmentConflictException(DomainException):
    """Raised when there's a scheduling conflict."""

    def __init__(
        self,
        professional_id: str | None = None,
        time_slot: str | None = None,
        message: str | None = None,
    ):
        self.professional_id = professional_id
        self.time_slot = time_slot
        msg = message or "Appointment conflict: time slot not available"
        details: dict[str, Any] = {}
        if professional_id:
            details["professional_id"] = professional_id
        if time_slot:
            details["time_slot"] = time_slot
        super().__init__(msg, "APPOINTMENT_CONFLICT", details)
