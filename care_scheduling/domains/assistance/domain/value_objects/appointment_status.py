"""
Assistance Domain Status Enums

Status and classification enums for appointments, professionals and
tracking records.
"""

from care_scheduling.core.domain import StatusEnum


class AppointmentStatus(StatusEnum):
    """
    Appointment lifecycle states.

    Valid transitions:
    - SCHEDULED -> CONFIRMED, CANCELLED, NO_SHOW, RESCHEDULED
    - CONFIRMED -> IN_PROGRESS, CANCELLED, NO_SHOW, RESCHEDULED
    - RESCHEDULED -> SCHEDULED, CANCELLED, NO_SHOW, RESCHEDULED
    - IN_PROGRESS -> COMPLETED
    - COMPLETED, CANCELLED, NO_SHOW -> (terminal)

    RESCHEDULED is transient: a reschedule passes through it and lands back
    on SCHEDULED. Records stored by older clients may still hold it.
    """

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"
    RESCHEDULED = "rescheduled"

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Check if transition to new status is valid."""
        return new_status in _TRANSITIONS[self]

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return not _TRANSITIONS[self]

    def is_active(self) -> bool:
        """Active appointments block their time slot."""
        return self not in NON_BLOCKING_STATUSES

    @property
    def display_name(self) -> str:
        return {
            "scheduled": "Agendada",
            "confirmed": "Confirmada",
            "in_progress": "En curso",
            "completed": "Concluida",
            "cancelled": "Cancelada",
            "no_show": "Ausente",
            "rescheduled": "Reprogramada",
        }[self.value]


_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {
            AppointmentStatus.IN_PROGRESS,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.RESCHEDULED: frozenset(
        {
            AppointmentStatus.SCHEDULED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.IN_PROGRESS: frozenset({AppointmentStatus.COMPLETED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

NON_BLOCKING_STATUSES: frozenset[AppointmentStatus] = frozenset(
    {
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.COMPLETED,
    }
)


class Specialty(StatusEnum):
    """Assistance specialties offered by professionals."""

    PSYCHOLOGY = "psychology"
    SOCIAL = "social"
    LEGAL = "legal"
    MEDICAL = "medical"
    PHYSIOTHERAPY = "physiotherapy"
    NUTRITION = "nutrition"

    @property
    def has_intake(self) -> bool:
        """Whether bookings of this specialty carry a structured intake."""
        return self in (Specialty.PSYCHOLOGY, Specialty.PHYSIOTHERAPY, Specialty.NUTRITION)


class ProfessionalStatus(StatusEnum):
    """Professional registration status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"
    SUSPENDED = "suspended"


class AppointmentPriority(StatusEnum):
    """Attendance priority."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"
    EMERGENCY = "emergency"


class AppointmentModality(StatusEnum):
    """How the consultation takes place."""

    IN_PERSON = "in_person"
    ONLINE = "online"
    HOME_VISIT = "home_visit"
    PHONE = "phone"

    @property
    def is_remote(self) -> bool:
        return self in (AppointmentModality.ONLINE, AppointmentModality.PHONE)


class TrackingRecordStatus(StatusEnum):
    """
    Tracking record states.

    ACTIVE <-> PAUSED, both -> CLOSED (terminal).
    """

    ACTIVE = "active"
    PAUSED = "paused"
    CLOSED = "closed"

    def is_live(self) -> bool:
        """Live records count towards the one-per-pairing limit."""
        return self in (TrackingRecordStatus.ACTIVE, TrackingRecordStatus.PAUSED)


class HistoryAction(StatusEnum):
    """Actions recorded in an appointment's history."""

    CREATED = "created"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    STARTED = "started"
    COMPLETED = "completed"
    NO_SHOW = "no_show"
