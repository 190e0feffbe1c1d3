"""
Assistance SQLAlchemy Models

Database models for assistance domain persistence.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum as SQLEnum,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

from care_scheduling.domains.assistance.domain.value_objects import (
    AppointmentModality,
    AppointmentPriority,
    AppointmentStatus,
    ProfessionalStatus,
    Specialty,
    TrackingRecordStatus,
)

Base = declarative_base()


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class TimestampMixin:
    """Mixin para agregar timestamps automáticos."""

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class ProfessionalModel(Base, TimestampMixin):
    """SQLAlchemy model for Professional entity."""

    __tablename__ = "assistance_professionals"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    specialty = Column(
        SQLEnum(Specialty, values_callable=_enum_values, name="assistance_specialty"),
        nullable=False,
        index=True,
    )
    status = Column(
        SQLEnum(ProfessionalStatus, values_callable=_enum_values, name="assistance_professional_status"),
        default=ProfessionalStatus.ACTIVE,
        nullable=False,
    )

    # Agenda: [{"weekday": 1, "start_time": "08:00", "end_time": "18:00", "breaks": [...]}]
    working_hours = Column(JSON, default=list)
    consultation_duration_minutes = Column(Integer, nullable=True)
    consultation_price = Column(Numeric(10, 2), nullable=True)
    online_link = Column(String(500), nullable=True)

    # Contact
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "specialty": self.specialty.value if self.specialty else None,
            "status": self.status.value if self.status else None,
            "working_hours": self.working_hours or [],
            "consultation_duration_minutes": self.consultation_duration_minutes,
        }


class AppointmentModel(Base, TimestampMixin):
    """SQLAlchemy model for Appointment entity."""

    __tablename__ = "assistance_appointments"

    id = Column(String(36), primary_key=True)

    # Patient
    patient_id = Column(String(36), nullable=False, index=True)
    patient_name = Column(String(200), nullable=False)
    patient_phone = Column(String(20), nullable=False)
    patient_email = Column(String(255), nullable=True)

    # Professional
    professional_id = Column(String(36), nullable=False, index=True)
    professional_name = Column(String(200), nullable=True)
    specialty = Column(
        SQLEnum(Specialty, values_callable=_enum_values, name="assistance_specialty"),
        nullable=False,
    )

    # Scheduling (local wall-clock time)
    scheduled_start = Column(DateTime, nullable=False, index=True)
    scheduled_end = Column(DateTime, nullable=False)
    status = Column(
        SQLEnum(AppointmentStatus, values_callable=_enum_values, name="assistance_appointment_status"),
        default=AppointmentStatus.SCHEDULED,
        nullable=False,
        index=True,
    )
    priority = Column(
        SQLEnum(AppointmentPriority, values_callable=_enum_values, name="assistance_appointment_priority"),
        default=AppointmentPriority.NORMAL,
        nullable=False,
    )
    modality = Column(
        SQLEnum(AppointmentModality, values_callable=_enum_values, name="assistance_appointment_modality"),
        default=AppointmentModality.IN_PERSON,
        nullable=False,
    )
    online_link = Column(String(500), nullable=True)

    # Clinical information
    reason = Column(Text, nullable=False)
    patient_notes = Column(Text, nullable=True)
    professional_notes = Column(Text, nullable=True)
    intake = Column(JSON, nullable=True)

    # Billing
    price = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)

    # Audit
    history = Column(JSON, default=list)
    created_by = Column(String(36), nullable=True)
    version = Column(Integer, nullable=False, default=0)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)


class TrackingRecordModel(Base, TimestampMixin):
    """SQLAlchemy model for TrackingRecord entity."""

    __tablename__ = "assistance_tracking_records"

    id = Column(String(36), primary_key=True)
    patient_id = Column(String(36), nullable=False, index=True)
    patient_name = Column(String(200), nullable=True)
    professional_id = Column(String(36), nullable=False, index=True)
    professional_name = Column(String(200), nullable=True)
    specialty = Column(
        SQLEnum(Specialty, values_callable=_enum_values, name="assistance_specialty"),
        nullable=False,
    )
    status = Column(
        SQLEnum(TrackingRecordStatus, values_callable=_enum_values, name="assistance_tracking_status"),
        default=TrackingRecordStatus.ACTIVE,
        nullable=False,
    )
    start_date = Column(DateTime, nullable=True)
    objective = Column(Text, nullable=True)
    initial_diagnosis = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # {"physiotherapy": {...}} / {"nutrition": {...}} / {"psychology": {...}}
    specialized_data = Column(JSON, default=dict)
    source_appointment_id = Column(String(36), nullable=True)
    created_by = Column(String(36), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=True)
