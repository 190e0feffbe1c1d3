"""
Tracking Record Entity for Assistance Domain

Longitudinal record ("ficha") of a patient's follow-up with one professional.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from care_scheduling.core.domain import AggregateRoot, InvalidTransitionException

from ..value_objects import Specialty, TrackingRecordStatus


@dataclass
class TrackingRecord(AggregateRoot[str]):
    """
    Tracking record aggregate.

    At most one live (active or paused) record exists per patient and
    professional pair. ``specialized_data`` is keyed by the specialty tag of
    the intake it was projected from, e.g. ``{"physiotherapy": {...}}``.
    """

    patient_id: str = ""
    patient_name: str = ""
    professional_id: str = ""
    professional_name: str = ""
    specialty: Specialty = Specialty.MEDICAL
    status: TrackingRecordStatus = TrackingRecordStatus.ACTIVE
    start_date: datetime | None = None
    objective: str = ""
    initial_diagnosis: str | None = None
    notes: str | None = None
    specialized_data: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_appointment_id: str | None = None
    created_by: str | None = None
    closed_at: datetime | None = None

    @property
    def is_live(self) -> bool:
        return self.status.is_live()

    def belongs_to_pair(self, patient_id: str, professional_id: str) -> bool:
        return self.patient_id == patient_id and self.professional_id == professional_id

    def pause(self) -> None:
        if self.status != TrackingRecordStatus.ACTIVE:
            raise InvalidTransitionException("pause", self.status.value, TrackingRecordStatus.PAUSED.value)
        self.status = TrackingRecordStatus.PAUSED
        self.touch()

    def resume(self) -> None:
        if self.status != TrackingRecordStatus.PAUSED:
            raise InvalidTransitionException("resume", self.status.value, TrackingRecordStatus.ACTIVE.value)
        self.status = TrackingRecordStatus.ACTIVE
        self.touch()

    def close(self) -> None:
        if not self.is_live:
            raise InvalidTransitionException("close", self.status.value, TrackingRecordStatus.CLOSED.value)
        self.status = TrackingRecordStatus.CLOSED
        self.closed_at = datetime.now(UTC)
        self.touch()
