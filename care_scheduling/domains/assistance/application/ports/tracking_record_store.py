"""
Tracking Record Store Port
"""

from typing import Protocol, runtime_checkable

from care_scheduling.domains.assistance.domain.entities import TrackingRecord


@runtime_checkable
class ITrackingRecordStore(Protocol):
    """Tracking record persistence interface."""

    async def find_by_patient(self, patient_id: str) -> list[TrackingRecord]:
        """All records of a patient, in any status."""
        ...

    async def create(self, record: TrackingRecord) -> TrackingRecord:
        """Persist a new record and return the stored copy."""
        ...
