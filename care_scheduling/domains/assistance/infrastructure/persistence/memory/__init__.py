"""
In-memory persistence adapters.

Used by tests and by single-process deployments without a database.
"""

from .stores import (
    InMemoryAppointmentStore,
    InMemoryProfessionalDirectory,
    InMemoryTrackingRecordStore,
)

__all__ = [
    "InMemoryAppointmentStore",
    "InMemoryProfessionalDirectory",
    "InMemoryTrackingRecordStore",
]
