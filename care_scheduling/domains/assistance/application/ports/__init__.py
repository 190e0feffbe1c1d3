"""
Assistance Application Ports

Interfaces implemented by the infrastructure layer.
"""

from .appointment_store import IAppointmentStore
from .notifier import INotifier
from .professional_directory import IProfessionalDirectory
from .tracking_record_store import ITrackingRecordStore

__all__ = [
    "IAppointmentStore",
    "INotifier",
    "IProfessionalDirectory",
    "ITrackingRecordStore",
]
