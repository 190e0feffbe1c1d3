"""
SQLAlchemy persistence adapters.
"""

from .database import create_engine_from_settings, create_session_factory, init_models, session_scope
from .handlers import SessionScopedRecordProjectionHandler
from .models import AppointmentModel, Base, ProfessionalModel, TrackingRecordModel
from .repositories import (
    SQLAlchemyAppointmentStore,
    SQLAlchemyProfessionalDirectory,
    SQLAlchemyTrackingRecordStore,
)

__all__ = [
    "AppointmentModel",
    "Base",
    "ProfessionalModel",
    "SQLAlchemyAppointmentStore",
    "SQLAlchemyProfessionalDirectory",
    "SQLAlchemyTrackingRecordStore",
    "SessionScopedRecordProjectionHandler",
    "TrackingRecordModel",
    "create_engine_from_settings",
    "create_session_factory",
    "init_models",
    "session_scope",
]
