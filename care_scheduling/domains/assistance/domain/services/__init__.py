"""
Assistance Domain Services
"""

from .appointment_statistics import AppointmentStatistics, calculate_statistics
from .availability_calculator import AvailabilityCalculator, default_working_hours
from .conflict_detector import ConflictDetector
from .record_projector import (
    NUTRITION_FIELDS,
    PHYSIOTHERAPY_FIELDS,
    SpecializedRecordProjector,
)

__all__ = [
    "AppointmentStatistics",
    "AvailabilityCalculator",
    "ConflictDetector",
    "NUTRITION_FIELDS",
    "PHYSIOTHERAPY_FIELDS",
    "SpecializedRecordProjector",
    "calculate_statistics",
    "default_working_hours",
]
