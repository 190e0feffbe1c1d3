"""
Assistance Domain Entities
"""

from .appointment import NO_SHOW_NOTE, Appointment, calculate_final_price
from .professional import Professional
from .tracking_record import TrackingRecord

__all__ = [
    "NO_SHOW_NOTE",
    "Appointment",
    "Professional",
    "TrackingRecord",
    "calculate_final_price",
]
