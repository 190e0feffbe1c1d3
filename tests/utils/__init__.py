"""Test utilities."""

from tests.utils.builders import (
    MONDAY,
    at,
    make_appointment,
    make_professional,
    physiotherapy_intake,
)

__all__ = [
    "MONDAY",
    "at",
    "make_appointment",
    "make_professional",
    "physiotherapy_intake",
]
