"""
Specialized intake variants.
"""

from .models import (
    INTAKE_KINDS,
    NutritionIntake,
    PhysiotherapyIntake,
    PsychologyIntake,
    SpecializedIntake,
    dump_intake,
    parse_intake,
)

IntakeVariant = PhysiotherapyIntake | NutritionIntake | PsychologyIntake

__all__ = [
    "INTAKE_KINDS",
    "IntakeVariant",
    "NutritionIntake",
    "PhysiotherapyIntake",
    "PsychologyIntake",
    "SpecializedIntake",
    "dump_intake",
    "parse_intake",
]
