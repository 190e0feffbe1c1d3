# ============================================================================
# SCOPE: DOMAIN (Assistance)
# Description: Specialty intake payloads captured at booking time.
# ============================================================================
"""
Specialized Intake Models.

Each specialty that carries structured clinical data has its own variant,
discriminated by ``kind``. An appointment holds at most one of them and its
``kind`` must match the appointment's specialty.

Usage:
    intake = parse_intake({"kind": "physiotherapy", "pain_scale": 6})
    data = intake.model_dump(mode="json")
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from care_scheduling.core.domain import ValidationException

# =============================================================================
# Physiotherapy
# =============================================================================


class PhysiotherapyIntake(BaseModel):
    """Physiotherapy assessment.

    Attributes:
        presentation: Flags such as "walking", "with support", "wheelchair user".
        inspection_palpation: Flags such as "normal", "edema", "scar", "erythema".
        pain_scale: Visual analogue scale, 0-10.
    """

    kind: Literal["physiotherapy"] = "physiotherapy"

    # Assessment
    life_habits: str | None = None
    current_medical_history: str | None = None
    past_medical_history: str | None = None
    personal_history: str | None = None
    family_history: str | None = None
    previous_treatments: str | None = None
    presentation: list[str] = Field(default_factory=list)

    # Exams, medications, surgeries
    complementary_exams: str | None = None
    medications: str | None = None
    surgeries: str | None = None

    # Physical examination
    inspection_palpation: list[str] = Field(default_factory=list)
    semiology: str | None = None
    specific_tests: str | None = None
    pain_scale: int | None = Field(default=None, ge=0, le=10)

    # Therapeutic plan
    treatment_goals: str | None = None
    therapeutic_resources: str | None = None
    treatment_plan: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# Nutrition
# =============================================================================


class NutritionIntake(BaseModel):
    """Nutrition assessment.

    Attributes:
        weight_kg: Body weight in kilograms.
        height_cm: Height in centimetres.
        bmi: Derived from weight and height, not stored.
    """

    kind: Literal["nutrition"] = "nutrition"

    # Anthropometry
    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    abdominal_circumference_cm: float | None = Field(default=None, gt=0)
    waist_circumference_cm: float | None = Field(default=None, gt=0)
    hip_circumference_cm: float | None = Field(default=None, gt=0)
    body_composition: str | None = None
    body_fat_percentage: float | None = Field(default=None, ge=0, le=100)
    muscle_mass: str | None = None

    # Food history
    eating_habits: str | None = None
    meal_frequency: str | None = None
    meal_times: str | None = None
    food_preferences: str | None = None
    food_aversions: str | None = None
    dietary_restrictions: str | None = None
    allergies: str | None = None
    intolerances: str | None = None
    water_intake: str | None = None
    dietary_history: str | None = None

    # Clinical history
    pre_existing_diseases: str | None = None
    medications: str | None = None
    supplementation: str | None = None
    surgeries: str | None = None
    family_disease_history: str | None = None

    # Lifestyle
    physical_activity: str | None = None
    exercise_frequency: str | None = None
    sleep_quality: str | None = None
    stress_level: str | None = None
    smoking: str | None = None
    alcohol_consumption: str | None = None

    # Biochemistry
    lab_exams: str | None = None
    glucose: str | None = None
    total_cholesterol: str | None = None
    hdl: str | None = None
    ldl: str | None = None
    triglycerides: str | None = None
    hemoglobin: str | None = None
    other_exams: str | None = None

    # Nutritional assessment and plan
    nutritional_diagnosis: str | None = None
    energy_needs: str | None = None
    protein_needs: str | None = None
    goals: str | None = None
    nutritional_guidance: str | None = None
    meal_plan: str | None = None
    nutritional_targets: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def bmi(self) -> float | None:
        """Body mass index, rounded to one decimal."""
        if self.weight_kg and self.height_cm:
            height_m = self.height_cm / 100
            return round(self.weight_kg / (height_m * height_m), 1)
        return None


# =============================================================================
# Psychology
# =============================================================================


class PsychologyIntake(BaseModel):
    """Psychological anamnesis.

    Flat on purpose: every question of the interview form is one optional
    field. Unanswered questions stay None.
    """

    kind: Literal["psychology"] = "psychology"

    # Identification
    name: str | None = None
    sex: str | None = None
    works: bool | None = None
    profession: str | None = None
    religion: str | None = None
    marital_status: str | None = None
    children: str | None = None
    contact_1: str | None = None
    contact_1_relation: str | None = None
    contact_2: str | None = None
    contact_2_relation: str | None = None
    contact_3: str | None = None
    contact_3_relation: str | None = None

    # Personal history
    personal_history: str | None = None

    # Family history: mother
    mother_alive: bool | None = None
    mother_age_at_death: str | None = None
    age_when_mother_died: str | None = None
    mother_profession: str | None = None
    relationship_with_mother: str | None = None

    # Family history: father
    father_alive: bool | None = None
    father_age_at_death: str | None = None
    age_when_father_died: str | None = None
    father_profession: str | None = None
    relationship_with_father: str | None = None

    # Family history: siblings
    only_child: bool | None = None
    siblings_alive: bool | None = None
    siblings_deceased: str | None = None
    siblings_age_at_death: str | None = None
    age_when_siblings_died: str | None = None
    siblings_profession: str | None = None
    relationship_with_siblings: str | None = None

    # Family history: children
    children_alive: bool | None = None
    children_deceased: str | None = None
    children_age_at_death: str | None = None
    age_when_children_died: str | None = None
    children_profession: str | None = None
    children_ages: str | None = None
    relationship_with_children: str | None = None

    # Family history: grandparents
    grandparents_alive: bool | None = None
    grandparents_deceased: str | None = None
    grandparents_age_at_death: str | None = None
    age_when_grandparents_died: str | None = None
    grandparents_profession: str | None = None
    grandfather_age: str | None = None
    grandmother_age: str | None = None
    relationship_with_grandparents: str | None = None

    # Household
    home_environment: str | None = None
    street_violence: bool | None = None
    violence_details: str | None = None
    family_support: bool | None = None
    support_details: str | None = None
    family_reaction: str | None = None

    # School history
    education: str | None = None
    liked_school: bool | None = None
    school_reason: str | None = None
    school_important_events: str | None = None
    school_embarrassing_event: str | None = None
    felt_persecuted_at_school: bool | None = None
    school_persecution_account: str | None = None
    likes_school_environment: bool | None = None
    school_environment_reason: str | None = None
    school_disturbing_event: bool | None = None
    school_disturbing_event_details: str | None = None

    # Work history
    employer: str | None = None
    likes_work: bool | None = None
    work_reason: str | None = None
    work_important_events: str | None = None
    work_embarrassing_event: str | None = None
    feels_persecuted_at_work: bool | None = None
    work_persecution_account: str | None = None
    likes_work_environment: bool | None = None
    work_environment_reason: str | None = None
    workplace_bothers: bool | None = None
    workplace_bothers_details: str | None = None

    # Social history
    relationship_difficulty: bool | None = None
    friend_count: str | None = None
    introvert_or_extrovert: str | None = None
    greets_people: bool | None = None
    helpful_person: bool | None = None
    friendship_details: str | None = None

    # Residential history
    time_at_residence: str | None = None
    likes_residence: bool | None = None
    residence_reason: str | None = None

    # Family routine
    family_routine_changed: bool | None = None
    routine_changes: str | None = None

    # Clinical history
    uses_medication: bool | None = None
    medication: str | None = None
    had_surgery: bool | None = None
    surgery: str | None = None
    surgery_when: str | None = None
    postpartum: bool | None = None
    postpartum_days: str | None = None
    psychiatric_illness_reports: bool | None = None
    psychiatric_illness_details: str | None = None
    substance_history: bool | None = None
    substances: str | None = None

    # Psychic history
    feels_fear: bool | None = None
    feels_anger: bool | None = None
    feels_revolt: bool | None = None
    feels_guilt: bool | None = None
    feels_anxiety: bool | None = None
    feels_loneliness: bool | None = None
    feels_anguish: bool | None = None
    feels_powerlessness: bool | None = None
    feels_relief: bool | None = None
    feels_indifference: bool | None = None
    other_feelings: str | None = None
    previous_care: bool | None = None
    previous_care_reason: str | None = None
    previous_care_duration: str | None = None
    uses_psychotropics: bool | None = None
    psychotropics: str | None = None
    uses_psychoactive_substances: bool | None = None
    psychoactive_substances: str | None = None

    # Complaint
    chief_complaint: str | None = None
    secondary_complaint: str | None = None
    session_expectations: str | None = None

    # Closing sections
    additional_information: str | None = None
    classification: str | None = None
    demands: str | None = None
    demand_justification: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


# Union type for all intake variants
SpecializedIntake = Annotated[
    PhysiotherapyIntake | NutritionIntake | PsychologyIntake,
    Field(discriminator="kind"),
]

INTAKE_KINDS: frozenset[str] = frozenset({"physiotherapy", "nutrition", "psychology"})

_intake_adapter: TypeAdapter[SpecializedIntake] = TypeAdapter(SpecializedIntake)


def parse_intake(data: Any) -> PhysiotherapyIntake | NutritionIntake | PsychologyIntake | None:
    """Validate raw intake data into its variant.

    Already-built variants and None pass through.

    Raises:
        ValidationException: If the payload does not match any variant.
    """
    if data is None or isinstance(data, (PhysiotherapyIntake, NutritionIntake, PsychologyIntake)):
        return data
    try:
        return _intake_adapter.validate_python(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationException(
            f"Invalid intake: {first.get('msg', 'invalid value')}",
            field=f"intake.{location}" if location else "intake",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def dump_intake(intake: PhysiotherapyIntake | NutritionIntake | PsychologyIntake | None) -> dict[str, Any] | None:
    """Serialize an intake variant for storage."""
    if intake is None:
        return None
    return intake.model_dump(mode="json")
