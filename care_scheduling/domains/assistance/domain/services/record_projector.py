# ============================================================================
# SCOPE: DOMAIN (Assistance)
# Description: Derives a patient tracking record from a confirmed appointment.
# ============================================================================
"""Specialized Record Projector.

On confirmation, an appointment's intake is copied into a new tracking
record unless the patient already has a live record with the same
professional.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from care_scheduling.core.domain import generate_uuid_str

from ..entities import Appointment, TrackingRecord
from ..events import TrackingRecordCreated
from ..intake import NutritionIntake, PhysiotherapyIntake, PsychologyIntake
from ..value_objects import TrackingRecordStatus

PHYSIOTHERAPY_FIELDS: tuple[str, ...] = (
    "life_habits",
    "current_medical_history",
    "past_medical_history",
    "personal_history",
    "family_history",
    "previous_treatments",
    "presentation",
    "complementary_exams",
    "medications",
    "surgeries",
    "inspection_palpation",
    "semiology",
    "specific_tests",
    "pain_scale",
    "treatment_goals",
    "therapeutic_resources",
    "treatment_plan",
)

NUTRITION_FIELDS: tuple[str, ...] = (
    "weight_kg",
    "height_cm",
    "bmi",
    "abdominal_circumference_cm",
    "goals",
    "dietary_restrictions",
    "supplementation",
    "physical_activity",
    "dietary_history",
    "lab_exams",
)

DEFAULT_DIAGNOSIS = "Not provided"


class SpecializedRecordProjector:
    """
    Domain service that opens tracking records from confirmed appointments.

    The projection is idempotent per (patient, professional) pair: while a
    live record exists for the pair, confirming another appointment yields
    nothing.

    Example:
        ```python
        projector = SpecializedRecordProjector()
        record = projector.project_on_confirm(appointment, records_for_patient)
        if record is not None:
            await record_store.create(record)
        ```
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        """
        Initialize projector.

        Args:
            clock: Source of the record start date (local time by default)
        """
        self._clock = clock or datetime.now

    def find_live_record(
        self,
        appointment: Appointment,
        existing_records: Iterable[TrackingRecord],
    ) -> TrackingRecord | None:
        """Live record of the appointment's patient with the same professional."""
        for record in existing_records:
            if record.belongs_to_pair(appointment.patient_id, appointment.professional_id) and record.is_live:
                return record
        return None

    def project_on_confirm(
        self,
        appointment: Appointment,
        existing_records_for_patient: Iterable[TrackingRecord],
        actor_id: str | None = None,
    ) -> TrackingRecord | None:
        """
        Build the tracking record for a confirmed appointment.

        Args:
            appointment: The appointment that was just confirmed
            existing_records_for_patient: All records of the patient
            actor_id: Who confirmed the appointment

        Returns:
            A new active TrackingRecord, or None when the pairing already
            has a live one
        """
        if self.find_live_record(appointment, existing_records_for_patient) is not None:
            return None

        start_day = appointment.scheduled_start.strftime("%d/%m/%Y") if appointment.scheduled_start else "-"
        record = TrackingRecord(
            id=generate_uuid_str(),
            patient_id=appointment.patient_id,
            patient_name=appointment.patient_name,
            professional_id=appointment.professional_id,
            professional_name=appointment.professional_name,
            specialty=appointment.specialty,
            status=TrackingRecordStatus.ACTIVE,
            start_date=self._clock(),
            objective=f"Tracking started automatically from the appointment confirmed for {start_day}",
            initial_diagnosis=appointment.reason or DEFAULT_DIAGNOSIS,
            notes=appointment.patient_notes or "",
            specialized_data=self.project_specialized_data(appointment),
            source_appointment_id=appointment.id,
            created_by=actor_id,
        )
        record._record_event(
            TrackingRecordCreated(
                record_id=record.id or "",
                patient_id=record.patient_id,
                professional_id=record.professional_id,
                specialty=record.specialty.value,
                source_appointment_id=appointment.id,
            )
        )
        return record

    def project_specialized_data(self, appointment: Appointment) -> dict[str, dict[str, Any]]:
        """Specialty-keyed copy of the intake fields a record keeps."""
        intake = appointment.intake
        if intake is None or intake.kind != appointment.specialty.value:
            return {}

        match intake:
            case PhysiotherapyIntake():
                return {intake.kind: self._copy_fields(intake.model_dump(mode="json"), PHYSIOTHERAPY_FIELDS)}
            case NutritionIntake():
                data = intake.model_dump(mode="json")
                data["bmi"] = intake.bmi
                return {intake.kind: self._copy_fields(data, NUTRITION_FIELDS)}
            case PsychologyIntake():
                # Unanswered questions are left out rather than defaulted
                return {intake.kind: intake.model_dump(mode="json", exclude_none=True, exclude={"kind"})}
        return {}

    @staticmethod
    def _copy_fields(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
        return {name: data.get(name) for name in fields}
