"""
Shared pytest fixtures for all tests.

This module provides professionals, in-memory ports, an inline event
publisher and a wired lifecycle service. Builders live in tests.utils.
"""

import os
from datetime import time

import pytest

from care_scheduling.config.settings import reset_settings
from care_scheduling.core.domain import DomainEventPublisher
from care_scheduling.domains.assistance.application.services import AppointmentLifecycleService
from care_scheduling.domains.assistance.domain.entities import Professional
from care_scheduling.domains.assistance.domain.value_objects import (
    BreakInterval,
    WorkingHours,
)
from care_scheduling.domains.assistance.infrastructure.persistence.memory import (
    InMemoryAppointmentStore,
    InMemoryProfessionalDirectory,
    InMemoryTrackingRecordStore,
)

from tests.utils import make_professional

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop the cached settings around every test."""
    reset_settings()
    yield
    reset_settings()


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def professional() -> Professional:
    """Physiotherapist working Mondays 08:00-18:00, 50-minute consultations."""
    return make_professional()


@pytest.fixture
def professional_with_lunch() -> Professional:
    return make_professional(
        id="prof-2",
        working_hours=[
            WorkingHours(
                weekday=1,
                start_time=time(8, 0),
                end_time=time(18, 0),
                breaks=(BreakInterval(start_time=time(12, 0), end_time=time(13, 0)),),
            )
        ],
        consultation_duration_minutes=60,
    )


# ============================================================================
# PORT FIXTURES
# ============================================================================


@pytest.fixture
def directory(professional) -> InMemoryProfessionalDirectory:
    return InMemoryProfessionalDirectory([professional])


@pytest.fixture
def appointment_store() -> InMemoryAppointmentStore:
    return InMemoryAppointmentStore()


@pytest.fixture
def record_store() -> InMemoryTrackingRecordStore:
    return InMemoryTrackingRecordStore()


@pytest.fixture
def publisher() -> DomainEventPublisher:
    return DomainEventPublisher(dispatch_mode="inline")


@pytest.fixture
def lifecycle(directory, appointment_store, publisher) -> AppointmentLifecycleService:
    return AppointmentLifecycleService(
        professional_directory=directory,
        appointment_store=appointment_store,
        event_publisher=publisher,
    )
