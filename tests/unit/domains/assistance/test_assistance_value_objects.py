# ============================================================================
# Tests for assistance value objects
# ============================================================================
"""Unit tests for statuses, time windows and history entries."""

from datetime import UTC, date, datetime, time

import pytest

from care_scheduling.domains.assistance.domain.value_objects import (
    AppointmentModality,
    AppointmentStatus,
    BreakInterval,
    HistoryAction,
    HistoryEntry,
    Interval,
    Specialty,
    TrackingRecordStatus,
    WorkingHours,
    parse_hhmm,
    weekday_of,
)
from tests.utils import MONDAY, at

pytestmark = pytest.mark.unit


class TestAppointmentStatusGraph:
    """Tests for the appointment status transition graph."""

    @pytest.mark.parametrize(
        "source,target",
        [
            (AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED),
            (AppointmentStatus.SCHEDULED, AppointmentStatus.CANCELLED),
            (AppointmentStatus.SCHEDULED, AppointmentStatus.NO_SHOW),
            (AppointmentStatus.SCHEDULED, AppointmentStatus.RESCHEDULED),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.IN_PROGRESS),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED),
            (AppointmentStatus.CONFIRMED, AppointmentStatus.RESCHEDULED),
            (AppointmentStatus.RESCHEDULED, AppointmentStatus.SCHEDULED),
            (AppointmentStatus.IN_PROGRESS, AppointmentStatus.COMPLETED),
        ],
    )
    def test_allowed_transitions(self, source, target) -> None:
        """Should allow every edge of the graph."""
        assert source.can_transition_to(target) is True

    @pytest.mark.parametrize(
        "source,target",
        [
            (AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED),
            (AppointmentStatus.SCHEDULED, AppointmentStatus.IN_PROGRESS),
            (AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED),
            (AppointmentStatus.COMPLETED, AppointmentStatus.SCHEDULED),
            (AppointmentStatus.CANCELLED, AppointmentStatus.CONFIRMED),
            (AppointmentStatus.NO_SHOW, AppointmentStatus.RESCHEDULED),
        ],
    )
    def test_rejected_transitions(self, source, target) -> None:
        """Should reject transitions outside the graph."""
        assert source.can_transition_to(target) is False

    def test_terminal_states(self) -> None:
        """Should have no outgoing edges from terminal states."""
        terminal = {s for s in AppointmentStatus if s.is_terminal()}
        assert terminal == {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW}

    def test_active_statuses_block_slots(self) -> None:
        """Should treat everything except cancelled, no-show and completed as active."""
        assert AppointmentStatus.SCHEDULED.is_active()
        assert AppointmentStatus.CONFIRMED.is_active()
        assert AppointmentStatus.IN_PROGRESS.is_active()
        assert AppointmentStatus.RESCHEDULED.is_active()
        assert not AppointmentStatus.CANCELLED.is_active()
        assert not AppointmentStatus.NO_SHOW.is_active()
        assert not AppointmentStatus.COMPLETED.is_active()

    def test_from_string(self) -> None:
        """Should parse stored values."""
        assert AppointmentStatus.from_string("in_progress") == AppointmentStatus.IN_PROGRESS


class TestEnums:
    """Tests for the classification enums."""

    def test_specialties_with_intake(self) -> None:
        """Should flag only physiotherapy, nutrition and psychology."""
        with_intake = {s for s in Specialty if s.has_intake}
        assert with_intake == {Specialty.PHYSIOTHERAPY, Specialty.NUTRITION, Specialty.PSYCHOLOGY}

    def test_remote_modalities(self) -> None:
        assert AppointmentModality.ONLINE.is_remote
        assert not AppointmentModality.HOME_VISIT.is_remote

    def test_live_tracking_statuses(self) -> None:
        assert TrackingRecordStatus.ACTIVE.is_live()
        assert TrackingRecordStatus.PAUSED.is_live()
        assert not TrackingRecordStatus.CLOSED.is_live()


class TestInterval:
    """Tests for half-open intervals."""

    def test_overlap_is_symmetric(self) -> None:
        """Should give the same answer in both directions."""
        a = Interval(start=at(10), end=at(11))
        b = Interval(start=at(10, 30), end=at(11, 30))
        assert a.overlaps(b) and b.overlaps(a)

    def test_abutting_intervals_do_not_overlap(self) -> None:
        """Should not overlap when one ends exactly when the other starts."""
        a = Interval(start=at(10), end=at(11))
        b = Interval(start=at(11), end=at(12))
        assert not a.overlaps(b)
        assert not b.overlaps(a)

    def test_containment(self) -> None:
        outer = Interval(start=at(8), end=at(18))
        assert outer.contains(Interval(start=at(8), end=at(9)))
        assert not outer.contains(Interval(start=at(17, 30), end=at(18, 30)))

    def test_rejects_empty_interval(self) -> None:
        """Should require end after start."""
        with pytest.raises(ValueError):
            Interval(start=at(10), end=at(10))

    def test_duration_and_shift(self) -> None:
        interval = Interval(start=at(10), end=at(10, 50))
        assert interval.duration_minutes == 50
        assert interval.shifted_to(at(14)) == Interval(start=at(14), end=at(14, 50))


class TestWorkingHours:
    """Tests for weekly working windows."""

    def test_weekday_numbering_starts_on_sunday(self) -> None:
        """Should number Sunday as 0 and Monday as 1."""
        assert weekday_of(MONDAY) == 1
        assert weekday_of(date(2024, 1, 14)) == 0
        assert weekday_of(date(2024, 1, 20)) == 6

    def test_parse_hhmm(self) -> None:
        assert parse_hhmm("08:30") == time(8, 30)
        assert parse_hhmm(time(9, 0)) == time(9, 0)
        with pytest.raises(ValueError):
            parse_hhmm("noon")

    def test_rejects_invalid_weekday(self) -> None:
        with pytest.raises(ValueError):
            WorkingHours(weekday=7, start_time=time(8, 0), end_time=time(12, 0))

    def test_rejects_inverted_window(self) -> None:
        with pytest.raises(ValueError):
            WorkingHours(weekday=1, start_time=time(18, 0), end_time=time(8, 0))

    def test_dict_round_trip_with_breaks(self) -> None:
        """Should serialize breaks as HH:MM pairs."""
        hours = WorkingHours(
            weekday=2,
            start_time=time(8, 0),
            end_time=time(17, 0),
            breaks=(BreakInterval(start_time=time(12, 0), end_time=time(13, 0)),),
        )
        data = hours.to_dict()
        assert data == {
            "weekday": 2,
            "start_time": "08:00",
            "end_time": "17:00",
            "breaks": [{"start": "12:00", "end": "13:00"}],
        }
        assert WorkingHours.from_dict(data) == hours

    def test_window_on_day(self) -> None:
        hours = WorkingHours(weekday=1, start_time=time(8, 0), end_time=time(18, 0))
        assert hours.window_on(MONDAY) == Interval(start=at(8), end=at(18))


class TestHistoryEntry:
    """Tests for history entries."""

    def test_is_immutable(self) -> None:
        entry = HistoryEntry(timestamp=datetime.now(UTC), action=HistoryAction.CREATED, actor_id="staff-1")
        with pytest.raises(AttributeError):
            entry.note = "changed"  # type: ignore[misc]

    def test_dict_round_trip(self) -> None:
        entry = HistoryEntry(
            timestamp=datetime(2024, 1, 15, 9, 0, tzinfo=UTC),
            action=HistoryAction.CONFIRMED,
            actor_id="staff-1",
            note="Appointment confirmed",
            previous_status=AppointmentStatus.SCHEDULED,
            new_status=AppointmentStatus.CONFIRMED,
        )
        assert HistoryEntry.from_dict(entry.to_dict()) == entry
