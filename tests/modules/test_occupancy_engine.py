"""Tests for the occupancy engine."""

from datetime import time

import pytest

from campus_tracker.core import Location
from campus_tracker.modules.chronology import Event
from campus_tracker.modules.occupancy import OccupancyEngine

HALL = Location("SA", "Hall", 100)
ROOM = Location("A2", "Room A2", 2)
GYM = Location("G1", "Gym", 20)


def event(person_id, location, start, end=None):
    return Event(
        person_id,
        location,
        time.fromisoformat(start),
        end_time=time.fromisoformat(end) if end else None,
    )


@pytest.fixture
def history():
    """Three people; two still in the room, one gone home from the hall."""
    return [
        event("1", HALL, "09:00", "10:00"),
        event("2", HALL, "09:30", "11:00"),
        event("1", ROOM, "10:00"),
        event("2", ROOM, "11:00"),
        event("3", HALL, "11:30"),
    ]


@pytest.fixture
def engine():
    """Engine over hall, room and gym."""
    return OccupancyEngine([HALL, ROOM, GYM])


class TestSnapshot:
    """Tests for the current headcount."""

    def test_counts_open_events_only(self, engine, history):
        """Test only open events count; empty locations report zero."""
        assert engine.snapshot(history) == {"SA": 1, "A2": 2, "G1": 0}

    def test_empty_history(self, engine):
        """Test every location starts at zero."""
        assert engine.snapshot([]) == {"SA": 0, "A2": 0, "G1": 0}

    def test_does_not_mutate_locations(self, engine, history):
        """Test repeated queries give the same answer."""
        assert engine.snapshot(history) == engine.snapshot(history)
        assert ROOM.maximum_capacity == 2

    def test_unknown_location_skipped(self, history, caplog):
        """Test events at locations the engine does not know are logged and skipped."""
        engine = OccupancyEngine([ROOM])

        assert engine.snapshot(history) == {"A2": 2}
        assert "outside the engine" in caplog.text


class TestWindow:
    """Tests for the windowed headcount."""

    def test_inclusive_endpoints(self, engine, history):
        """Test an event ending exactly at the window start counts."""
        assert engine.in_window(history, time(10, 0), time(10, 0)) == {"SA": 2, "A2": 1, "G1": 0}

    def test_window_after_departure(self, engine, history):
        """Test closed events before the window are excluded."""
        assert engine.in_window(history, time(11, 0, 1), time(12, 0)) == {
            "SA": 1,
            "A2": 2,
            "G1": 0,
        }

    def test_whole_day(self, engine, history):
        """Test a whole-day window counts every event."""
        assert engine.in_window(history, time.min, time.max) == {"SA": 3, "A2": 2, "G1": 0}
