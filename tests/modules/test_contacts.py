"""Tests for the contact engine."""

from datetime import time

from campus_tracker.core import Location
from campus_tracker.modules.chronology import END_OF_DAY, START_OF_DAY, Event
from campus_tracker.modules.contacts import ContactEngine, contact_person_ids

A1 = Location("A1", "Room A1")
A2 = Location("A2", "Room A2")


def event(person_id, location, start, end=None):
    return Event(
        person_id,
        location,
        time.fromisoformat(start),
        end_time=time.fromisoformat(end) if end else None,
    )


class TestContacts:
    """Tests for contact tracing."""

    def test_same_place_same_time(self):
        """Test people at the same location with intersecting stays are contacts."""
        history = [
            event("1", A1, "09:00", "10:00"),
            event("2", A1, "09:30", "09:45"),
            event("3", A2, "09:30"),
            event("4", A1, "10:00"),
            event("5", A1, "10:00:01"),
        ]

        contacts = ContactEngine(history).contacts("1", START_OF_DAY, END_OF_DAY)

        assert [c.person_id for c in contacts] == ["2", "4"]

    def test_only_same_instance_skipped(self):
        """Test a person's adjacent stay at the same location counts, but not in the id summary."""
        first = event("1", A1, "09:00", "10:00")
        second = event("1", A1, "10:00")

        contacts = ContactEngine([first, second]).contacts("1", START_OF_DAY, END_OF_DAY)

        assert contacts == [first, second]
        assert contact_person_ids(contacts, exclude="1") == []
        assert contact_person_ids(contacts) == ["1"]

    def test_window_restricts_own_events(self):
        """Test only the person's events inside the window are traced."""
        history = [
            event("1", A1, "09:00", "10:00"),
            event("2", A1, "09:15", "09:30"),
            event("1", A2, "10:00"),
            event("3", A2, "11:00"),
        ]
        engine = ContactEngine(history)

        assert [e.location.id for e in engine.own_events("1", time(10, 30), time(12, 0))] == ["A2"]
        assert [c.person_id for c in engine.contacts("1", time(10, 30), time(12, 0))] == ["3"]

    def test_duplicate_emission(self):
        """Test an event overlapping two of the person's events is reported twice."""
        long_stay = event("2", A1, "09:00", "12:00")
        history = [
            long_stay,
            event("1", A1, "09:30", "10:00"),
            event("1", A2, "10:00", "11:00"),
            event("1", A1, "11:00"),
        ]

        contacts = ContactEngine(history).contacts("1", START_OF_DAY, END_OF_DAY)

        assert contacts == [long_stay, long_stay]
        assert contact_person_ids(contacts) == ["2"]

    def test_no_events(self):
        """Test a person with no events in the window has no contacts."""
        history = [event("2", A1, "09:00")]

        assert ContactEngine(history).contacts("1", START_OF_DAY, END_OF_DAY) == []

    def test_unresolved_ids_kept(self):
        """Test unknown person ids still show up as contacts."""
        history = [event("1", A1, "09:00"), event("55", A1, "09:10")]

        assert contact_person_ids(ContactEngine(history).contacts("1", START_OF_DAY, END_OF_DAY)) == [
            "55"
        ]


def test_contact_person_ids_first_seen_order():
    """Test the summary keeps first-seen order."""
    history = [event("3", A1, "09:00"), event("2", A1, "09:01"), event("3", A2, "09:02")]

    assert contact_person_ids(history) == ["3", "2"]
