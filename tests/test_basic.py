"""Basic tests to verify the package structure."""

from datetime import time


def test_import():
    """Test that the package can be imported."""
    import campus_tracker

    assert campus_tracker.__version__ == "0.1.0"


def test_core_imports():
    """Test that core classes can be imported."""
    from campus_tracker import Campus, CampusConfig, EntityStore, Location, MessageBus, Person, Role

    assert Campus is not None
    assert CampusConfig is not None
    assert EntityStore is not None
    assert Location is not None
    assert MessageBus is not None
    assert Person is not None
    assert Role is not None


def test_module_imports():
    """Test that every module package can be imported."""
    from campus_tracker.modules import CampusModule
    from campus_tracker.modules.access import AccessChecker
    from campus_tracker.modules.chronology import ChronologyModule
    from campus_tracker.modules.contacts import ContactEngine
    from campus_tracker.modules.occupancy import OccupancyEngine
    from campus_tracker.modules.routing import EmergencyRoutingModule

    assert issubclass(ChronologyModule, CampusModule)
    assert issubclass(EmergencyRoutingModule, CampusModule)
    assert AccessChecker is not None
    assert ContactEngine is not None
    assert OccupancyEngine is not None


def test_create_empty_campus():
    """Test creating an empty campus."""
    from campus_tracker import Campus

    campus = Campus()
    assert campus.locations() == []
    assert campus.people() == []
    assert campus.events() == []
    assert campus.occupancy() == {}


def test_role_parsing():
    """Test role text parsing."""
    import pytest
    from campus_tracker import Role

    assert Role.parse("teacher") is Role.TEACHER
    assert Role.parse(" WORKER ") is Role.WORKER
    assert Role.parse("") is None
    assert Role.parse(None) is None
    assert Role.STUDENT.label == "Student"

    with pytest.raises(ValueError):
        Role.parse("janitor")


def test_entity_identity():
    """Test that people and locations compare by id."""
    from campus_tracker import Location, Person, Role

    assert Person("1", "Carlos", Role.STUDENT) == Person("1", "Someone else", Role.OTHER)
    assert str(Person("1", "Carlos", Role.STUDENT)) == "Carlos (1)"
    assert Location("A1", "Room", 30) == Location("A1", "Other name", 5)
    assert len({Location("A1", "Room"), Location("A1", "Room again")}) == 1


def test_location_rejects_negative_capacity():
    """Test that a location cannot have a negative capacity."""
    import pytest
    from campus_tracker import Location

    with pytest.raises(ValueError):
        Location("A1", "Room", -1)


def test_end_of_day_sentinel():
    """Test the open-event sentinel is the last representable time."""
    from campus_tracker.modules.chronology import END_OF_DAY, START_OF_DAY

    assert END_OF_DAY == time(23, 59, 59, 999999)
    assert START_OF_DAY == time(0, 0)
