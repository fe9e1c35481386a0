"""Tests for CampusConfig."""

import pytest

from campus_tracker import CampusConfig


def test_defaults():
    """Test default file locations and tunables."""
    config = CampusConfig()

    assert config.map_path == "data/map.json"
    assert config.movements_path == "data/movements.json"
    assert config.people_path == "data/people.json"
    assert config.emergency_spot_id == "EMERGENCY_SPOT"
    assert config.near_capacity_margin == 2


def test_update_from_env(monkeypatch):
    """Test environment variables override fields, with int coercion."""
    monkeypatch.setenv("CAMPUS_TRACKER_MAP_PATH", "/srv/campus/map.json")
    monkeypatch.setenv("CAMPUS_TRACKER_NEAR_CAPACITY_MARGIN", "5")

    config = CampusConfig().update_from_env()

    assert config.map_path == "/srv/campus/map.json"
    assert config.near_capacity_margin == 5
    assert config.movements_path == "data/movements.json"


def test_update_from_env_custom_prefix(monkeypatch):
    """Test a custom prefix."""
    monkeypatch.setenv("TRACK_EMERGENCY_SPOT_ID", "MUSTER")

    assert CampusConfig().update_from_env(prefix="TRACK_").emergency_spot_id == "MUSTER"


def test_update_from_env_bad_value(monkeypatch):
    """Test an unparsable value names the variable."""
    monkeypatch.setenv("CAMPUS_TRACKER_NEAR_CAPACITY_MARGIN", "lots")

    with pytest.raises(ValueError, match="CAMPUS_TRACKER_NEAR_CAPACITY_MARGIN"):
        CampusConfig().update_from_env()


def test_as_dict():
    """Test the dictionary form."""
    data = CampusConfig(people_path="people.json").as_dict()

    assert data["people_path"] == "people.json"
    assert set(data) == {
        "map_path",
        "movements_path",
        "people_path",
        "emergency_spot_id",
        "near_capacity_margin",
    }
