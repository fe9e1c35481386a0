"""Shared fixtures: a small campus loaded from tests/fixtures."""

from pathlib import Path
import shutil

import pytest

from campus_tracker import Campus, CampusConfig

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_dir() -> Path:
    """Directory holding map.json, people.json and movements.json."""
    return FIXTURES


@pytest.fixture
def campus_config(tmp_path) -> CampusConfig:
    """Config pointing at the fixture files; people live in a scratch copy."""
    people_path = tmp_path / "people.json"
    shutil.copy(FIXTURES / "people.json", people_path)
    return CampusConfig(
        map_path=str(FIXTURES / "map.json"),
        movements_path=str(FIXTURES / "movements.json"),
        people_path=str(people_path),
    )


@pytest.fixture
def campus(campus_config) -> Campus:
    """Fully loaded campus: 9 locations, 7 people, 25 sightings (one unknown id)."""
    return Campus.from_files(campus_config)
