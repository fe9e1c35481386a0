"""JSON import/export for campus data.

File shapes:
- map: {"locations": [{id, name, maximum_capacity, restricted_to}],
        "relationships": [{from, to, distance}]}
- people: [{id, name, role}]
- movements: [{location_id, person_id, time}]

Any problem reading a file raises IngestionError; the session cannot start without a
valid map and a valid movement history.
"""

from __future__ import annotations

import json
import logging
from datetime import time
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple

from campus_tracker.core.location import Location
from campus_tracker.core.person import Person, Role
from campus_tracker.modules.chronology.models import Observation

logger = logging.getLogger(__name__)

Relationship = Tuple[str, str, float]


class IngestionError(ValueError):
    """Raised when campus data cannot be imported."""


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise IngestionError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise IngestionError(f"Invalid JSON in {path}: {exc}") from exc


def _require(record: Mapping[str, Any], key: str, what: str) -> Any:
    if not isinstance(record, Mapping):
        raise IngestionError(f"{what} must be an object, got {record!r}")
    if key not in record:
        raise IngestionError(f"{what} is missing '{key}': {dict(record)}")
    return record[key]


def _array(data: Any, what: str) -> List[Any]:
    if not isinstance(data, list):
        raise IngestionError(f"Expected an array of {what}")
    return data


def _role(text: Any, what: str) -> Role | None:
    try:
        return Role.parse(text)
    except (ValueError, AttributeError) as exc:
        raise IngestionError(f"{what}: {exc}") from exc


def parse_time(text: Any) -> time:
    """Parse a wall-clock time such as "13:55:31" or "08:00".

    Raises:
        IngestionError: If the value is not a valid time.
    """
    if not isinstance(text, str) or not text.strip():
        raise IngestionError(f"Invalid time value {text!r}")
    try:
        parsed = time.fromisoformat(text.strip())
    except ValueError as exc:
        raise IngestionError(f"Invalid time value {text!r}") from exc
    # Wall-clock times only; aware and naive times cannot be compared.
    if parsed.tzinfo is not None:
        raise IngestionError(f"Invalid time value {text!r}: UTC offsets are not supported")
    return parsed


# Parsing (already decoded JSON)


def parse_locations(data: Iterable[Mapping[str, Any]]) -> List[Location]:
    """Build Locations from decoded map entries."""
    locations: List[Location] = []
    seen: set[str] = set()
    for record in _array(data, "locations"):
        location_id = str(_require(record, "id", "Location"))
        if not location_id:
            raise IngestionError("Location with empty id")
        if location_id in seen:
            raise IngestionError(f"Duplicate location id '{location_id}'")
        seen.add(location_id)

        capacity = _require(record, "maximum_capacity", f"Location {location_id}")
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise IngestionError(
                f"Location {location_id}: maximum_capacity must be an integer >= 0, "
                f"got {capacity!r}"
            )

        locations.append(
            Location(
                id=location_id,
                name=str(_require(record, "name", f"Location {location_id}")),
                maximum_capacity=capacity,
                restricted_to=_role(record.get("restricted_to"), f"Location {location_id}"),
            )
        )
    return locations


def parse_relationships(data: Iterable[Mapping[str, Any]]) -> List[Relationship]:
    """Build (from, to, distance) walkways from decoded map entries."""
    relationships: List[Relationship] = []
    for record in _array(data, "relationships"):
        from_id = str(_require(record, "from", "Relationship"))
        to_id = str(_require(record, "to", "Relationship"))
        distance = _require(record, "distance", "Relationship")
        if isinstance(distance, bool) or not isinstance(distance, (int, float)) or distance < 0:
            raise IngestionError(
                f"Relationship {from_id} - {to_id}: distance must be a number >= 0, "
                f"got {distance!r}"
            )
        relationships.append((from_id, to_id, float(distance)))
    return relationships


def parse_people(data: Iterable[Mapping[str, Any]]) -> List[Person]:
    """Build People from decoded entries."""
    people: List[Person] = []
    seen: set[str] = set()
    for record in _array(data, "people"):
        person_id = str(_require(record, "id", "Person"))
        if not person_id:
            raise IngestionError("Person with empty id")
        if person_id in seen:
            raise IngestionError(f"Duplicate person id '{person_id}'")
        seen.add(person_id)

        role = _role(_require(record, "role", f"Person {person_id}"), f"Person {person_id}")
        if role is None:
            raise IngestionError(f"Person {person_id} has no role")

        people.append(
            Person(id=person_id, name=str(_require(record, "name", f"Person {person_id}")), role=role)
        )
    return people


def parse_observations(data: Iterable[Mapping[str, Any]]) -> List[Observation]:
    """Build Observations from decoded movement entries.

    Location ids are only checked for emptiness here; resolving them is the
    chronology builder's job.
    """
    observations: List[Observation] = []
    for index, record in enumerate(_array(data, "movements")):
        location_id = _require(record, "location_id", f"Movement #{index}")
        person_id = _require(record, "person_id", f"Movement #{index}")
        if not isinstance(location_id, str) or not location_id:
            raise IngestionError(f"Movement #{index} has an empty location id")
        if not isinstance(person_id, str) or not person_id:
            raise IngestionError(f"Movement #{index} has an empty person id")

        observations.append(
            Observation(
                person_id=person_id,
                location_id=location_id,
                timestamp=parse_time(_require(record, "time", f"Movement #{index}")),
            )
        )
    return observations


# Files


def load_map(path: str | Path) -> Tuple[List[Location], List[Relationship]]:
    """Read locations and walkways from the map file."""
    data = _read_json(path)
    if not isinstance(data, Mapping):
        raise IngestionError(f"Map file {path} must contain an object")

    locations = parse_locations(_require(data, "locations", "Map"))
    relationships = parse_relationships(data.get("relationships", []))
    logger.info(f"Loaded map {path}: {len(locations)} locations, {len(relationships)} walkways")
    return locations, relationships


def load_people(path: str | Path) -> List[Person]:
    """Read the people file."""
    people = parse_people(_read_json(path))
    logger.info(f"Loaded {len(people)} people from {path}")
    return people


def load_observations(path: str | Path) -> List[Observation]:
    """Read the movements file."""
    observations = parse_observations(_read_json(path))
    logger.info(f"Loaded {len(observations)} movements from {path}")
    return observations


def dump_people(people: Iterable[Person]) -> List[dict]:
    """Serialize people to the people file shape."""
    return [{"id": person.id, "name": person.name, "role": person.role.value} for person in people]


def export_people(people: Iterable[Person], path: str | Path) -> None:
    """Write people back to the people file shape (pretty-printed, UTF-8)."""
    records = dump_people(people)
    Path(path).write_text(json.dumps(records, indent=4, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Exported {len(records)} people to {path}")
