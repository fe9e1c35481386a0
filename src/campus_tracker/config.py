"""Configuration for a campus-tracker session."""

from dataclasses import dataclass, asdict, fields
import os
from typing import Any, Dict

from campus_tracker.modules.access.checker import DEFAULT_NEAR_CAPACITY_MARGIN
from campus_tracker.modules.routing.module import EMERGENCY_SPOT_ID


def _coerce_value(value: str, target_type: Any) -> Any:
    """Coerce an environment string to a field type."""
    if target_type in (int, "int"):
        return int(value)
    if target_type in (float, "float"):
        return float(value)
    return value


@dataclass
class CampusConfig:
    """
    Where the campus data lives and the tunables of the session.

    Attributes:
        map_path: JSON map with "locations" and "relationships" (required file)
        movements_path: JSON array of sightings (required file)
        people_path: JSON array of people (optional file; also the export target)
        emergency_spot_id: Vertex that evacuation routes lead to
        near_capacity_margin: People below maximum capacity that count as "near"
    """

    map_path: str = "data/map.json"
    movements_path: str = "data/movements.json"
    people_path: str = "data/people.json"
    emergency_spot_id: str = EMERGENCY_SPOT_ID
    near_capacity_margin: int = DEFAULT_NEAR_CAPACITY_MARGIN

    def update_from_env(self, prefix: str = "CAMPUS_TRACKER_") -> "CampusConfig":
        """Override fields from environment variables (e.g. CAMPUS_TRACKER_MAP_PATH)."""
        for field in fields(self):
            env_key = f"{prefix}{field.name.upper()}"
            if env_key in os.environ:
                raw_value = os.environ[env_key]
                try:
                    coerced = _coerce_value(raw_value, field.type)
                except ValueError as exc:
                    raise ValueError(f"Failed to parse env var {env_key}: {raw_value}") from exc
                setattr(self, field.name, coerced)
        return self

    def as_dict(self) -> Dict[str, Any]:
        """Return the configuration as a serialisable dictionary."""
        return asdict(self)


__all__ = ["CampusConfig"]
