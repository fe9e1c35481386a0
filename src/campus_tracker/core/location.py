"""
Location dataclass and helpers.

A Location represents a physical space on campus: a room, hall, lab or workshop.
"""

from dataclasses import dataclass
from typing import Optional

from campus_tracker.core.person import Role


@dataclass(frozen=True)
class Location:
    """
    A physical space tracked by the campus.

    Occupancy is not stored here; it is recomputed per query by the occupancy engine.

    Attributes:
        id: Unique identifier for this location
        name: Human-readable name
        maximum_capacity: Maximum number of people allowed at once (>= 0)
        restricted_to: Role this location is restricted to (None = open to all roles)
    """

    id: str
    name: str
    maximum_capacity: int = 0
    restricted_to: Optional[Role] = None

    def __post_init__(self) -> None:
        if self.maximum_capacity < 0:
            raise ValueError(
                f"Location '{self.id}' has negative capacity {self.maximum_capacity}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
