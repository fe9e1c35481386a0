"""Data models for the access module.

Violations are per event; capacity alerts are per location.
"""

from dataclasses import dataclass
from enum import Enum

from campus_tracker.core.location import Location
from campus_tracker.core.person import Role
from campus_tracker.modules.chronology.models import Event


class ViolationKind(Enum):
    """Why an event breaks access policy.

    UNKNOWN_PERSON: The person id does not resolve to a registered Person.
    ROLE: The person's role may not enter the location's restricted area.
    """

    UNKNOWN_PERSON = "unknown_person"
    ROLE = "role"


class CapacityLevel(Enum):
    """How close a location is to its maximum capacity."""

    NEAR = "near"  # max - margin <= occupancy <= max
    OVER = "over"  # occupancy > max


# Restricted role -> visiting roles that violate it. Student- and Other-restricted
# locations raise nothing.
ROLE_VIOLATIONS: dict[Role, frozenset[Role]] = {
    Role.TEACHER: frozenset({Role.WORKER, Role.STUDENT}),
    Role.WORKER: frozenset({Role.TEACHER, Role.STUDENT}),
}


@dataclass(frozen=True)
class AccessViolation:
    """A historical event that broke access policy.

    Attributes:
        event: The offending event.
        kind: Unknown person or role mismatch.
    """

    event: Event
    kind: ViolationKind

    @property
    def person_id(self) -> str:
        return self.event.person_id


@dataclass(frozen=True)
class CapacityAlert:
    """A location near or over its capacity.

    Attributes:
        location: The location.
        occupancy: Current headcount.
        level: NEAR or OVER.
    """

    location: Location
    occupancy: int
    level: CapacityLevel
