"""Data models for the chronology module.

An Observation is a raw sensor sighting: who, where, when. The chronology turns
unordered observations into Events, each of which knows when the person arrived and,
once a later sighting exists, when they left.

Times are wall-clock times of a single day (datetime.time). An Event whose person has
not been seen again is *open*: its end_time is None and it is treated as lasting until
END_OF_DAY in interval tests.
"""

from dataclasses import dataclass, field
from datetime import time

from campus_tracker.core.location import Location
from campus_tracker.core.person import Person

END_OF_DAY = time.max
START_OF_DAY = time.min


@dataclass(frozen=True)
class Observation:
    """A single sighting of a person at a location.

    Attributes:
        person_id: ID of the person seen (need not be registered).
        location_id: ID of the location where the sensor fired.
        timestamp: Wall-clock time of the sighting.
    """

    person_id: str
    location_id: str
    timestamp: time


@dataclass(eq=False)
class Event:
    """A stay of one person at one location.

    Identity is (person_id, location, start_time) and never changes after creation.
    Ordering is by start_time only. end_time is set once, when the person's next
    sighting is chronicled; person is re-linked when people are added or removed.

    Attributes:
        person_id: ID of the person (always present).
        location: Where the stay happened.
        start_time: When the person was seen arriving.
        end_time: Start of the person's next event (None while open).
        person: Resolved Person, or None while the id is unknown.
    """

    person_id: str
    location: Location
    start_time: time
    end_time: time | None = None
    person: Person | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.person_id:
            raise ValueError("Event requires a non-empty person_id")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError(
                f"Event for {self.person_id} ends ({self.end_time}) before it starts "
                f"({self.start_time})"
            )

    @property
    def is_open(self) -> bool:
        """True while this is the person's most recent event."""
        return self.end_time is None

    @property
    def is_resolved(self) -> bool:
        """True when person_id matches a registered Person."""
        return self.person is not None

    @property
    def effective_end(self) -> time:
        """End time used in interval tests (END_OF_DAY while open)."""
        return END_OF_DAY if self.end_time is None else self.end_time

    def close(self, at: time) -> None:
        """Close an open event at the start of the person's next event.

        Raises:
            ValueError: If already closed or if ``at`` precedes start_time.
        """
        if self.end_time is not None:
            raise ValueError(f"Event {self} is already closed")
        if at < self.start_time:
            raise ValueError(f"Cannot close {self} at {at}: before its start")
        self.end_time = at

    def overlaps_window(self, start: time, end: time) -> bool:
        """Inclusive interval test against ``[start, end]``.

        The window is assumed to be well formed (start <= end).
        """
        return start <= self.effective_end and end >= self.start_time

    def overlaps(self, other: "Event") -> bool:
        """True if both events share a location and their intervals intersect.

        Endpoints are inclusive, so leaving at t and arriving at t overlap.
        """
        return (
            self.location.id == other.location.id
            and other.start_time <= self.effective_end
            and other.effective_end >= self.start_time
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (
            self.person_id == other.person_id
            and self.location.id == other.location.id
            and self.start_time == other.start_time
        )

    def __hash__(self) -> int:
        return hash((self.person_id, self.location.id, self.start_time))

    def __lt__(self, other: "Event") -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.start_time < other.start_time

    def __str__(self) -> str:
        end = "open" if self.end_time is None else self.end_time.isoformat()
        return f"{self.person_id}@{self.location.id} [{self.start_time.isoformat()} - {end}]"
