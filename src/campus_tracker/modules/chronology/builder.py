"""The chronology builder.

Pure logic: takes unordered observations plus the entity store and returns the
ordered event history. Each person's events chain end-to-start: closing an event sets
its end to the start of the person's next sighting, with no adjustment.

Same-timestamp observations keep their input order (the sort is stable).
"""

import logging
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Iterable

from campus_tracker.core.store import EntityStore

from .models import Event, Observation

_LOGGER = logging.getLogger(__name__)


@dataclass
class Chronology:
    """Result of a build.

    Attributes:
        events: All events ordered by start time (people interleaved).
        open_events: person_id -> that person's most recent (open) event.
    """

    events: list[Event] = field(default_factory=list)
    open_events: dict[str, Event] = field(default_factory=dict)


class ChronologyBuilder:
    """Turns observations into a gap-free per-person timeline."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize the builder.

        Args:
            store: Used to resolve location ids (required) and person ids (optional).
        """
        self._store = store

    def build(self, observations: Iterable[Observation]) -> Chronology:
        """Build the full history from scratch.

        Runs in O(n log n): one stable sort, then one pass with an id-keyed map of
        open events.

        Args:
            observations: Sightings in any order.

        Returns:
            A new Chronology; nothing is published.

        Raises:
            ValueError: If an observation has an empty id, an unknown location or a
                timestamp with a UTC offset.
        """
        observations = list(observations)
        for observation in observations:
            self.validate(observation)
        ordered = sorted(observations, key=attrgetter("timestamp"))

        chronology = Chronology()
        for observation in ordered:
            self.chronicle(observation, chronology)

        _LOGGER.info(
            f"Built chronology: {len(chronology.events)} events for "
            f"{len(chronology.open_events)} people"
        )
        return chronology

    def validate(self, observation: Observation) -> None:
        """Reject observations that cannot become events.

        Raises:
            ValueError: If an id is empty, the timestamp is offset-aware or the location
                does not resolve.
        """
        if not observation.person_id:
            raise ValueError(f"Observation at {observation.timestamp} has an empty person id")
        if not observation.location_id:
            raise ValueError(f"Observation at {observation.timestamp} has an empty location id")
        if observation.timestamp.tzinfo is not None:
            raise ValueError(
                f"Observation for {observation.person_id} at {observation.timestamp} carries a "
                f"UTC offset; wall-clock times only"
            )
        if self._store.get_location(observation.location_id) is None:
            raise ValueError(
                f"Observation for {observation.person_id} references unknown location "
                f"'{observation.location_id}'"
            )

    def chronicle(self, observation: Observation, chronology: Chronology) -> Event:
        """Append one (already validated, chronologically next) observation.

        Closes the person's open event, if any, and records the new one as open.
        """
        location = self._store.get_location(observation.location_id)
        assert location is not None

        event = Event(
            person_id=observation.person_id,
            location=location,
            start_time=observation.timestamp,
            person=self._store.get_person(observation.person_id),
        )

        previous = chronology.open_events.get(observation.person_id)
        if previous is not None:
            previous.close(observation.timestamp)
            _LOGGER.debug(f"  Closed {previous}")

        chronology.open_events[observation.person_id] = event
        chronology.events.append(event)
        return event
