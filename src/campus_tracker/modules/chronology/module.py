"""ChronologyModule - Where has everyone been, and where are they now."""

import logging
from datetime import time
from typing import Dict, Iterable, List, Optional

from campus_tracker.modules.base import CampusModule
from campus_tracker.core.bus import Message, MessageBus
from campus_tracker.core.location import Location
from campus_tracker.core.store import EntityStore

from .builder import Chronology, ChronologyBuilder
from .models import Event, Observation

logger = logging.getLogger(__name__)


class ChronologyModule(CampusModule):
    """
    Chronology tracking module.

    Owns the reconstruction of the event history and keeps the person
    references of events in sync with the People collection.

    Features:
    - Full build from unordered observations (published as one swap)
    - Incremental append of a chronologically newer observation
    - Person relinking on add/remove/import
    - Per-person queries (current location, history, time windows)

    Messages Consumed:
    - person.added: link that person's events
    - person.removed: unlink that person's events
    - people.replaced: relink every event

    Note: Time windows are assumed well formed (start <= end). Rejecting inverted
    windows is the caller's job.
    """

    def __init__(self) -> None:
        self._bus: Optional[MessageBus] = None
        self._store: Optional[EntityStore] = None
        self._builder: Optional[ChronologyBuilder] = None
        self._chronology = Chronology()

    @property
    def id(self) -> str:
        return "chronology"

    def attach(self, bus: MessageBus, store: EntityStore) -> None:
        """Attach to kernel components."""
        self._bus = bus
        self._store = store
        self._builder = ChronologyBuilder(store)
        store.publish_events(self._chronology.events)

        bus.subscribe(self._on_person_added, message_type="person.added")
        bus.subscribe(self._on_person_removed, message_type="person.removed")
        bus.subscribe(self._on_people_replaced, message_type="people.replaced")

        logger.info("ChronologyModule attached to kernel")

    # Building

    def load(self, observations: Iterable[Observation]) -> List[Event]:
        """
        Rebuild the history from scratch and publish it.

        The new history is built off to the side, then swapped into the store.

        Args:
            observations: Sightings in any order

        Returns:
            The published history

        Raises:
            ValueError: If an observation is invalid (nothing is published)
        """
        builder = self._require_builder()
        chronology = builder.build(observations)

        self._chronology = chronology
        self._store.publish_events(chronology.events)
        return chronology.events

    def append(self, observation: Observation) -> Event:
        """
        Chronicle one new observation without rebuilding.

        Args:
            observation: A sighting no older than the newest event in the history

        Returns:
            The new (open) event

        Raises:
            ValueError: If the observation is invalid or older than the history tail
        """
        builder = self._require_builder()
        builder.validate(observation)

        events = self._chronology.events
        if events and observation.timestamp < events[-1].start_time:
            raise ValueError(
                f"Observation at {observation.timestamp} is older than the newest event "
                f"({events[-1].start_time}); rebuild the chronology instead"
            )

        event = builder.chronicle(observation, self._chronology)
        logger.info(f"Appended event {event}")
        return event

    # Relinking

    def _relink(self, person_id: Optional[str] = None) -> int:
        """Refresh person references; one person (by id) or everyone."""
        assert self._store is not None
        relinked = 0
        for event in self._chronology.events:
            if person_id is not None and event.person_id != person_id:
                continue
            event.person = self._store.get_person(event.person_id)
            relinked += 1
        return relinked

    def _on_person_added(self, message: Message) -> None:
        count = self._relink(message.person_id)
        logger.debug(f"Linked {count} events to person {message.person_id}")

    def _on_person_removed(self, message: Message) -> None:
        count = self._relink(message.person_id)
        logger.debug(f"Unlinked {count} events from person {message.person_id}")

    def _on_people_replaced(self, message: Message) -> None:
        count = self._relink()
        logger.info(f"Relinked {count} events after people import")

    # Queries

    def all_events(self) -> List[Event]:
        """Get the full history ordered by start time."""
        return self._chronology.events

    def current_event(self, person_id: str) -> Optional[Event]:
        """
        Get the most recent event of a person.

        Args:
            person_id: Person ID (registered or not)

        Returns:
            The open event, or None if the person has no events
        """
        return self._chronology.open_events.get(person_id)

    def current_location(self, person_id: str) -> Optional[Location]:
        """
        Get where a person was last seen.

        Args:
            person_id: Person ID (registered or not)

        Returns:
            Location of the most recent event, or None if the person has no events
        """
        event = self.current_event(person_id)
        return event.location if event else None

    def current_locations(self) -> Dict[str, Location]:
        """
        Get the current location of every registered person who has events.

        Returns:
            person_id -> Location, in People collection order
        """
        assert self._store is not None
        locations: Dict[str, Location] = {}
        for person in self._store.all_people():
            location = self.current_location(person.id)
            if location is not None:
                locations[person.id] = location
        return locations

    def events_of_person(self, person_id: str) -> List[Event]:
        """
        Get every event of a person, in history order.

        Args:
            person_id: Person ID (registered or not)

        Returns:
            List of events (empty if none)
        """
        return [event for event in self._chronology.events if event.person_id == person_id]

    def events_in_window(self, person_id: str, start: time, end: time) -> List[Event]:
        """
        Get the events of a person that intersect ``[start, end]`` (inclusive).

        Args:
            person_id: Person ID (registered or not)
            start: Window start
            end: Window end (not before start)

        Returns:
            List of events in history order
        """
        return [
            event
            for event in self._chronology.events
            if event.person_id == person_id and event.overlaps_window(start, end)
        ]

    def first_location_in_window(
        self, person_id: str, start: time, end: time
    ) -> Optional[Location]:
        """
        Get where a person was at the beginning of a window.

        Returns:
            Location of the first event intersecting the window, or None
        """
        for event in self._chronology.events:
            if event.person_id == person_id and event.overlaps_window(start, end):
                return event.location
        return None

    def _require_builder(self) -> ChronologyBuilder:
        if self._builder is None or self._store is None:
            raise RuntimeError("ChronologyModule not attached to EntityStore")
        return self._builder
