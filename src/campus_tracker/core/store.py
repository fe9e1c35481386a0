"""
EntityStore for locations, people and the event history.

The EntityStore owns the entities and their id lookup, not the behavior.
"""

from typing import Dict, Iterable, List, Optional, TYPE_CHECKING
import logging

from campus_tracker.core.bus import Message, MessageBus
from campus_tracker.core.location import Location
from campus_tracker.core.person import Person

if TYPE_CHECKING:
    from campus_tracker.modules.chronology.models import Event

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Holds the three entity collections of the campus.

    Responsibilities:
    - Store locations and people keyed by id (insertion order preserved)
    - Hold the published event history (written by the chronology module)
    - Announce person and location changes on the MessageBus

    Does NOT build chronologies, compute occupancy or check access.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._locations: Dict[str, Location] = {}
        self._people: Dict[str, Person] = {}
        self._events: List["Event"] = []
        self._bus: Optional[MessageBus] = None

    def set_message_bus(self, bus: MessageBus) -> None:
        """
        Set the MessageBus used to announce entity changes.

        Args:
            bus: The MessageBus instance
        """
        self._bus = bus

    def _publish(self, message_type: str, **kwargs) -> None:
        if self._bus:
            self._bus.publish(Message(type=message_type, source="store", **kwargs))

    # Locations

    def add_location(self, location: Location) -> bool:
        """
        Add a location to the campus.

        Args:
            location: The Location to add

        Returns:
            True if added, False if a location with the same id already exists
        """
        if location.id in self._locations:
            logger.debug(f"Location {location.id} already exists, not added")
            return False

        self._locations[location.id] = location
        logger.info(f"Added location: {location.id} ({location.name})")
        self._publish("location.added", location_id=location.id)
        return True

    def get_location(self, location_id: str) -> Optional[Location]:
        """
        Get a location by ID.

        Args:
            location_id: The location ID

        Returns:
            The Location or None if not found
        """
        return self._locations.get(location_id)

    def all_locations(self) -> List[Location]:
        """Get all locations, in the order they were added."""
        return list(self._locations.values())

    # People

    def add_person(self, person: Person) -> bool:
        """
        Register a person.

        Args:
            person: The Person to add

        Returns:
            True if added, False if a person with the same id already exists
        """
        if person.id in self._people:
            logger.debug(f"Person {person.id} already exists, not added")
            return False

        self._people[person.id] = person
        logger.info(f"Added person: {person.id} ({person.name})")
        self._publish("person.added", person_id=person.id)
        return True

    def remove_person(self, person_id: str) -> bool:
        """
        Remove a person.

        Events of the person are kept; they become pseudo-anonymous.

        Args:
            person_id: ID of the person to remove

        Returns:
            True if removed, False if no such person exists
        """
        person = self._people.pop(person_id, None)
        if person is None:
            return False

        logger.info(f"Removed person: {person_id} ({person.name})")
        self._publish("person.removed", person_id=person_id)
        return True

    def replace_people(self, people: Iterable[Person]) -> None:
        """
        Replace the whole People collection (bulk import).

        Args:
            people: The new people

        Raises:
            ValueError: If two people share an id
        """
        replacement: Dict[str, Person] = {}
        for person in people:
            if person.id in replacement:
                raise ValueError(f"Duplicate person id '{person.id}'")
            replacement[person.id] = person

        self._people = replacement
        logger.info(f"Replaced people collection ({len(replacement)} people)")
        self._publish("people.replaced", payload={"count": len(replacement)})

    def get_person(self, person_id: str) -> Optional[Person]:
        """
        Get a person by ID.

        Args:
            person_id: The person ID

        Returns:
            The Person or None if not registered
        """
        return self._people.get(person_id)

    def all_people(self) -> List[Person]:
        """Get all people, in the order they were added."""
        return list(self._people.values())

    # Events

    def publish_events(self, events: List["Event"]) -> None:
        """
        Swap in a new event history.

        The list is adopted as-is; callers build it off to the side first.

        Args:
            events: Events ordered by start time
        """
        self._events = events
        logger.debug(f"Published event history ({len(events)} events)")

    def all_events(self) -> List["Event"]:
        """
        Get the event history ordered by start time.

        Returns:
            The live history list (treat as read-only)
        """
        return self._events
