"""
Campus facade: the query surface of a campus-tracker session.

Wires the kernel (EntityStore + MessageBus) with the chronology and routing modules
and the pure engines, and answers the operational questions: where is someone, who
did they meet, which entries broke policy, how full is each location, and how does
everyone get out.
"""

from datetime import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging

from campus_tracker.config import CampusConfig
from campus_tracker.core.bus import MessageBus
from campus_tracker.core.location import Location
from campus_tracker.core.person import Person
from campus_tracker.core.store import EntityStore
from campus_tracker import loader
from campus_tracker.modules.access import AccessChecker, AccessViolation, CapacityAlert
from campus_tracker.modules.chronology import (
    END_OF_DAY,
    START_OF_DAY,
    ChronologyModule,
    Event,
    Observation,
)
from campus_tracker.modules.contacts import ContactEngine, contact_person_ids
from campus_tracker.modules.occupancy import OccupancyEngine
from campus_tracker.modules.routing import EmergencyRoutingModule, Route

logger = logging.getLogger(__name__)


class Campus:
    """
    One in-memory campus session.

    All time windows are inclusive and assumed well formed (start <= end); callers
    reject inverted windows before querying.
    """

    def __init__(self, config: Optional[CampusConfig] = None) -> None:
        """
        Initialize an empty campus.

        Args:
            config: Session configuration (defaults used when None)
        """
        self.config = config or CampusConfig()
        self.bus = MessageBus()
        self.store = EntityStore()
        self.store.set_message_bus(self.bus)

        self.chronology = ChronologyModule()
        self.routing = EmergencyRoutingModule(
            self.chronology, emergency_spot_id=self.config.emergency_spot_id
        )
        self.access = AccessChecker(near_capacity_margin=self.config.near_capacity_margin)

        for module in (self.chronology, self.routing):
            module.attach(self.bus, self.store)

    @classmethod
    def from_files(cls, config: CampusConfig) -> "Campus":
        """
        Load a campus from the files named in the configuration.

        The map and movements files are required; the people file is optional.

        Raises:
            IngestionError: If any file is missing or invalid
        """
        campus = cls(config)

        locations, relationships = loader.load_map(config.map_path)
        for location in locations:
            campus.add_location(location)
        for from_id, to_id, distance in relationships:
            campus.connect(from_id, to_id, distance)

        if Path(config.people_path).exists():
            campus.store.replace_people(loader.load_people(config.people_path))
        else:
            logger.info(f"No people file at {config.people_path}, starting without people")

        campus.load_observations(loader.load_observations(config.movements_path))
        return campus

    # Entities

    def add_location(self, location: Location) -> bool:
        """Add a location (False if the id already exists)."""
        return self.store.add_location(location)

    def get_location(self, location_id: str) -> Optional[Location]:
        return self.store.get_location(location_id)

    def locations(self) -> List[Location]:
        return self.store.all_locations()

    def connect(self, from_id: str, to_id: str, distance: float) -> bool:
        """Declare a walkway; unknown location ids are skipped (False)."""
        return self.routing.connect(from_id, to_id, distance)

    def add_person(self, person: Person) -> bool:
        """Register a person and link their events (False if the id already exists)."""
        return self.store.add_person(person)

    def remove_person(self, person_id: str) -> bool:
        """Unregister a person; their events become pseudo-anonymous."""
        return self.store.remove_person(person_id)

    def get_person(self, person_id: str) -> Optional[Person]:
        return self.store.get_person(person_id)

    def people(self) -> List[Person]:
        return self.store.all_people()

    def import_people(self, path: Optional[str] = None) -> int:
        """
        Replace the People collection from file and relink every event.

        Returns:
            Number of people imported

        Raises:
            IngestionError: If the file is missing or invalid (nothing changes)
        """
        people = loader.load_people(path or self.config.people_path)
        self.store.replace_people(people)
        return len(people)

    def export_people(self, path: Optional[str] = None) -> None:
        """Write the People collection to file."""
        loader.export_people(self.store.all_people(), path or self.config.people_path)

    # Movements

    def load_observations(self, observations: Iterable[Observation]) -> List[Event]:
        """
        Rebuild the chronology from unordered sightings.

        Raises:
            IngestionError: If a sighting has an empty id or unknown location
        """
        try:
            return self.chronology.load(observations)
        except ValueError as exc:
            raise loader.IngestionError(str(exc)) from exc

    def append_observation(self, person_id: str, location_id: str, timestamp: time) -> Event:
        """
        Chronicle one new sighting.

        Raises:
            ValueError: If the sighting is invalid or older than the newest event
        """
        return self.chronology.append(Observation(person_id, location_id, timestamp))

    def events(self) -> List[Event]:
        """The full history ordered by start time."""
        return self.store.all_events()

    # Where

    def current_location(self, person_id: str) -> Optional[Location]:
        return self.chronology.current_location(person_id)

    def current_locations(self) -> Dict[str, Location]:
        return self.chronology.current_locations()

    def first_location_in_window(
        self, person_id: str, start: time, end: time
    ) -> Optional[Location]:
        return self.chronology.first_location_in_window(person_id, start, end)

    def events_of_person(self, person_id: str) -> List[Event]:
        return self.chronology.events_of_person(person_id)

    def events_in_window(self, person_id: str, start: time, end: time) -> List[Event]:
        return self.chronology.events_in_window(person_id, start, end)

    # Who met whom

    def contacts(
        self, person_id: str, start: time = START_OF_DAY, end: time = END_OF_DAY
    ) -> List[Event]:
        """
        Contact events of a person in ``[start, end]`` (whole day by default).

        One entry per overlapping pair; see contacted_ids for a unique list.
        """
        return ContactEngine(self.events()).contacts(person_id, start, end)

    def contacted_ids(
        self, person_id: str, start: time = START_OF_DAY, end: time = END_OF_DAY
    ) -> List[str]:
        """Distinct other person ids the person met, in first-seen order."""
        return contact_person_ids(self.contacts(person_id, start, end), exclude=person_id)

    def contacts_since_last_movement(self, person_id: str, hours: int) -> Optional[List[Event]]:
        """
        Contacts in the ``hours`` before the person's most recent sighting.

        Returns:
            Contact events, or None if the person has no events

        Raises:
            ValueError: If hours is negative or the window would start before midnight
        """
        last = self.chronology.current_event(person_id)
        if last is None:
            return None

        anchor = last.start_time
        if hours < 0 or anchor.hour - hours < 0:
            raise ValueError(
                f"Cannot look back {hours} hours from {anchor.isoformat()} within one day"
            )

        start = anchor.replace(hour=anchor.hour - hours)
        return self.contacts(person_id, start, anchor)

    # Policy

    def violations(self) -> List[AccessViolation]:
        """Events breaking access policy, in history order."""
        return self.access.violations(self.events())

    def occupancy(self, start: Optional[time] = None, end: Optional[time] = None) -> Dict[str, int]:
        """
        Headcount per location.

        Args:
            start: Window start; with end, switches to windowed mode
            end: Window end

        Returns:
            location_id -> count (snapshot of open events when no window is given)
        """
        engine = OccupancyEngine(self.store.all_locations())
        if start is None and end is None:
            return engine.snapshot(self.events())
        return engine.in_window(self.events(), start or START_OF_DAY, end or END_OF_DAY)

    def capacity_alerts(self) -> List[CapacityAlert]:
        """Near/over capacity signals based on the current snapshot."""
        return self.access.capacity_alerts(self.store.all_locations(), self.occupancy())

    # Emergencies

    def emergency_route(self, person_id: str) -> Route:
        """Cheapest route from the person's current location to the emergency spot."""
        return self.routing.route_for(person_id)

    def emergency_routes(self) -> Dict[str, Route]:
        """Emergency routes for every registered person."""
        return self.routing.routes_for_everyone()

    def topology(self) -> Dict[str, List[str]]:
        """Neighbour ids of every location."""
        return self.routing.topology()
