"""EmergencyRoutingModule - Shortest way out for anyone on campus."""

import logging
from typing import Dict, List, Optional

from campus_tracker.modules.base import CampusModule
from campus_tracker.modules.chronology.module import ChronologyModule
from campus_tracker.core.bus import Message, MessageBus
from campus_tracker.core.store import EntityStore

from .graph import LocationGraph, Route

logger = logging.getLogger(__name__)

EMERGENCY_SPOT_ID = "EMERGENCY_SPOT"


class EmergencyRoutingModule(CampusModule):
    """
    Emergency routing module.

    Keeps a LocationGraph whose vertices are every store location plus the
    emergency spot, and routes people from where they were last seen.

    Access restrictions are ignored: an evacuation route may cross any location.

    Messages Consumed:
    - location.added: add the new location as a vertex
    """

    def __init__(
        self,
        chronology: ChronologyModule,
        emergency_spot_id: str = EMERGENCY_SPOT_ID,
    ) -> None:
        self._bus: Optional[MessageBus] = None
        self._store: Optional[EntityStore] = None
        self._chronology = chronology
        self.emergency_spot_id = emergency_spot_id
        self.graph = LocationGraph()
        self.graph.add_vertex(emergency_spot_id)

    @property
    def id(self) -> str:
        return "routing"

    def attach(self, bus: MessageBus, store: EntityStore) -> None:
        """Attach to kernel components."""
        self._bus = bus
        self._store = store

        for location in store.all_locations():
            self.graph.add_vertex(location.id)

        bus.subscribe(self._on_location_added, message_type="location.added")

        logger.info(
            f"EmergencyRoutingModule attached ({len(self.graph.vertices())} vertices, "
            f"emergency spot {self.emergency_spot_id})"
        )

    def _on_location_added(self, message: Message) -> None:
        if message.location_id:
            self.graph.add_vertex(message.location_id)

    def connect(self, from_id: str, to_id: str, distance: float) -> bool:
        """
        Declare a walkway between two locations.

        Args:
            from_id: Location ID (or the emergency spot ID)
            to_id: Location ID (or the emergency spot ID)
            distance: Walking distance in meters (>= 0)

        Returns:
            True if connected, False if either end is unknown (skipped)

        Raises:
            ValueError: If the distance is negative
        """
        if not (self.graph.has_vertex(from_id) and self.graph.has_vertex(to_id)):
            logger.warning(f"Skipping walkway {from_id} - {to_id}: unknown location")
            return False

        self.graph.add_edge(from_id, to_id, distance)
        return True

    def route_for(self, person_id: str) -> Route:
        """
        Cheapest path from a person's current location to the emergency spot.

        Args:
            person_id: Person ID (registered or not)

        Returns:
            The Route, or Route.unreachable() if the person has no events or no path
        """
        location = self._chronology.current_location(person_id)
        if location is None:
            logger.debug(f"No current location for {person_id}, no emergency route")
            return Route.unreachable()

        return self.graph.cheapest_path(location.id, self.emergency_spot_id)

    def routes_for_everyone(self) -> Dict[str, Route]:
        """
        Emergency routes for every registered person.

        Returns:
            person_id -> Route, in People collection order
        """
        assert self._store is not None
        return {person.id: self.route_for(person.id) for person in self._store.all_people()}

    def topology(self) -> Dict[str, List[str]]:
        """
        Neighbour ids of every store location.

        Returns:
            location_id -> adjacent vertex ids, in location order
        """
        assert self._store is not None
        return {
            location.id: self.graph.neighbours(location.id)
            for location in self._store.all_locations()
        }
