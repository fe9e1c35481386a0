"""The occupancy engine.

Counts "present" events per location. Counts are computed into a fresh mapping on
every call; Location objects are never mutated.

Two modes:
- snapshot: an event counts while it is open (the person's latest sighting)
- window: an event counts if it intersects [start, end], endpoints inclusive
"""

import logging
from datetime import time
from typing import Callable, Iterable

from campus_tracker.core.location import Location
from campus_tracker.modules.chronology.models import Event

_LOGGER = logging.getLogger(__name__)


class OccupancyEngine:
    """Per-location headcounts over an event history."""

    def __init__(self, locations: Iterable[Location]) -> None:
        """Initialize the engine with the locations to report on.

        Args:
            locations: Every location gets an entry, even when empty.
        """
        self.location_ids: list[str] = [location.id for location in locations]

    def snapshot(self, events: Iterable[Event]) -> dict[str, int]:
        """Who is where right now.

        Args:
            events: The event history.

        Returns:
            location_id -> number of open events there.
        """
        return self._count(events, lambda event: event.is_open)

    def in_window(self, events: Iterable[Event], start: time, end: time) -> dict[str, int]:
        """Who was where at some point during ``[start, end]``.

        The window is assumed well formed (start <= end).

        Args:
            events: The event history.
            start: Window start (inclusive).
            end: Window end (inclusive).

        Returns:
            location_id -> number of events intersecting the window there.
        """
        return self._count(events, lambda event: event.overlaps_window(start, end))

    def _count(self, events: Iterable[Event], present: Callable[[Event], bool]) -> dict[str, int]:
        counts: dict[str, int] = {location_id: 0 for location_id in self.location_ids}

        for event in events:
            if not present(event):
                continue
            location_id = event.location.id
            if location_id not in counts:
                _LOGGER.warning(f"Event {event} at location outside the engine, skipped")
                continue
            counts[location_id] += 1

        _LOGGER.debug(f"Occupancy counts: {counts}")
        return counts
