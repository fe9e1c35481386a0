"""The contact engine.

A contact is any other event that shares a location with one of the person's own
events and whose interval intersects it (endpoints inclusive).

Stage 1 selects the person's own events that intersect the query window (S).
Stage 2 scans the whole history; every event E is reported once per event P in S
that it overlaps (E is not P). An event overlapping two of the person's events is
therefore reported twice. Use ``contact_person_ids`` for a de-duplicated summary.

Cost is O(n * |S|), fine at campus scale.
"""

import logging
from datetime import time
from typing import Sequence

from campus_tracker.modules.chronology.models import Event

_LOGGER = logging.getLogger(__name__)


class ContactEngine:
    """Contact tracing over an event history."""

    def __init__(self, events: Sequence[Event]) -> None:
        """Initialize the engine.

        Args:
            events: The event history ordered by start time.
        """
        self.events = events

    def own_events(self, person_id: str, start: time, end: time) -> list[Event]:
        """Events of ``person_id`` intersecting ``[start, end]``.

        The window is assumed well formed (start <= end).
        """
        return [
            event
            for event in self.events
            if event.person_id == person_id and event.overlaps_window(start, end)
        ]

    def contacts(self, person_id: str, start: time, end: time) -> list[Event]:
        """Every event overlapping one of the person's events in the window.

        Args:
            person_id: The person being traced (registered or not).
            start: Window start (inclusive).
            end: Window end (inclusive).

        Returns:
            Contact events in history order, one entry per overlapping pair.
        """
        own = self.own_events(person_id, start, end)
        if not own:
            _LOGGER.debug(f"No events for {person_id} between {start} and {end}")
            return []

        found: list[Event] = []
        for event in self.events:
            for mine in own:
                if event is not mine and mine.overlaps(event):
                    found.append(event)

        _LOGGER.info(
            f"Traced {person_id} between {start} and {end}: "
            f"{len(found)} contacts over {len(own)} own events"
        )
        return found


def contact_person_ids(contacts: Sequence[Event], exclude: str | None = None) -> list[str]:
    """Distinct person ids among contact events, in first-seen order.

    Unresolved ids are kept, not dropped. ``exclude`` (the traced person) is left out:
    only the same event instance is skipped during tracing, so a person's own adjacent
    stay at one location can show up as a contact.
    """
    seen: dict[str, None] = {}
    for event in contacts:
        if event.person_id != exclude:
            seen.setdefault(event.person_id, None)
    return list(seen)
