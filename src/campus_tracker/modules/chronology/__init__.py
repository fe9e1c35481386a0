"""
Chronology module for campus-tracker.

Reconstructs WHERE each person has been from unordered sensor sightings.

Features:
- Stable sort of observations by time (same-time sightings keep input order)
- Per-person chaining: an event ends exactly when the person's next one starts
- Open (most recent) events last until end of day
- Pseudo-anonymous tracking: unknown person ids are kept and linked later

Messages Consumed:
- person.added / person.removed / people.replaced
"""

from .models import END_OF_DAY, START_OF_DAY, Event, Observation
from .builder import Chronology, ChronologyBuilder
from .module import ChronologyModule

__all__ = [
    "END_OF_DAY",
    "START_OF_DAY",
    "Event",
    "Observation",
    "Chronology",
    "ChronologyBuilder",
    "ChronologyModule",
]
