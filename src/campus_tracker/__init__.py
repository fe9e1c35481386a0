"""
campus-tracker: movement reconstruction and safety queries for a campus.

This library provides:
- Chronology reconstruction from unordered sensor sightings
- Occupancy headcounts (now, or over a time window)
- Contact tracing between people
- Access-policy and capacity checks
- Cheapest evacuation routes over the walkway graph
"""

from campus_tracker.core.person import Person, Role
from campus_tracker.core.location import Location
from campus_tracker.core.bus import Message, MessageBus
from campus_tracker.core.store import EntityStore
from campus_tracker.config import CampusConfig
from campus_tracker.campus import Campus

__version__ = "0.1.0"

__all__ = [
    "Person",
    "Role",
    "Location",
    "Message",
    "MessageBus",
    "EntityStore",
    "CampusConfig",
    "Campus",
]
