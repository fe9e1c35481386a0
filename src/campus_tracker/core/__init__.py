"""
Core components of the campus-tracker kernel.

This package contains:
- bus: Message Bus implementation
- location: Location dataclass
- person: Person dataclass and Role enum
- store: EntityStore for locations, people and events
"""

from campus_tracker.core.person import Person, Role
from campus_tracker.core.location import Location
from campus_tracker.core.bus import Message, MessageBus
from campus_tracker.core.store import EntityStore

__all__ = [
    "Person",
    "Role",
    "Location",
    "Message",
    "MessageBus",
    "EntityStore",
]
