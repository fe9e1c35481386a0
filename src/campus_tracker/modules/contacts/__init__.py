"""
Contacts module for campus-tracker.

Finds who crossed paths with a person: same location, intersecting time.
"""

from .engine import ContactEngine, contact_person_ids

__all__ = ["ContactEngine", "contact_person_ids"]
