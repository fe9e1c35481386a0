"""
Modules package for campus-tracker.

Modules are plug-ins that derive behavior from the entity store.
"""

from campus_tracker.modules.base import CampusModule

__all__ = ["CampusModule"]
