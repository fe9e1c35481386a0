"""
Occupancy module for campus-tracker.

Computes how many people are (or were) at each location from the event history.

Features:
- Snapshot headcount (open events only)
- Windowed headcount with inclusive interval overlap
- Fresh result per query (no counters stored on locations)
"""

from .engine import OccupancyEngine

__all__ = ["OccupancyEngine"]
