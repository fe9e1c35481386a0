"""
Routing module for campus-tracker.

Weighted undirected graph of walkways between locations, with cheapest-path
evacuation routes to a single emergency spot.
"""

from .graph import LocationGraph, Route
from .module import EMERGENCY_SPOT_ID, EmergencyRoutingModule

__all__ = [
    "LocationGraph",
    "Route",
    "EMERGENCY_SPOT_ID",
    "EmergencyRoutingModule",
]
