"""
Access module for campus-tracker.

Flags events that break access policy (unknown people, restricted roles) and
locations that are near or over capacity.
"""

from .models import (
    ROLE_VIOLATIONS,
    AccessViolation,
    CapacityAlert,
    CapacityLevel,
    ViolationKind,
)
from .checker import DEFAULT_NEAR_CAPACITY_MARGIN, AccessChecker

__all__ = [
    "ROLE_VIOLATIONS",
    "AccessViolation",
    "CapacityAlert",
    "CapacityLevel",
    "ViolationKind",
    "DEFAULT_NEAR_CAPACITY_MARGIN",
    "AccessChecker",
]
