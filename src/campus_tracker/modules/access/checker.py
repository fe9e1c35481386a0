"""The access checker.

Classifies historical events against access policy and locations against capacity.

Role rule (restricted role -> violating visitors):
- TEACHER: WORKER, STUDENT
- WORKER: TEACHER, STUDENT
- STUDENT, OTHER: nobody
"""

import logging
from typing import Iterable, Mapping

from campus_tracker.core.location import Location
from campus_tracker.modules.chronology.models import Event

from .models import (
    ROLE_VIOLATIONS,
    AccessViolation,
    CapacityAlert,
    CapacityLevel,
    ViolationKind,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_NEAR_CAPACITY_MARGIN = 2


class AccessChecker:
    """Stateless policy checks over events and occupancy counts."""

    def __init__(self, near_capacity_margin: int = DEFAULT_NEAR_CAPACITY_MARGIN) -> None:
        """Initialize the checker.

        Args:
            near_capacity_margin: A location is "near" capacity once its occupancy is
                within this many people of the maximum.
        """
        self.near_capacity_margin = near_capacity_margin

    def classify(self, event: Event) -> ViolationKind | None:
        """Classify one event.

        Returns:
            The violation kind, or None if the event is compliant.
        """
        if event.person is None:
            return ViolationKind.UNKNOWN_PERSON

        restricted_to = event.location.restricted_to
        if restricted_to is None:
            return None

        if event.person.role in ROLE_VIOLATIONS.get(restricted_to, frozenset()):
            return ViolationKind.ROLE

        return None

    def violations(self, events: Iterable[Event]) -> list[AccessViolation]:
        """Scan the history once.

        Args:
            events: The event history.

        Returns:
            Violations in history order.
        """
        found: list[AccessViolation] = []
        for event in events:
            kind = self.classify(event)
            if kind is not None:
                found.append(AccessViolation(event=event, kind=kind))

        _LOGGER.info(f"Access scan found {len(found)} violations")
        return found

    def capacity_alerts(
        self, locations: Iterable[Location], occupancy: Mapping[str, int]
    ) -> list[CapacityAlert]:
        """Compare headcounts against maximum capacity.

        NEAR and OVER are evaluated independently per location.

        Args:
            locations: Locations to evaluate, in report order.
            occupancy: location_id -> headcount (missing ids count as 0).

        Returns:
            Alerts in location order.
        """
        alerts: list[CapacityAlert] = []
        for location in locations:
            count = occupancy.get(location.id, 0)
            maximum = location.maximum_capacity

            if maximum - self.near_capacity_margin <= count <= maximum:
                alerts.append(CapacityAlert(location, count, CapacityLevel.NEAR))
            if count > maximum:
                alerts.append(CapacityAlert(location, count, CapacityLevel.OVER))
                _LOGGER.warning(f"{location} over capacity: {count}/{maximum}")

        return alerts
