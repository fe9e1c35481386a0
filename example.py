#!/usr/bin/env python3
"""
Quick example demonstrating campus-tracker basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

from datetime import time

from campus_tracker import Campus, Location, Person, Role
from campus_tracker.modules.chronology import Observation
from campus_tracker.modules.routing import EMERGENCY_SPOT_ID

print("=" * 60)
print("campus-tracker Example")
print("=" * 60)

# 1. Campus session
print("\n1. Creating campus...")
campus = Campus()
print("   ✓ Campus created (store, bus, chronology and routing attached)")

# 2. Map
print("\n2. Building map...")
campus.add_location(Location("SA", "Hall", maximum_capacity=100))
campus.add_location(Location("A1", "Room A1", maximum_capacity=2, restricted_to=Role.STUDENT))
campus.add_location(Location("LAB", "Laboratory", maximum_capacity=10, restricted_to=Role.TEACHER))
campus.connect(EMERGENCY_SPOT_ID, "SA", 10)
campus.connect("SA", "A1", 20)
campus.connect("A1", "LAB", 12)
for location_id, neighbours in campus.topology().items():
    print(f"   ✓ {campus.get_location(location_id)} → {', '.join(neighbours)}")

# 3. People
print("\n3. Registering people...")
campus.add_person(Person("1", "Carlos Sousa", Role.STUDENT))
campus.add_person(Person("4", "Ana Costa", Role.TEACHER))
print(f"   ✓ {len(campus.people())} people")

# 4. Movements, in any order
print("\n4. Loading sightings...")
campus.load_observations(
    [
        Observation("1", "A1", time(10, 0)),
        Observation("4", "A1", time(9, 45)),
        Observation("1", "LAB", time(9, 15)),
        Observation("4", "LAB", time(12, 0)),
        Observation("55", "A1", time(10, 30)),
    ]
)
for event in campus.events():
    print(f"   - {event}")

# 5. Queries
print("\n5. Where is everyone?")
for person_id, location in campus.current_locations().items():
    print(f"   {campus.get_person(person_id)}: {location}")

print("\n6. Who did Carlos meet?")
print(f"   {campus.contacted_ids('1')}")

print("\n7. Access violations")
for violation in campus.violations():
    print(f"   {violation.kind.value}: {violation.event}")

print("\n8. Occupancy and capacity")
print(f"   {campus.occupancy()}")
for alert in campus.capacity_alerts():
    print(f"   {alert.level.value}: {alert.location} ({alert.occupancy})")

print("\n9. Emergency routes")
for person_id, route in campus.emergency_routes().items():
    print(f"   {person_id}: {' → '.join(route.path)} ({route.cost:g} m)")

print("\n" + "=" * 60)
print("Example complete!")
print("=" * 60)
