"""Command line reports for a campus-tracker session.

Usage: python -m campus_tracker [options] <command> ...

Each invocation loads the configured files, answers one question and exits.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import time
from typing import List, Optional, Sequence

from campus_tracker.campus import Campus
from campus_tracker.config import CampusConfig
from campus_tracker.core.person import Person, Role
from campus_tracker.loader import IngestionError, parse_time
from campus_tracker.modules.access import CapacityLevel, ViolationKind
from campus_tracker.modules.chronology import END_OF_DAY, START_OF_DAY, Event
from campus_tracker.modules.contacts import contact_person_ids
from campus_tracker.modules.routing import Route

logger = logging.getLogger(__name__)


def _time_arg(text: str) -> time:
    try:
        return parse_time(text)
    except IngestionError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="campus-tracker", description=__doc__.splitlines()[0])
    parser.add_argument("--map", dest="map_path", help="Map file (locations + walkways)")
    parser.add_argument("--movements", dest="movements_path", help="Movements file")
    parser.add_argument("--people", dest="people_path", help="People file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    people = commands.add_parser("people", help="List registered people")
    people.add_argument("--import-from", metavar="PATH", help="Replace people from this file first")
    people.add_argument(
        "--add", nargs=3, metavar=("ID", "NAME", "ROLE"), help="Register a person"
    )
    people.add_argument("--remove", metavar="ID", help="Unregister a person")
    people.add_argument("--export-to", metavar="PATH", help="Write people to this file afterwards")

    where = commands.add_parser("where", help="Current location of a person (or everyone)")
    where.add_argument("person_id", nargs="?")

    for name, help_text in (
        ("history", "Movements of a person"),
        ("first", "First location of a person in a window"),
        ("contacts", "People a person crossed paths with"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("person_id")
        sub.add_argument("--start", type=_time_arg, default=None)
        sub.add_argument("--end", type=_time_arg, default=None)
        if name == "contacts":
            sub.add_argument("--hours", type=int, default=None, help="Look back from last sighting")

    occupancy = commands.add_parser("occupancy", help="Headcount per location")
    occupancy.add_argument("--start", type=_time_arg, default=None)
    occupancy.add_argument("--end", type=_time_arg, default=None)

    commands.add_parser("alerts", help="Access violations and capacity alerts")

    evacuate = commands.add_parser("evacuate", help="Emergency routes (one person or everyone)")
    evacuate.add_argument("person_id", nargs="?")

    commands.add_parser("map", help="Walkways of every location")

    return parser


def _window(parser: argparse.ArgumentParser, args: argparse.Namespace) -> tuple[time, time]:
    start = args.start or START_OF_DAY
    end = args.end or END_OF_DAY
    if end < start:
        parser.error(f"window end {end} is before start {start}")
    return start, end


def _person_arg(parser: argparse.ArgumentParser, person_id: str, name: str, role: str) -> Person:
    if not person_id.strip() or not name.strip():
        parser.error("--add needs a non-empty ID and NAME")
    try:
        parsed = Role.parse(role)
    except ValueError as exc:
        parser.error(str(exc))
    if parsed is None:
        parser.error("--add needs a ROLE")
    return Person(id=person_id.strip(), name=name.strip(), role=parsed)


def _person_label(campus: Campus, person_id: str) -> str:
    person = campus.get_person(person_id)
    return str(person) if person else f"Unknown ({person_id})"


def _print_events(events: Sequence[Event]) -> None:
    for event in events:
        print(f"| Time: {event.start_time.isoformat()} | Location: {event.location} |")


def _print_route(campus: Campus, person_id: str, route: Route) -> None:
    if not route.reachable:
        print(f"No emergency route for {_person_label(campus, person_id)}")
        return
    print(
        f"Emergency route for {_person_label(campus, person_id)}: "
        f"{' -> '.join(route.path)}. Distance: {route.cost:g} m."
    )


def run(campus: Campus, parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    command = args.command

    if command == "people":
        if args.import_from:
            try:
                count = campus.import_people(args.import_from)
            except IngestionError as exc:
                print(f"Cannot import people: {exc}", file=sys.stderr)
                return 1
            logger.info(f"Imported {count} people from {args.import_from}")
        if args.add:
            person = _person_arg(parser, *args.add)
            if not campus.add_person(person):
                print(f"Person {person.id} is already registered", file=sys.stderr)
                return 1
        if args.remove and not campus.remove_person(args.remove):
            print(f"No person registered with id {args.remove}", file=sys.stderr)
            return 1
        for person in campus.people():
            print(f"| ID: {person.id} | Name: {person.name} | Role: {person.role.label} |")
        if args.export_to:
            try:
                campus.export_people(args.export_to)
            except OSError as exc:
                print(f"Cannot export people: {exc}", file=sys.stderr)
                return 1

    elif command == "where":
        if args.person_id:
            location = campus.current_location(args.person_id)
            if location is None:
                print(f"No movements recorded for {args.person_id}")
                return 1
            print(f"Current location: {location}")
        else:
            for person_id, location in campus.current_locations().items():
                print(f"{_person_label(campus, person_id)}: {location}")

    elif command == "history":
        start, end = _window(parser, args)
        events = campus.events_in_window(args.person_id, start, end)
        if not events:
            print(f"No movements recorded for {args.person_id}")
            return 1
        _print_events(events)

    elif command == "first":
        start, end = _window(parser, args)
        location = campus.first_location_in_window(args.person_id, start, end)
        if location is None:
            print(f"No movements recorded for {args.person_id}")
            return 1
        print(f"First location: {location}")

    elif command == "contacts":
        if args.hours is not None and (args.start is not None or args.end is not None):
            parser.error("--hours cannot be combined with --start/--end")
        if args.hours is not None:
            try:
                contacts = campus.contacts_since_last_movement(args.person_id, args.hours)
            except ValueError as exc:
                parser.error(str(exc))
            if contacts is None:
                print(f"No movements recorded for {args.person_id}")
                return 1
        else:
            start, end = _window(parser, args)
            contacts = campus.contacts(args.person_id, start, end)

        if not contacts:
            print(f"{_person_label(campus, args.person_id)} had no contacts in this period.")
            return 0
        for event in contacts:
            print(
                f"| Time: {event.start_time.isoformat()} | Location: {event.location} "
                f"| Person: {_person_label(campus, event.person_id)} |"
            )
        met = ", ".join(
            _person_label(campus, person_id)
            for person_id in contact_person_ids(contacts, exclude=args.person_id)
        )
        print(f"{_person_label(campus, args.person_id)} had contact with: {met}")

    elif command == "occupancy":
        if args.start is None and args.end is None:
            counts = campus.occupancy()
        else:
            counts = campus.occupancy(*_window(parser, args))
        for location in campus.locations():
            print(f"{location}: {counts[location.id]}/{location.maximum_capacity}")

    elif command == "alerts":
        for violation in campus.violations():
            event = violation.event
            if violation.kind is ViolationKind.UNKNOWN_PERSON:
                print(
                    f"[Unknown person] | ID: {event.person_id} | Time: {event.start_time} "
                    f"| Location: {event.location} |"
                )
            else:
                print(
                    f"[No permission] | {event.person} | Role: {event.person.role.label} "
                    f"| Time: {event.start_time} | Location: {event.location} "
                    f"| Restricted to: {event.location.restricted_to.label} |"
                )
        for alert in campus.capacity_alerts():
            tag = "Over capacity" if alert.level is CapacityLevel.OVER else "Near capacity"
            print(
                f"[{tag}] | Location: {alert.location} "
                f"| Maximum: {alert.location.maximum_capacity} | Current: {alert.occupancy} |"
            )

    elif command == "evacuate":
        if args.person_id:
            route = campus.emergency_route(args.person_id)
            _print_route(campus, args.person_id, route)
            return 0 if route.reachable else 1
        for person_id, route in campus.emergency_routes().items():
            _print_route(campus, person_id, route)

    elif command == "map":
        for location_id, neighbours in campus.topology().items():
            print(f"Location: {campus.get_location(location_id)} Walkways: {', '.join(neighbours)}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = CampusConfig().update_from_env()
    for key in ("map_path", "movements_path", "people_path"):
        value = getattr(args, key)
        if value:
            setattr(config, key, value)

    try:
        campus = Campus.from_files(config)
    except IngestionError as exc:
        print(f"Cannot load campus data: {exc}", file=sys.stderr)
        return 1

    return run(campus, parser, args)


if __name__ == "__main__":
    sys.exit(main())
