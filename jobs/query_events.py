"""Print events from the store, optionally filtered."""
from __future__ import annotations

import argparse
import sys

from events.errors import EventStoreError
from events.repository import EventRepository
from events.schemas import Event


def format_event(event: Event) -> str:
    star = "*" if event.is_featured else " "
    return f"{star} {event.id:<12} {event.date:<10}  {event.title}  ({event.location})"


def run(args: argparse.Namespace, repository: EventRepository | None = None) -> list[Event]:
    """Return the events selected by the parsed command line ``args``."""
    repository = repository or EventRepository()
    if args.id:
        event = repository.fetch_by_id(args.id)
        return [event] if event else []
    if args.year is not None:
        return repository.fetch_by_year_month(args.year, args.month)
    if args.featured:
        return repository.fetch_featured()
    return repository.fetch_all()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Query the event store")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--featured", action="store_true", help="Only featured events")
    group.add_argument("--id", help="Show a single event by id")
    group.add_argument("--year", type=int, help="Filter by year (requires --month)")
    parser.add_argument("--month", type=int, help="Filter by month, 1-12")
    args = parser.parse_args(argv)
    if (args.year is None) != (args.month is None):
        parser.error("--year and --month must be given together")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        events = run(args)
    except EventStoreError as exc:
        print("❌ Query failed:", exc)
        return 1

    if not events:
        print("No events found")
        return 0
    for event in events:
        print(format_event(event))
    return 0


if __name__ == "__main__":
    sys.exit(main())
