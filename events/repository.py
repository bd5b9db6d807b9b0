"""Read queries over the events collection of the remote store."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from pydantic import ValidationError

from events.dates import parse_event_date
from events.errors import ParseError
from events.schemas import Event
from events.store_client import StoreClient

EVENTS_COLLECTION = "events"

logger = logging.getLogger(__name__)


class CollectionSource(Protocol):
    """Anything that can return the parsed JSON of a store collection."""

    def get_collection(self, name: str) -> Any:
        ...


def normalize_events(document: Any) -> List[Event]:
    """Turn a ``{key: record}`` document into a list of events.

    The key becomes the event ``id`` and replaces any ``id`` stored inside the
    record. Order follows the document. ``None`` means an empty collection.

    Raises:
        ParseError: ``document`` is not an object of objects, or a record is
            missing a field or has a field of the wrong type.
    """
    if document is None:
        return []
    if not isinstance(document, dict):
        raise ParseError(
            f"Expected an object of events, got {type(document).__name__}"
        )

    events: List[Event] = []
    for key, record in document.items():
        if not isinstance(record, dict):
            raise ParseError(
                f"Event {key!r} is a {type(record).__name__}, not an object",
                key=key,
            )
        try:
            events.append(Event.model_validate({**record, "id": key}))
        except ValidationError as exc:
            raise ParseError(f"Event {key!r} is invalid: {exc}", key=key) from exc
    return events


class EventRepository:
    """The four event queries, each backed by one fetch of the collection."""

    def __init__(self, client: Optional[CollectionSource] = None):
        self.client = client if client is not None else StoreClient()

    def fetch_all(self) -> List[Event]:
        """Return every event in store order."""
        events = normalize_events(self.client.get_collection(EVENTS_COLLECTION))
        logger.info("Fetched %d event(s)", len(events))
        return events

    def fetch_featured(self) -> List[Event]:
        """Return the featured events in store order."""
        return [event for event in self.fetch_all() if event.is_featured]

    def fetch_by_id(self, event_id: str) -> Optional[Event]:
        """Return the event stored under ``event_id``, or None."""
        return next(
            (event for event in self.fetch_all() if event.id == event_id), None
        )

    def fetch_by_year_month(self, year: int, month: int) -> List[Event]:
        """
        Return the events dated in the given calendar month.

        Args:
            year: Calendar year, e.g. 2022
            month: Calendar month, 1 for January

        Returns:
            Matching events in store order. Events whose date cannot be
            parsed never match and are logged.
        """
        matches: List[Event] = []
        for event in self.fetch_all():
            event_date = parse_event_date(event.date)
            if event_date is None:
                logger.warning("Skipping event %s with unparseable date %r", event.id, event.date)
                continue
            if event_date.year == year and event_date.month == month:
                matches.append(event)
        return matches


# Convenience functions
def get_all_events() -> List[Event]:
    """Fetch all events from the configured store."""
    return EventRepository().fetch_all()


def get_featured_events() -> List[Event]:
    """Fetch featured events from the configured store."""
    return EventRepository().fetch_featured()


def get_event_by_id(event_id: str) -> Optional[Event]:
    """Fetch one event from the configured store."""
    return EventRepository().fetch_by_id(event_id)


def get_filtered_events(year: int, month: int) -> List[Event]:
    """Fetch events for a year/month from the configured store."""
    return EventRepository().fetch_by_year_month(year, month)
