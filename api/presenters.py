"""View models returned by the pages API."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel

from events.dates import human_readable_date, parse_event_date
from events.schemas import Event


class EventView(BaseModel):
    """Event data plus the display fields the event pages need."""
    id: str
    title: str
    date: str
    description: str
    image: str
    is_featured: bool
    location: str
    image_url: str  # image path under the static asset root
    display_date: str  # e.g. "May 12, 2021"
    formatted_address: str  # first ", " split onto a new line


class EventListPage(BaseModel):
    events: List[EventView]
    total: int


class EventDetailPage(BaseModel):
    event: EventView


class FilteredEventsPage(BaseModel):
    year: int
    month: int
    title: str  # e.g. "Events in May 2021"
    events: List[EventView]
    total: int


def image_url(image: str) -> str:
    """Resolve a stored image path against the static asset root."""
    return "/" + image.lstrip("/")


def present_event(event: Event) -> EventView:
    parsed = parse_event_date(event.date)
    return EventView(
        id=event.id,
        title=event.title,
        date=event.date,
        description=event.description,
        image=event.image,
        is_featured=event.is_featured,
        location=event.location,
        image_url=image_url(event.image),
        display_date=human_readable_date(parsed) if parsed else event.date,
        formatted_address=event.location.replace(", ", "\n", 1),
    )


def present_list(events: List[Event]) -> EventListPage:
    return EventListPage(events=[present_event(e) for e in events], total=len(events))
