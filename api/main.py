"""FastAPI application serving the event listing pages."""
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from api.page_cache import PageCache
from api.presenters import (
    EventDetailPage,
    EventListPage,
    FilteredEventsPage,
    present_event,
    present_list,
)
from events.dates import month_title
from events.errors import EventStoreError
from events.repository import EventRepository

VERSION = "1.0.0"

# Seconds a page stays fresh before it is regenerated in the background.
REVALIDATE_FEATURED = 1800
REVALIDATE_EVENT = 30

MIN_FILTER_YEAR = 2021
MAX_FILTER_YEAR = 2030
# Plain ASCII integers, optionally written with a zero fraction ("5.0").
FILTER_NUMBER = re.compile(r"[0-9]+(?:\.0*)?")

INVALID_FILTER_MESSAGE = "Invalid filter. Please adjust your values!"
NO_EVENTS_MESSAGE = "No events found for the chosen filter!"

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Events API",
    description="Featured, upcoming and filtered events read from the event store",
    version=VERSION,
)

# Thread pool for running blocking store reads from async routes
executor = ThreadPoolExecutor(max_workers=4)
page_cache = PageCache(executor)


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str


def get_repository() -> EventRepository:
    """Repository used by the routes; overridden in tests."""
    return EventRepository()


def _filter_number(segment: str) -> Optional[int]:
    if not FILTER_NUMBER.fullmatch(segment):
        return None
    return int(segment.split(".")[0])


def parse_filter(segments: List[str]) -> Optional[tuple]:
    """Return ``(year, month)`` from catch-all path segments, or None if invalid."""
    if len(segments) < 2:
        return None
    year, month = _filter_number(segments[0]), _filter_number(segments[1])
    if year is None or month is None:
        return None
    if not MIN_FILTER_YEAR <= year <= MAX_FILTER_YEAR or not 1 <= month <= 12:
        return None
    return year, month


async def _load_page(key: str, loader, revalidate):
    try:
        return await page_cache.get(key, loader, revalidate)
    except EventStoreError as e:
        logger.error("Failed to build page %s: %s", key, e)
        raise HTTPException(status_code=502, detail=f"Event store unavailable: {e}")


def _health(status: str) -> HealthResponse:
    return HealthResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION,
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return _health("healthy")


@app.get("/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness check endpoint for container orchestration."""
    return _health("alive")


@app.get("/ready", response_model=HealthResponse)
async def readiness_check():
    """Readiness check endpoint for container orchestration."""
    return _health("ready")


@app.get("/events", response_model=EventListPage)
async def all_events(repository: EventRepository = Depends(get_repository)):
    """All events in store order."""
    return await _load_page(
        "/events", lambda: present_list(repository.fetch_all()), None
    )


# Registered before the detail route, so an event stored under the key
# "featured" has no detail page.
@app.get("/events/featured", response_model=EventListPage)
async def featured_events(repository: EventRepository = Depends(get_repository)):
    """Featured events, the home page listing."""
    return await _load_page(
        "/events/featured",
        lambda: present_list(repository.fetch_featured()),
        REVALIDATE_FEATURED,
    )


@app.get("/events/{event_id}", response_model=EventDetailPage)
async def event_detail(event_id: str, repository: EventRepository = Depends(get_repository)):
    """Single event page."""
    event = await _load_page(
        f"/events/{event_id}",
        lambda: repository.fetch_by_id(event_id),
        REVALIDATE_EVENT,
    )
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventDetailPage(event=present_event(event))


@app.get("/events/{filter_path:path}", response_model=FilteredEventsPage)
async def filtered_events(filter_path: str, repository: EventRepository = Depends(get_repository)):
    """
    Events for a year and month, e.g. ``/events/2021/5``.

    Extra path segments after the month are ignored.
    """
    parsed = parse_filter([s for s in filter_path.split("/") if s])
    if parsed is None:
        raise HTTPException(status_code=400, detail=INVALID_FILTER_MESSAGE)
    year, month = parsed

    events = await _load_page(
        f"/events/{year}/{month}",
        lambda: repository.fetch_by_year_month(year, month),
        None,
    )
    if not events:
        raise HTTPException(status_code=404, detail=NO_EVENTS_MESSAGE)

    return FilteredEventsPage(
        year=year,
        month=month,
        title=f"Events in {month_title(year, month)}",
        events=[present_event(e) for e in events],
        total=len(events),
    )


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Events API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "featured": "/events/featured",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
