"""Tests for the event pages API."""

import pytest
from fastapi.testclient import TestClient
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from api.main import app, get_repository, page_cache, parse_filter
from events.errors import FetchError, ParseError
from events.repository import EventRepository

client = TestClient(app)


STORE = {
    "e1": {
        "title": "Programming for everyone",
        "date": "2021-05-12",
        "description": "Everyone can learn to code!",
        "image": "images/coding-event.jpg",
        "isFeatured": False,
        "location": "Somestreet 25, 12345 San Somewhereo",
    },
    "e2": {
        "title": "Networking for introverts",
        "date": "2021-05-30",
        "description": "Networking made easy.",
        "image": "images/introvert-event.jpg",
        "isFeatured": True,
        "location": "New Wall Street 5, 98765 New Work",
    },
}


class FakeStore:
    def __init__(self, document=None, error=None):
        self.document = document
        self.error = error
        self.calls = 0

    def get_collection(self, name):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.document


@pytest.fixture(autouse=True)
def _reset_app():
    page_cache.clear()
    yield
    app.dependency_overrides.clear()
    page_cache.clear()


def use_store(store: FakeStore) -> FakeStore:
    app.dependency_overrides[get_repository] = lambda: EventRepository(store)
    return store


def test_health_endpoint():
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert "version" in data


def test_root_endpoint():
    """Test the root endpoint returns API info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Events API"
    assert data["featured"] == "/events/featured"


def test_all_events():
    use_store(FakeStore(STORE))
    response = client.get("/events")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [e["id"] for e in data["events"]] == ["e1", "e2"]
    first = data["events"][0]
    assert first["image_url"] == "/images/coding-event.jpg"
    assert first["display_date"] == "May 12, 2021"
    assert first["formatted_address"] == "Somestreet 25\n12345 San Somewhereo"


def test_all_events_empty_store():
    use_store(FakeStore(None))
    response = client.get("/events")
    assert response.status_code == 200
    assert response.json() == {"events": [], "total": 0}


def test_featured_events_are_cached():
    store = use_store(FakeStore(STORE))

    first = client.get("/events/featured")
    second = client.get("/events/featured")

    assert first.status_code == 200
    assert [e["id"] for e in first.json()["events"]] == ["e2"]
    assert second.json() == first.json()
    assert store.calls == 1


def test_event_detail():
    use_store(FakeStore(STORE))
    response = client.get("/events/e1")

    assert response.status_code == 200
    event = response.json()["event"]
    assert event["title"] == "Programming for everyone"
    assert event["is_featured"] is False


def test_event_detail_not_found():
    use_store(FakeStore(STORE))
    response = client.get("/events/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found"


def test_filtered_events():
    use_store(FakeStore(STORE))
    response = client.get("/events/2021/5")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Events in May 2021"
    assert data["year"] == 2021 and data["month"] == 5
    assert [e["id"] for e in data["events"]] == ["e1", "e2"]


def test_filtered_events_ignores_extra_segments():
    use_store(FakeStore(STORE))
    response = client.get("/events/2021/5/extra")
    assert response.status_code == 200
    assert response.json()["total"] == 2


@pytest.mark.parametrize("path", ["/events/abc/5", "/events/2021/xy", "/events/2020/5", "/events/2031/1", "/events/2021/0", "/events/2021/13"])
def test_filtered_events_invalid_filter(path):
    store = use_store(FakeStore(STORE))
    response = client.get(path)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid filter. Please adjust your values!"
    assert store.calls == 0


def test_filtered_events_no_match():
    use_store(FakeStore(STORE))
    response = client.get("/events/2022/5")
    assert response.status_code == 404
    assert response.json()["detail"] == "No events found for the chosen filter!"


@pytest.mark.parametrize("error", [
    FetchError("Store returned 500", "https://store/events.json", status_code=500),
    ParseError("Store returned invalid JSON"),
])
def test_store_failures_map_to_bad_gateway(error):
    use_store(FakeStore(error=error))
    response = client.get("/events")
    assert response.status_code == 502
    assert "Event store unavailable" in response.json()["detail"]


def test_parse_filter():
    assert parse_filter(["2021", "5"]) == (2021, 5)
    assert parse_filter(["2030", "12", "x"]) == (2030, 12)
    assert parse_filter(["2021", "5.0"]) == (2021, 5)
    assert parse_filter(["2021"]) is None
    assert parse_filter(["2021", "5.5"]) is None
    assert parse_filter(["2_021", "5"]) is None
    assert parse_filter(["\u0662\u0660\u0662\u0661", "5"]) is None


def test_missing_events_are_not_cached():
    store = use_store(FakeStore(STORE))

    for n in range(50):
        response = client.get(f"/events/missing-{n}")
        assert response.status_code == 404

    assert len(page_cache) == 0
    client.get("/events/missing-0")
    assert store.calls == 51


def test_found_event_is_cached():
    store = use_store(FakeStore(STORE))

    client.get("/events/e2")
    client.get("/events/e2")

    assert len(page_cache) == 1
    assert store.calls == 1


def test_featured_path_is_the_listing_even_with_a_featured_key():
    document = dict(STORE)
    document["featured"] = {**STORE["e1"], "title": "Shadowed"}
    use_store(FakeStore(document))

    response = client.get("/events/featured")

    assert response.status_code == 200
    assert "events" in response.json()
    assert "event" not in response.json()
