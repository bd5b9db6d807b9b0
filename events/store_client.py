"""Client for reading collections from the remote event store."""
from __future__ import annotations

import os
import logging
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from events.errors import FetchError, FetchTimeout, ParseError

load_dotenv()

DEFAULT_STORE_URL = "https://nextjs-demo-db629-default-rtdb.firebaseio.com"
STORE_URL = os.getenv("EVENTS_STORE_URL", DEFAULT_STORE_URL)
STORE_TIMEOUT = float(os.getenv("EVENTS_STORE_TIMEOUT", "10"))

logger = logging.getLogger(__name__)
if os.getenv("EVENTS_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


class StoreClient:
    """Read-only client for a JSON document store served over HTTP.

    Every collection lives at ``<base_url>/<name>.json``. The store answers
    with a JSON object keyed by record id, or ``null`` when the collection
    is empty.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or STORE_URL).rstrip("/")
        self.timeout = STORE_TIMEOUT if timeout is None else timeout
        self.session = session
        self.headers = {"Accept": "application/json"}

    def collection_url(self, name: str) -> str:
        """Return the URL of the collection ``name``."""
        return f"{self.base_url}/{name.strip('/')}.json"

    def get_collection(self, name: str) -> Any:
        """
        Fetch a collection and return its parsed JSON body.

        Args:
            name: Collection name, e.g. ``"events"``

        Returns:
            The decoded document, or None for an empty body or ``null``

        Raises:
            FetchTimeout: The store did not answer in time
            FetchError: Transport failure or non-success status
            ParseError: The body is not valid JSON
        """
        url = self.collection_url(name)
        logger.info("GET %s", url)

        get = self.session.get if self.session is not None else requests.get
        try:
            response = get(url, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FetchTimeout(f"Timed out fetching {url}: {exc}", url) from exc
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}", url) from exc

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Store returned {response.status_code} for {url}",
                url,
                status_code=response.status_code,
            )

        if not response.content or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Store returned invalid JSON for {url}: {exc}") from exc
