"""Exceptions raised while reading the remote event store."""
from __future__ import annotations

from typing import Optional


class EventStoreError(Exception):
    """Base class for event store failures."""


class FetchError(EventStoreError):
    """The store could not be reached or answered with a non-success status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchTimeout(FetchError):
    """The store did not answer within the configured timeout."""


class ParseError(EventStoreError):
    """The store answered with a body that is not an event document."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
