"""Event schema shared by the repository, the API and the jobs."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """A single event record as stored under ``/events`` in the remote store.

    ``id`` is not part of the stored record; it is the key the record is
    stored under.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    title: str
    date: str  # YYYY-MM-DD, local calendar date
    description: str
    image: str  # relative to the static asset root
    is_featured: bool = Field(alias="isFeatured")
    location: str
