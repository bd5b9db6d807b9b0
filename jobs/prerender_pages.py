"""Prerender the home, all-events and featured event pages to JSON files."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from api.presenters import EventDetailPage, present_event, present_list
from events.errors import EventStoreError
from events.repository import EventRepository

DEFAULT_OUTPUT = Path(os.getenv("PRERENDER_OUTPUT_DIR", "build/pages"))

logger = logging.getLogger(__name__)
if os.getenv("EVENTS_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def _write_page(path: Path, page, generated_at: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"generated_at": generated_at, **page.model_dump()}
    path.write_text(json.dumps(payload, indent=2))
    logger.info("Wrote %s", path)
    return path


def prerender(output_dir: str | Path = DEFAULT_OUTPUT, repository: EventRepository | None = None) -> list[Path]:
    """Write page payloads under ``output_dir`` and return the written paths.

    Only featured events get a prerendered detail page; other events are
    built on first request by the API.
    """
    repository = repository or EventRepository()
    output_dir = Path(output_dir)
    generated_at = datetime.now(timezone.utc).isoformat()

    all_events = repository.fetch_all()
    featured = [event for event in all_events if event.is_featured]

    written = [
        _write_page(output_dir / "index.json", present_list(featured), generated_at),
        _write_page(output_dir / "events" / "index.json", present_list(all_events), generated_at),
    ]
    for event in featured:
        page = EventDetailPage(event=present_event(event))
        written.append(_write_page(output_dir / "events" / f"{event.id}.json", page, generated_at))
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Prerender event pages to JSON")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT),
        help=f"Directory to write pages to (default: {DEFAULT_OUTPUT})",
    )
    args = parser.parse_args(argv)

    try:
        written = prerender(args.output)
    except EventStoreError as exc:
        print("❌ Failed to prerender pages:", exc)
        return 1

    for path in written:
        print("✅ Wrote", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
