"""
Calendar scraping (calendar page -> calendar_events.json).

The calendar page is rendered client-side, so the plain HTML carries little
markup. The page data is read from the embedded Next.js script node
(id="__NEXT_DATA__") instead. The JSON inside it comes in one of a few known
shapes, modelled below as a small tagged union:

- KeyedEvents   {"Event:123": {"startDate": ...}, ...}
- EventList     [{"startDate": ...}, ...]
- Unrecognized  anything else (no events)

Graceful degradation:
- script node missing   -> read the server-rendered listing, if any
- script JSON malformed -> zero events
- zero matching events  -> one placeholder record
- fetch/parse failure   -> one error record (file is still written)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from bs4 import BeautifulSoup

from duscraper.config import CalendarSite
from duscraper.errors import ParseError
from duscraper.logging_setup import get_logger
from duscraper.markup import clean_text, field_text, node_text, parse_markup, select
from duscraper.model import CalendarEventRecord, build_envelope
from duscraper.pipeline import PipelineResult, run_pipeline
from duscraper.writer import write_envelope


DEFAULT_YEAR = 2025


# ---------------------------------------------------------------------------
# Payload shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyedEvents:
    entries: Dict[str, Any]


@dataclass(frozen=True)
class EventList:
    items: List[Any]


@dataclass(frozen=True)
class Unrecognized:
    reason: str


CalendarShape = Union[KeyedEvents, EventList, Unrecognized]


def _dig(data: Any, path: Sequence[str]) -> Any:
    """
    Follow a key path through nested dicts. None if any step is missing.
    """
    current = data
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current


def _prefixed(mapping: Any, prefix: str) -> Dict[str, Any]:
    if not isinstance(mapping, dict):
        return {}
    return {k: v for k, v in mapping.items() if isinstance(k, str) and k.startswith(prefix)}


def classify_payload(payload: Any, site: CalendarSite) -> CalendarShape:
    """
    Decide which known shape the parsed script payload has.
    """
    entries = _prefixed(_dig(payload, site.state_path), site.key_prefix)
    if not entries:
        entries = _prefixed(payload, site.key_prefix)
    if entries:
        return KeyedEvents(entries)

    items = _dig(payload, site.events_path)
    if isinstance(items, list):
        return EventList(items)

    return Unrecognized(f"no '{site.key_prefix}' keys and no list at {'.'.join(site.events_path)}")


# ---------------------------------------------------------------------------
# Event objects -> records
# ---------------------------------------------------------------------------


def parse_start(value: Any) -> Optional[datetime]:
    """
    Parse an ISO date or datetime ("2025-03-01", "2025-03-01T18:00:00.000Z").
    """
    if not isinstance(value, str) or not value.strip():
        return None

    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _has_clock_time(value: str) -> bool:
    """
    True for "2025-03-01T18:00" or "2025-03-01 18:00", not for "2025-03-01Z".
    """
    return "T" in value or " " in value.strip()


def _location_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        for key in ("name", "title"):
            name = value.get(key)
            if isinstance(name, str) and name.strip():
                return name.strip()
    return None


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def event_record(obj: Dict[str, Any], start: datetime, start_raw: str) -> CalendarEventRecord:
    title = _optional_text(obj.get("title")) or _optional_text(obj.get("name")) or "Untitled event"

    return CalendarEventRecord(
        title=title,
        date=start.date().isoformat(),
        time=start.strftime("%H:%M") if _has_clock_time(start_raw) else None,
        location=_location_text(obj.get("location")),
        description=_optional_text(obj.get("description")),
    )


def _candidates(shape: CalendarShape) -> List[Any]:
    if isinstance(shape, KeyedEvents):
        return list(shape.entries.values())
    if isinstance(shape, EventList):
        return list(shape.items)
    if isinstance(shape, Unrecognized):
        return []
    raise TypeError(f"Unknown calendar shape: {shape!r}")


def events_from_shape(
    shape: CalendarShape,
    site: CalendarSite,
    year: int,
    logger: logging.Logger | None = None,
) -> List[CalendarEventRecord]:
    """
    Records for all candidate objects whose start date falls in `year`.

    Candidates without a parsable ISO start date are skipped (logged at debug level).
    """
    logger = logger or get_logger()
    events: List[CalendarEventRecord] = []

    for obj in _candidates(shape):
        if not isinstance(obj, dict):
            continue

        start_raw = obj.get(site.start_field)
        start = parse_start(start_raw)
        if start is None:
            logger.debug("Skipping event %r: unparsable %s %r", obj.get("title"), site.start_field, start_raw)
            continue
        if start.year != year:
            continue

        events.append(event_record(obj, start, start_raw))

    return events


# ---------------------------------------------------------------------------
# Page -> records
# ---------------------------------------------------------------------------


def find_payload(doc: BeautifulSoup, site: CalendarSite) -> Any:
    """
    Parsed JSON of the structured-data script node, None if the node is missing.

    Raises:
        ParseError: if the node text is not valid JSON.
    """
    node = doc.find("script", id=site.script_id)
    if node is None:
        return None

    try:
        return json.loads(node_text(node))
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON in #{site.script_id}: {exc}") from exc


def listing_events(doc: BeautifulSoup, site: CalendarSite, year: int) -> List[CalendarEventRecord]:
    """
    Server-rendered listing: title heading, then date / time / location paragraphs.

    Items whose date text does not mention `year` are dropped.
    """
    events: List[CalendarEventRecord] = []

    for item in select(doc, site.listing_selector):
        paragraphs = [clean_text(node_text(p)) for p in item.find_all("p")]
        paragraphs += [""] * (3 - len(paragraphs))
        date, time, location = paragraphs[:3]

        if str(year) not in date:
            continue

        events.append(
            CalendarEventRecord(
                title=clean_text(field_text(item, site.listing_title_selector)),
                date=date,
                time=time or None,
                location=location or None,
            )
        )

    return events


def extract_calendar(
    doc: BeautifulSoup,
    site: CalendarSite,
    year: int = DEFAULT_YEAR,
    logger: logging.Logger | None = None,
) -> List[CalendarEventRecord]:
    """
    All calendar events of `year` on the page, or a single placeholder record.
    """
    logger = logger or get_logger()
    events: List[CalendarEventRecord] = []

    try:
        payload = find_payload(doc, site)
    except ParseError as exc:
        logger.warning("%s, treating as no events", exc)
    else:
        if payload is None:
            logger.info("No #%s script on the page, reading the event listing", site.script_id)
            events = listing_events(doc, site, year)
        else:
            shape = classify_payload(payload, site)
            if isinstance(shape, Unrecognized):
                logger.info("Unrecognized calendar data: %s", shape.reason)
            events = events_from_shape(shape, site, year, logger)

    if not events:
        events.append(CalendarEventRecord.no_events(year))

    return events


def scrape_calendar(
    site: CalendarSite,
    out_dir: Path,
    fetch: Callable[[str], str],
    year: int = DEFAULT_YEAR,
    logger: logging.Logger | None = None,
) -> PipelineResult:
    logger = logger or get_logger()
    out_path = out_dir / site.output

    def step():
        try:
            doc = parse_markup(fetch(site.url))
            events = extract_calendar(doc, site, year, logger)
            path = write_envelope(out_path, build_envelope("events", events))
        except Exception as exc:
            # Partial results are dropped; the file still gets written.
            write_envelope(out_path, build_envelope("events", [CalendarEventRecord.from_error(str(exc))]))
            logger.warning("Wrote error placeholder to %s", out_path)
            raise
        return path, len(events)

    return run_pipeline("calendar", step, logger)
