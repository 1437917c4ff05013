"""
Athletics scraping (schedule page -> athletic_events.json).

Uses the server-rendered schedule of one team instead of the JS-driven
homepage carousel. Every schedule row becomes one event, no filtering.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List

from bs4 import BeautifulSoup

from duscraper.config import AthleticsSite
from duscraper.logging_setup import get_logger
from duscraper.markup import clean_text, field_text, parse_markup, select
from duscraper.model import AthleticEventRecord, build_envelope
from duscraper.pipeline import PipelineResult, run_pipeline
from duscraper.writer import write_envelope


def extract_events(
    doc: BeautifulSoup,
    site: AthleticsSite,
    logger: logging.Logger | None = None,
) -> List[AthleticEventRecord]:
    """
    One record per schedule row. Missing sub-fields become "".
    """
    logger = logger or get_logger()
    events: List[AthleticEventRecord] = []

    for row in select(doc, site.row_selector):
        event = AthleticEventRecord(
            date=clean_text(field_text(row, site.date_selector)),
            opponent=clean_text(field_text(row, site.opponent_selector)),
            location=clean_text(field_text(row, site.location_selector)),
        )
        logger.debug("%s | %s | %s", event.date, event.opponent, event.location)
        events.append(event)

    return events


def scrape_athletics(
    site: AthleticsSite,
    out_dir: Path,
    fetch: Callable[[str], str],
    logger: logging.Logger | None = None,
) -> PipelineResult:
    logger = logger or get_logger()

    def step():
        doc = parse_markup(fetch(site.url))
        events = extract_events(doc, site, logger)
        path = write_envelope(out_dir / site.output, build_envelope("events", events))
        return path, len(events)

    return run_pipeline("athletics", step, logger)
