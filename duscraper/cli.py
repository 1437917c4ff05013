"""
CLI (Command Line Interface).

Runs all three scrapers, strictly one after another:

    duscraper
    python -m duscraper

Optional flags only change where data goes or which settings are used;
with no flags the run writes results/bulletin.json,
results/athletic_events.json and results/calendar_events.json.

A failing pipeline is logged and never stops the next one. The exit code
is 0 either way; check the log or the written files.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional

from duscraper.athletics import scrape_athletics
from duscraper.bulletin import scrape_bulletin
from duscraper.calendar_events import scrape_calendar
from duscraper.config import Settings, load_settings
from duscraper.fetch import fetch_page
from duscraper.logging_setup import get_logger, setup_logging
from duscraper.pipeline import PipelineResult


def run_all(
    settings: Settings,
    fetch: Optional[Callable[[str], str]] = None,
    logger: Optional[logging.Logger] = None,
) -> List[PipelineResult]:
    """
    Run bulletin, athletics and calendar pipelines in this order.
    """
    logger = logger or get_logger()
    if fetch is None:
        fetch = partial(fetch_page, timeout=settings.timeout, user_agent=settings.user_agent)

    out_dir = Path(settings.out_dir)

    results = [
        scrape_bulletin(settings.bulletin, out_dir, fetch, logger),
        scrape_athletics(settings.athletics, out_dir, fetch, logger),
        scrape_calendar(settings.calendar, out_dir, fetch, settings.target_year, logger),
    ]

    failed = [r.name for r in results if not r.succeeded]
    if failed:
        logger.warning("Finished with errors in: %s", ", ".join(failed))
    else:
        logger.info("All scrapers finished.")

    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="duscraper", description="Scrape DU bulletin, athletics and calendar pages")
    p.add_argument("--config", type=Path, default=None, help="JSON file overriding URLs/selectors")
    p.add_argument("--out-dir", type=Path, default=None, help="Output directory (default: results)")
    p.add_argument("--year", type=int, default=None, help="Calendar year to keep (default: 2025)")
    p.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    return p


def main(argv: list[str] | None = None) -> None:
    """
    Console entry point.
    """
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_level)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as exc:
        print(f"Cannot load settings: {exc}")
        raise SystemExit(2)

    if args.out_dir is not None:
        settings = replace(settings, out_dir=args.out_dir)
    if args.year is not None:
        settings = replace(settings, target_year=args.year)

    run_all(settings, logger=logger)


if __name__ == "__main__":
    main()
