"""
Unit tests for the athletics schedule extractor.

Every schedule row becomes exactly one event; missing fields are "".
"""

import json
import logging
import tempfile
import unittest
from pathlib import Path

from duscraper.athletics import extract_events, scrape_athletics
from duscraper.config import AthleticsSite
from duscraper.markup import parse_markup


ROW_FULL = """
<li class="sidearm-schedule-game-row">
  <div class="sidearm-schedule-game-opponent-date">
    <span>Aug 29\t(Fri)</span>
  </div>
  <div class="sidearm-schedule-game-opponent-name">
    <a href="#">Stanford</a>
  </div>
  <div class="sidearm-schedule-game-location">Denver, Colo.</div>
</li>
"""

ROW_NO_LOCATION = """
<li class="sidearm-schedule-game-row">
  <div class="sidearm-schedule-game-opponent-date">Sep 5</div>
  <div class="sidearm-schedule-game-opponent-name">Air Force</div>
</li>
"""


def _page(*rows: str) -> str:
    return (
        "<html><body><ul class='sidearm-schedule-games-container'>"
        + "".join(rows)
        + "</ul></body></html>"
    )


class TestExtractEvents(unittest.TestCase):
    def setUp(self) -> None:
        self.site = AthleticsSite()
        self.logger = logging.getLogger("duscraper.test")

    def test_fields_are_cleaned(self) -> None:
        events = extract_events(parse_markup(_page(ROW_FULL)), self.site, self.logger)
        self.assertEqual(len(events), 1)
        ev = events[0]
        self.assertEqual(ev.date, "Aug 29(Fri)")
        self.assertEqual(ev.opponent, "Stanford")
        self.assertEqual(ev.location, "Denver, Colo.")

    def test_missing_field_becomes_empty_string(self) -> None:
        events = extract_events(parse_markup(_page(ROW_NO_LOCATION)), self.site, self.logger)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].to_dict(), {"date": "Sep 5", "opponent": "Air Force", "location": ""})

    def test_one_record_per_row(self) -> None:
        empty_row = '<li class="sidearm-schedule-game-row"></li>'
        events = extract_events(
            parse_markup(_page(ROW_FULL, ROW_NO_LOCATION, empty_row)), self.site, self.logger
        )
        self.assertEqual(len(events), 3)
        self.assertEqual(events[2].to_dict(), {"date": "", "opponent": "", "location": ""})

    def test_rows_outside_container_are_ignored(self) -> None:
        html = "<html><body>" + ROW_FULL + "</body></html>"
        self.assertEqual(extract_events(parse_markup(html), self.site, self.logger), [])


class TestScrapeAthletics(unittest.TestCase):
    def test_writes_envelope(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            result = scrape_athletics(
                AthleticsSite(), Path(d), lambda url: _page(ROW_FULL, ROW_NO_LOCATION), logging.getLogger("duscraper.test")
            )
            self.assertTrue(result.succeeded)
            data = json.loads((Path(d) / "athletic_events.json").read_text(encoding="utf-8"))
            self.assertEqual(len(data["events"]), 2)
            self.assertEqual(data["events"][1]["opponent"], "Air Force")


if __name__ == "__main__":
    unittest.main()
