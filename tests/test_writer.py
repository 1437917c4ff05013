"""
Unit tests for the result writer.

Contract:
- parent directories are created
- existing files are fully overwritten
- output is 2-space indented UTF-8 JSON
"""

import json
import tempfile
import unittest
from pathlib import Path

from duscraper.model import CalendarEventRecord, CourseRecord, build_envelope
from duscraper.writer import write_envelope


class TestWriter(unittest.TestCase):
    def test_creates_missing_directories(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "results" / "nested" / "out.json"
            write_envelope(p, {"courses": []})
            self.assertTrue(p.exists())
            self.assertEqual(json.loads(p.read_text(encoding="utf-8")), {"courses": []})

    def test_second_write_overwrites(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "out.json"
            write_envelope(p, build_envelope("courses", [CourseRecord("COMP-3000", "A"), CourseRecord("COMP-3100", "B")]))
            write_envelope(p, build_envelope("courses", [CourseRecord("COMP-3500", "C")]))

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data, {"courses": [{"course": "COMP-3500", "title": "C"}]})

    def test_indent_and_unicode(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "out.json"
            write_envelope(p, build_envelope("events", [CalendarEventRecord("Café Night", "2025-05-01")]))
            text = p.read_text(encoding="utf-8")
            self.assertIn('\n  "events": [', text)
            self.assertIn("Café Night", text)
            self.assertNotIn('"time"', text)

    def test_unwritable_target_raises_oserror(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            blocker = Path(d) / "blocker"
            blocker.write_text("not a directory", encoding="utf-8")
            with self.assertRaises(OSError):
                write_envelope(blocker / "out.json", {"events": []})


if __name__ == "__main__":
    unittest.main()
