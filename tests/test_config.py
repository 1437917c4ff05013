"""
Unit tests for settings loading.
"""

import json
import tempfile
import unittest
from pathlib import Path

from duscraper.config import Settings, load_settings


class TestLoadSettings(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        settings = load_settings()
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.out_dir, Path("results"))
        self.assertEqual(settings.target_year, 2025)
        self.assertEqual(settings.calendar.script_id, "__NEXT_DATA__")

    def test_overrides_fields(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.json"
            p.write_text(
                json.dumps(
                    {
                        "out_dir": "out",
                        "target_year": 2026,
                        "athletics": {"url": "https://example.edu/schedule"},
                        "calendar": {"events_path": ["props", "events"]},
                    }
                ),
                encoding="utf-8",
            )
            settings = load_settings(p)

        self.assertEqual(settings.out_dir, Path("out"))
        self.assertEqual(settings.target_year, 2026)
        self.assertEqual(settings.athletics.url, "https://example.edu/schedule")
        # untouched fields keep their defaults
        self.assertEqual(settings.athletics.row_selector, Settings().athletics.row_selector)
        self.assertEqual(settings.calendar.events_path, ("props", "events"))

    def test_unknown_key_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.json"
            p.write_text(json.dumps({"bulletin": {"selector": "x"}}), encoding="utf-8")
            with self.assertRaises(ValueError):
                load_settings(p)

    def _load(self, data: dict) -> Settings:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.json"
            p.write_text(json.dumps(data), encoding="utf-8")
            return load_settings(p)

    def test_string_year_is_rejected(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            self._load({"target_year": "2025"})
        self.assertIn("target_year", str(ctx.exception))

    def test_string_min_number_is_rejected(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            self._load({"bulletin": {"min_number": "3000"}})
        self.assertIn("bulletin.min_number", str(ctx.exception))

    def test_other_wrong_types_are_rejected(self) -> None:
        for data in (
            {"timeout": "30"},
            {"target_year": True},
            {"out_dir": 5},
            {"athletics": {"url": 1}},
            {"calendar": {"state_path": "props.pageProps"}},
        ):
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    self._load(data)

    def test_int_timeout_and_user_agent_are_accepted(self) -> None:
        settings = self._load({"timeout": 10, "user_agent": "duscraper/0.1"})
        self.assertEqual(settings.timeout, 10.0)
        self.assertIsInstance(settings.timeout, float)
        self.assertEqual(settings.user_agent, "duscraper/0.1")

    def test_invalid_json_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "settings.json"
            p.write_text("{", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_settings(p)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_settings("/nonexistent/duscraper-settings.json")


if __name__ == "__main__":
    unittest.main()
