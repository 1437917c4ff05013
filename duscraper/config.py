"""
Site configuration.

The URLs and CSS selectors below describe the current layout of three
third-party pages. They change without notice, so they live here as
overridable settings instead of being spread through the extractors.

An optional JSON file can override any field:

    {
      "out_dir": "results",
      "target_year": 2025,
      "athletics": {"row_selector": ".schedule-row"}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class BulletinSite:
    url: str = "https://bulletin.du.edu/undergraduate/coursedescriptions/comp/"
    block_selector: str = "div.courseblock"
    title_selector: str = "p.courseblocktitle"
    desc_selector: str = "p.courseblockdesc"
    subject: str = "COMP"
    min_number: int = 3000
    output: str = "bulletin.json"


@dataclass(frozen=True)
class AthleticsSite:
    url: str = "https://denverpioneers.com/sports/mens-soccer/schedule"
    row_selector: str = ".sidearm-schedule-games-container .sidearm-schedule-game-row"
    date_selector: str = ".sidearm-schedule-game-opponent-date"
    opponent_selector: str = ".sidearm-schedule-game-opponent-name"
    location_selector: str = ".sidearm-schedule-game-location"
    output: str = "athletic_events.json"


@dataclass(frozen=True)
class CalendarSite:
    url: str = "https://www.du.edu/calendar"
    script_id: str = "__NEXT_DATA__"
    # Keyed shape: {"Event:123": {...}, ...}
    state_path: Tuple[str, ...] = ("props", "pageProps", "__APOLLO_STATE__")
    key_prefix: str = "Event:"
    # List shape: [{...}, {...}]
    events_path: Tuple[str, ...] = ("props", "pageProps", "events")
    start_field: str = "startDate"
    # Server-rendered listing, used when the script node is missing
    listing_selector: str = ".events-listing__item"
    listing_title_selector: str = "h3"
    output: str = "calendar_events.json"


@dataclass(frozen=True)
class Settings:
    bulletin: BulletinSite = field(default_factory=BulletinSite)
    athletics: AthleticsSite = field(default_factory=AthleticsSite)
    calendar: CalendarSite = field(default_factory=CalendarSite)
    out_dir: Path = Path("results")
    target_year: int = 2025
    timeout: float = 30.0
    user_agent: Optional[str] = None


_SITE_KEYS = {"bulletin": BulletinSite, "athletics": AthleticsSite, "calendar": CalendarSite}


def _coerce(current: Any, value: Any, name: str) -> Any:
    """
    Check an override against the type of the default it replaces.
    """
    if isinstance(current, tuple):
        if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
            raise ValueError(f"Setting '{name}' must be a list of strings")
        return tuple(value)

    # bool is an int subclass, JSON true/false is never a valid number here
    if isinstance(value, bool):
        raise ValueError(f"Setting '{name}' must not be a boolean")

    if current is None or isinstance(current, str):
        if value is not None and not isinstance(value, str):
            raise ValueError(f"Setting '{name}' must be a string")
        if value is None and current is not None:
            raise ValueError(f"Setting '{name}' must be a string")
        return value

    if isinstance(current, float):
        if not isinstance(value, (int, float)):
            raise ValueError(f"Setting '{name}' must be a number")
        return float(value)

    if isinstance(current, int):
        if not isinstance(value, int):
            raise ValueError(f"Setting '{name}' must be an integer")
        return value

    if not isinstance(value, type(current)):
        raise ValueError(f"Setting '{name}' must be a {type(current).__name__}")
    return value


def _apply_overrides(obj: Any, overrides: Dict[str, Any], where: str) -> Any:
    """
    Return a copy of a settings dataclass with the given fields replaced.

    Unknown keys and wrongly typed values raise ValueError so mistakes in
    config files do not pass silently.
    """
    known = {f.name: f for f in fields(obj)}
    changes: Dict[str, Any] = {}

    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown setting '{where}{key}'")
        changes[key] = _coerce(getattr(obj, key), value, f"{where}{key}")

    return replace(obj, **changes)


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load settings, optionally overridden by a JSON file.

    Without a path the built-in defaults are returned.
    Raises FileNotFoundError for a missing file and ValueError for invalid content.
    """
    settings = Settings()
    if path is None:
        return settings

    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a JSON object")

    top: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _SITE_KEYS:
            if not isinstance(value, dict):
                raise ValueError(f"Setting '{key}' must be an object")
            top[key] = _apply_overrides(getattr(settings, key), value, f"{key}.")
        elif key == "out_dir":
            if not isinstance(value, str) or not value.strip():
                raise ValueError("Setting 'out_dir' must be a non-empty string")
            top[key] = Path(value)
        else:
            top[key] = value

    return _apply_overrides(settings, top, "")
