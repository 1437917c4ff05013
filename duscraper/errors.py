"""
Error types shared by all pipelines.

Write failures are not wrapped: they surface as the builtin OSError.
"""

from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper errors."""


class NetworkError(ScraperError):
    """A page could not be fetched (timeout, connection error, non-2xx status)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class ParseError(ScraperError):
    """Structured data embedded in a page is malformed."""
