"""
Bulletin scraping (course descriptions -> bulletin.json).

Keeps upper-division courses (number >= 3000) whose description does not
mention a prerequisite.

Title line format, e.g.:

    COMP 3000 Intro to X (4 Credits)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Pattern

from bs4 import BeautifulSoup

from duscraper.config import BulletinSite
from duscraper.logging_setup import get_logger
from duscraper.markup import field_text, parse_markup, select
from duscraper.model import CourseRecord, build_envelope
from duscraper.pipeline import PipelineResult, run_pipeline
from duscraper.writer import write_envelope


_PREREQ = re.compile(r"prereq", re.IGNORECASE)
_DIGITS = re.compile(r"\d+")
_WHITESPACE = re.compile(r"\s+")


def title_pattern(subject: str) -> Pattern[str]:
    """
    (CODE) (whitespace) (TITLE) (credit parenthetical)
    """
    return re.compile(rf"({re.escape(subject)}\s*\d+)\s+(.*)\(\d+.*\)")


def normalize_code(code: str) -> str:
    """
    "COMP 3000" -> "COMP-3000" (any whitespace run, incl. &nbsp;, becomes one hyphen).
    """
    return _WHITESPACE.sub("-", code.strip())


def course_number(code: str) -> Optional[int]:
    """
    First digit run of a course code as int, None if there is none.
    """
    m = _DIGITS.search(code)
    if not m:
        return None
    try:
        return int(m.group(0))
    except ValueError:
        return None


def parse_course_block(
    title_text: str,
    desc_text: str,
    pattern: Pattern[str],
    min_number: int,
) -> Optional[CourseRecord]:
    """
    Apply all filters to one course block. Returns None if the block is skipped.
    """
    match = pattern.search(title_text.strip())
    if not match:
        return None

    code = normalize_code(match.group(1))
    title = match.group(2).strip()

    number = course_number(code)
    if number is None or number < min_number:
        return None

    if _PREREQ.search(desc_text):
        return None

    return CourseRecord(course=code, title=title)


def extract_courses(doc: BeautifulSoup, site: BulletinSite) -> List[CourseRecord]:
    """
    Walk all course blocks in document order and keep the ones passing the filters.
    """
    pattern = title_pattern(site.subject)
    courses: List[CourseRecord] = []

    for block in select(doc, site.block_selector):
        title_text = field_text(block, site.title_selector).strip()
        desc_text = field_text(block, site.desc_selector).strip()

        course = parse_course_block(title_text, desc_text, pattern, site.min_number)
        if course:
            courses.append(course)

    return courses


def scrape_bulletin(
    site: BulletinSite,
    out_dir: Path,
    fetch: Callable[[str], str],
    logger: logging.Logger | None = None,
) -> PipelineResult:
    logger = logger or get_logger()

    def step():
        doc = parse_markup(fetch(site.url))
        courses = extract_courses(doc, site)
        path = write_envelope(out_dir / site.output, build_envelope("courses", courses))
        logger.info(
            "%d upper-division %s courses without prereqs",
            len(courses),
            site.subject,
        )
        return path, len(courses)

    return run_pipeline("bulletin", step, logger)
