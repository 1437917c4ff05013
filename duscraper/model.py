"""
Central data model definitions used across the project.

Records are created once by an extractor, collected in document order,
written into one envelope and then discarded.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol


class Record(Protocol):
    def to_dict(self) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class CourseRecord:
    """
    One upper-division course without prerequisites (bulletin.json).
    """

    course: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AthleticEventRecord:
    """
    One row of the athletics schedule (athletic_events.json).
    """

    date: str
    opponent: str
    location: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CalendarEventRecord:
    """
    One calendar entry (calendar_events.json).

    Optional fields that are None are left out of the JSON output.
    """

    title: str
    date: str
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def no_events(cls, year: int) -> "CalendarEventRecord":
        return cls(
            title=f"No {year} events found",
            date="N/A",
            description=f"The calendar page did not list any events for {year}.",
        )

    @classmethod
    def from_error(cls, message: str) -> "CalendarEventRecord":
        return cls(title="Calendar Page Error", date="N/A", time="N/A", description=message)


def build_envelope(entity: str, records: Iterable[Record]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Wrap records into the top-level JSON object: {entity: [record, ...]}.
    """
    return {entity: [r.to_dict() for r in records]}
