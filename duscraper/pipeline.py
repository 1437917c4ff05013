"""
Pipeline results.

A pipeline never raises into the driver. It returns a PipelineResult that
is either a success (output path + record count) or a failure (the error).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Tuple


@dataclass(frozen=True)
class PipelineResult:
    name: str
    path: Optional[Path] = None
    count: int = 0
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, name: str, path: Path, count: int) -> "PipelineResult":
        return cls(name=name, path=path, count=count)

    @classmethod
    def failed(cls, name: str, error: BaseException) -> "PipelineResult":
        return cls(name=name, error=error)


# A step does the actual work and returns (written path, number of records).
Step = Callable[[], Tuple[Path, int]]


def run_pipeline(name: str, step: Step, logger: logging.Logger) -> PipelineResult:
    """
    Run one pipeline step and convert any failure into a failed result.
    """
    logger.info("Scraping %s ...", name)
    try:
        path, count = step()
    except Exception as exc:
        logger.error("Error scraping %s: %s", name, exc)
        return PipelineResult.failed(name, exc)

    logger.info("%s -> %d records", path, count)
    return PipelineResult.ok(name, path, count)
