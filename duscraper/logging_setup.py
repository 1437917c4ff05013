"""
Console logging.

All modules log through the "duscraper" logger. Pipelines take the logger
as a parameter, so tests can hand in their own instead of capturing output.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "duscraper"


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Attach a rich console handler to the package logger (once).
    """
    logger = get_logger()
    logger.setLevel(level.upper())

    # Avoid duplicate handlers when main() is called more than once
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)

    logger.propagate = False
    return logger
