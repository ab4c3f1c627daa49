"""Logging setup for PropJournal."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "propjournal"


def setup_logging(level: str | int = "WARNING") -> logging.Logger:
    """Configure the package logger with a rich handler on stderr.

    Calling this again only updates the level, so handlers are never
    duplicated.

    Args:
        level: Level name (e.g. "INFO") or numeric level.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
