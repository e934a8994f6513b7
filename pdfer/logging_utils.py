"""Logging setup for the command-line interface."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pdfer"


def configure_logging(level: int = logging.WARNING, console: Optional[Console] = None) -> logging.Logger:
    """Attach a single :class:`RichHandler` to the ``pdfer`` logger."""

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["configure_logging", "LOGGER_NAME"]
