from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity: int = 0, console: Optional[Console] = None) -> logging.Logger:
    """
    Route the package logger through rich. ``verbosity`` counts ``-v`` flags:
    0 -> WARNING, 1 -> INFO, 2 or more -> DEBUG.
    """
    level = LEVELS[min(max(verbosity, 0), len(LEVELS) - 1)]

    logger = logging.getLogger("jobpool_scheduler")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
