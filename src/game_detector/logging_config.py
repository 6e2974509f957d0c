"""
Logging configuration for Game Detector.

The library itself only installs a NullHandler; applications (such as the
gamedetect CLI) call setup_logging() to see its messages.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from game_detector.config.settings import settings

LOGGER_NAME = "game_detector"


def setup_logging(
    level: Optional[Union[int, str]] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure package-wide logging with a rich console handler.

    Args:
        level: Log level name or number (defaults to GAME_DETECTOR_LOG_LEVEL)
        console: Console to log to (defaults to stderr)

    Returns:
        The package logger
    """
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Calling again replaces the handler instead of duplicating output
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)

    return logger
