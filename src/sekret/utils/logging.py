"""Logging configuration for sekret.

Diagnostics go to stderr through rich so they never mix with the
``export`` lines printed on stdout. Secret values are never logged.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "sekret-rich"


def setup_logging(level: str | int = "WARNING") -> None:
    """Configure the ``sekret`` logger.

    Args:
        level: Log level name or number. Unknown names fall back to WARNING.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("sekret")
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    logger.addHandler(handler)
    logger.propagate = False
