"""Logging setup shared by the CLI and the server."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "mediacat-rich"


def configure_logging(level: str = "WARNING") -> None:
    """Route ``mediacat`` loggers to stderr through Rich at ``level``.

    Calling this again only adjusts the level.
    """
    logger = logging.getLogger("mediacat")
    logger.setLevel(level.upper())
    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.set_name(_HANDLER_NAME)
    logger.addHandler(handler)


__all__ = ["configure_logging"]
