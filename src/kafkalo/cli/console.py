"""Rich consoles and logging setup for the CLI layer.

Tables go to stdout so they can be piped; diagnostics, errors and log
records go to stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)
"""Diagnostics, errors and hints."""

out = Console()
"""Command results (tables, file lists)."""


def configure_logging(verbosity: int) -> None:
    """Route ``kafkalo`` log records through Rich on stderr.

    ``0`` shows warnings, ``1`` (``-v``) info and ``2`` (``-vv``) debug.
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger("kafkalo")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
