"""Logging setup for the command line."""

from __future__ import annotations

import logging

# Chatty at INFO: one line per HTTP request or migration step.
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "hishel", "alembic")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Third-party request and migration logs only show up at DEBUG.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    quiet_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
