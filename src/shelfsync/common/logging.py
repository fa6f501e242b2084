"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging

# Libraries that log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Module loggers propagate here, so one call at startup covers the whole
    package. ``force=True`` replaces handlers installed earlier, e.g. by a test
    harness. Per-request lines from the HTTP stack are held back to WARNING.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
