"""Logging setup shared by the CLI and scripts."""

from __future__ import annotations

import logging

# Loggers that report every HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for command line use.

    Transport loggers stay at WARNING unless ``level`` asks for DEBUG output, so
    polling a long migration does not flood the console. ``force`` replaces any
    handlers already installed on the root logger.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
