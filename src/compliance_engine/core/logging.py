"""Logging setup for the engine and its MySQL collaborators."""

from __future__ import annotations

import logging
import sys


def setup_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("mysql.connector").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured (level=%s)", logging.getLevelName(level))
