"""Logging setup for the ``course-pages`` console script."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Send package log records to stderr at INFO, or DEBUG when ``verbose``."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("course_pages").setLevel(level)
