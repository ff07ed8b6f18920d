"""Load and validate the course build configuration.

This subpackage parses the project's ``build-config.yaml`` (or a legacy
``build-config.json`` array), applies shared defaults, resolves source and
output paths against the project root, and produces typed dataclasses
(:class:`SiteConfig`, :class:`CourseConfig`, etc.) that the course builder
consumes. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from course_pages.config import load_site_config
>>> site = load_site_config(Path("build-config.yaml"))  # doctest: +SKIP
>>> course = site.get_course("BMStats")  # doctest: +SKIP
>>> course.chapter_url(0)  # doctest: +SKIP
'/courses/BMStats/BMStats0.html'
"""

from .loader import load_site_config
from .models import (
    CommentsConfig,
    CourseConfig,
    SiteConfig,
    SiteConfigError,
    SiteTheme,
)

__all__ = [
    "CommentsConfig",
    "CourseConfig",
    "SiteConfig",
    "SiteConfigError",
    "SiteTheme",
    "load_site_config",
]
