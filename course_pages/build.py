"""Run a full course build: configuration, every selected course, then the index.

Courses are built one after another in configuration order. A course whose
source document is missing is skipped and contributes no articles; the rest of
the run carries on. Only configuration problems (a missing or invalid
configuration file, or an unknown ``--course`` id) abort the run.

Example
-------
>>> from pathlib import Path
>>> from course_pages.build import run_build
>>> report = run_build(Path("build-config.yaml"), "BMStats")  # doctest: +SKIP
>>> report.index_size  # doctest: +SKIP
12
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_CONFIG_FILENAME
from .article_index import update_article_index
from .config import SiteConfigError, load_site_config
from .generator import CourseBuilder

if typ.TYPE_CHECKING:
    from .config import CourseConfig, SiteConfig
    from .generator import Article, CourseBuildResult

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class BuildReport:
    """Per-course outcomes of one run and the resulting index size."""

    results: list[CourseBuildResult]
    index_path: Path
    index_size: int

    @property
    def articles(self) -> list[Article]:
        """Articles produced by every course, in build order."""
        return [article for result in self.results for article in result.articles]

    @property
    def skipped(self) -> list[CourseBuildResult]:
        """Results of courses that produced no output."""
        return [result for result in self.results if result.skipped]


def select_courses(site: SiteConfig, course_id: str | None) -> list[CourseConfig]:
    """Return every configured course, or only the one matching ``course_id``.

    Raises
    ------
    SiteConfigError
        If ``course_id`` is given and no configured course uses it.
    """
    if course_id is None:
        return list(site.courses)
    return [site.get_course(course_id)]


def run_build(
    config_path: Path,
    course_id: str | None = None,
    *,
    index_path: Path | None = None,
) -> BuildReport:
    """Build the selected courses and merge their articles into the index.

    Parameters
    ----------
    config_path : Path
        Build configuration file.
    course_id : str or None, optional
        Build only this course; ``None`` (default) builds all of them.
    index_path : Path or None, optional
        Override for the article index location from the configuration.

    Returns
    -------
    BuildReport
        Outcome of every selected course plus the merged index size.

    Raises
    ------
    FileNotFoundError
        If ``config_path`` does not exist.
    SiteConfigError
        If the configuration is invalid or ``course_id`` matches no course.
    """
    site = load_site_config(config_path)
    courses = select_courses(site, course_id)
    logger.info(
        "courses to build: %s", ", ".join(course.course_id for course in courses)
    )

    results = [CourseBuilder.from_site(site, course).run() for course in courses]
    target = index_path or site.index_path
    articles = [article for result in results for article in result.articles]
    merged = update_article_index(target, articles)
    return BuildReport(results=results, index_path=target, index_size=len(merged))


def run(
    course_id: str | None = None,
    *,
    config_path: Path = Path(DEFAULT_CONFIG_FILENAME),
    index_path: Path | None = None,
    on_report: typ.Callable[[BuildReport], None] | None = None,
) -> int:
    """Run a build and return a process exit code.

    Returns ``1`` when the configuration is missing or invalid or the
    requested course is unknown, ``0`` otherwise (including runs where some
    courses were skipped for missing sources). ``on_report`` receives the
    finished :class:`BuildReport` of a successful run.
    """
    try:
        report = run_build(config_path, course_id, index_path=index_path)
    except (FileNotFoundError, SiteConfigError) as exc:
        logger.error("%s", exc)
        return 1
    for result in report.skipped:
        logger.warning("%s skipped: %s", result.course_id, result.skipped_reason)
    if on_report is not None:
        on_report(report)
    return 0


__all__ = ["BuildReport", "run", "run_build", "select_courses"]
