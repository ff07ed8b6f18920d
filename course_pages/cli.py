"""Cyclopts CLI entrypoint for building course article pages.

The ``course-pages`` console script defined here splits each configured
course's study notes into chapter pages, writes a homepage per course, and
refreshes the cross-course ``articles.json`` index. Typical usage involves
running ``course-pages run`` after editing notes, or
``course-pages run --course BMStats`` to rebuild a single course without
touching the index entries of the others.

Examples
--------
Build every configured course:

>>> from course_pages.cli import main
>>> main()  # doctest: +SKIP

Rebuild a single course from a custom configuration:

>>> from course_pages.cli import app
>>> app(
...     ["run", "--course", "BMStats", "--config", "notes/build-config.yaml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from . import build
from ._constants import DEFAULT_CONFIG_FILENAME
from ._logging import configure_logging

if typ.TYPE_CHECKING:
    from .build import BuildReport

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILENAME)

app = App(
    name="course-pages",
    config=cyclopts.config.Env("COURSE_PAGES_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Build chapter pages, course homepages and the article index.")
def run(
    *,
    course: typ.Annotated[
        str | None, Parameter(help="Only build the course with this id")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to the build configuration")
    ] = DEFAULT_CONFIG,
    index: typ.Annotated[
        Path | None, Parameter(help="Override the article index location")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log debug details")] = False,
) -> None:
    """Build the configured courses and merge their articles into the index.

    Parameters
    ----------
    course : str or None, optional
        Course id to build; when ``None`` (default) every course is built.
    config : Path, optional
        Path to the build configuration (overridable via
        ``COURSE_PAGES_CONFIG``).
    index : Path or None, optional
        Article index path overriding the configured one.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes pages and the index, printing every generated path.

    Raises
    ------
    SystemExit
        With status ``1`` when the configuration is missing or invalid, or
        when ``course`` matches no configured course.
    """
    configure_logging(verbose=verbose)
    status = build.run(
        course, config_path=config, index_path=index, on_report=_print_report
    )
    if status:
        raise SystemExit(status)


def _print_report(report: BuildReport) -> None:
    """Print the paths written by ``report`` and the index size."""
    for result in report.results:
        if result.skipped:
            print(f"{result.course_id}: skipped ({result.skipped_reason})")
            continue
        for path in result.written:
            print(f"wrote {_format_path(path)}")
        print(f"{result.course_id}: {len(result.articles)} chapters")
    print(f"index: {_format_path(report.index_path)} ({report.index_size} articles)")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``course-pages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
