"""Turn long-form study notes into linked static course pages.

This package exposes the CLI entry points used by ``course-pages run`` to split
course documents into chapter pages, render per-course homepages, and keep the
cross-course ``articles.json`` index in step.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from course_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
