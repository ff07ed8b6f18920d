"""Shared fixtures for course_pages tests.

``project_writer`` lays out a throwaway project (notes plus a legacy-style
``build-config.json``) under ``tmp_path`` so builder, CLI and behaviour tests
can run the real pipeline without touching the repository.
"""

from __future__ import annotations

import json
import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

TWO_CHAPTER_DOC = (
    "# Calculus notes\n"
    "Preamble that belongs to no chapter.\n\n"
    "## <font color=red>Limits</font>\n"
    "### Definition\n"
    "The limit $\\lim_{x \\to 0} f_1(x)$ exists when both sides agree.\n\n"
    "$$\n"
    "\\epsilon_1 < \\delta_2\n"
    "$$\n\n"
    "### Examples\n"
    "First line\n"
    "second line\n\n"
    "## Derivatives\n"
    "No headings in this chapter.\n"
)
ONE_CHAPTER_DOC = "## Overview\nA single chapter with **bold** text.\n"


class ProjectWriter(typ.Protocol):
    """Callable writing a project and returning its configuration path."""

    def __call__(
        self,
        sources: cabc.Mapping[str, str | None],
        *,
        names: cabc.Mapping[str, str] | None = None,
    ) -> Path: ...


@pytest.fixture
def project_writer(tmp_path: Path) -> ProjectWriter:
    """Return a helper that writes notes and a build config under ``tmp_path``.

    ``sources`` maps course ids to markdown; ``None`` leaves the source
    document missing. Course names default to ``"Course <id>"``.
    """

    def _write(
        sources: cabc.Mapping[str, str | None],
        *,
        names: cabc.Mapping[str, str] | None = None,
    ) -> Path:
        notes = tmp_path / "notes"
        notes.mkdir(exist_ok=True)
        entries: list[dict[str, str]] = []
        for course_id, markdown in sources.items():
            source = notes / f"{course_id}.md"
            if markdown is not None:
                source.write_text(markdown, encoding="utf-8")
            entries.append(
                {
                    "courseId": course_id,
                    "courseName": (names or {}).get(course_id, f"Course {course_id}"),
                    "author": "Ada",
                    "category": "Study notes",
                    "description": f"Notes for {course_id}",
                    "source": f"notes/{course_id}.md",
                    "outputDir": f"courses/{course_id}",
                }
            )
        config_path = tmp_path / "build-config.json"
        config_path.write_text(
            json.dumps(entries, ensure_ascii=False, indent=4), encoding="utf-8"
        )
        return config_path

    return _write


@pytest.fixture
def two_chapter_doc() -> str:
    """Return a course document with two chapters, math and subsections."""
    return TWO_CHAPTER_DOC


@pytest.fixture
def one_chapter_doc() -> str:
    """Return a course document with a single heading-free chapter."""
    return ONE_CHAPTER_DOC
