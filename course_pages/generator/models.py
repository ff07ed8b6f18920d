"""Shared dataclasses used by the course page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """Table-of-contents link for one ``<h2>``/``<h3>`` heading.

    Attributes
    ----------
    level : int
        Heading level, either ``2`` or ``3``.
    text : str
        Plain heading text with nested markup removed.
    anchor_id : str
        ``"<chapter index>.<ordinal>"``; matches the injected anchor.
    """

    level: int
    text: str
    anchor_id: str


@dc.dataclass(frozen=True, slots=True)
class ChapterRecord:
    """Homepage listing entry for one generated chapter page."""

    filename: str
    title: str


@dc.dataclass(frozen=True, slots=True)
class Article:
    """Article index record for one generated chapter page.

    Attributes
    ----------
    title : str
        Cleaned chapter title.
    url : str
        Site-absolute URL of the chapter page.
    course : str
        Course display name; the index is partitioned on this value.
    category : str
        Course category label.
    """

    title: str
    url: str
    course: str
    category: str

    def as_dict(self) -> dict[str, str]:
        """Return the record as a plain mapping in index field order."""
        return dc.asdict(self)


@dc.dataclass(slots=True)
class CourseBuildResult:
    """Outcome of building one course: its articles, or why it was skipped."""

    course_id: str
    articles: list[Article] = dc.field(default_factory=list)
    written: list[Path] = dc.field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        """Return ``True`` when the course produced no output at all."""
        return self.skipped_reason is not None


__all__ = ["Article", "ChapterRecord", "CourseBuildResult", "TocEntry"]
