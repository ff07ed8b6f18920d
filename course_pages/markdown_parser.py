r"""Split a course's study notes into chapters on second-level headings.

Each ``## Heading`` line opens a new chapter; everything up to the next one
belongs to it. Text before the first heading has no chapter to attach to and
is dropped.

Example
-------
>>> from course_pages.markdown_parser import split_chapters
>>> chapters = split_chapters("# Notes\n## Intro\nBody text\n### Details\nMore")
>>> [chapter.raw_title for chapter in chapters]
['Intro']
>>> chapters[0].body_lines
['Body text', '### Details', 'More']
"""

from __future__ import annotations

import dataclasses as dc
import re

CHAPTER_HEADING_PATTERN = re.compile(r"^## (.+)$")
INLINE_TAG_PATTERN = re.compile(r"<[^>]+>")


@dc.dataclass(slots=True)
class Chapter:
    """Second-level heading and the markdown lines that follow it.

    Attributes
    ----------
    raw_title : str
        Heading text as written, possibly containing inline HTML.
    body_lines : list[str]
        Lines between this heading and the next one (or end of document).
    """

    raw_title: str
    body_lines: list[str] = dc.field(default_factory=list)

    @property
    def body(self) -> str:
        """Return the chapter markdown with its lines rejoined."""
        return "\n".join(self.body_lines)


def clean_title(raw_title: str) -> str:
    """Return ``raw_title`` without inline HTML tags such as ``<font>``."""
    return INLINE_TAG_PATTERN.sub("", raw_title).strip()


def split_chapters(markdown_text: str) -> list[Chapter]:
    """Partition ``markdown_text`` into chapters in document order.

    Parameters
    ----------
    markdown_text : str
        Full course document, split on ``\n`` only (a trailing ``\r`` is
        dropped). Only lines starting with exactly ``"## "`` open a chapter;
        ``###`` and deeper headings stay inside the body.

    Returns
    -------
    list[Chapter]
        Chapters in document order. Returns an empty list when the document has
        no second-level headings.
    """
    chapters: list[Chapter] = []
    current: Chapter | None = None
    lines = markdown_text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for raw_line in lines:
        line = raw_line.rstrip("\r")
        match = CHAPTER_HEADING_PATTERN.match(line)
        if match:
            current = Chapter(raw_title=match.group(1).strip())
            chapters.append(current)
        elif current is not None:
            current.body_lines.append(line)
    return chapters


__all__ = ["Chapter", "clean_title", "split_chapters"]
