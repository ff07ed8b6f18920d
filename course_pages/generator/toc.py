"""Derive chapter tables of contents and the anchors they link to.

Both passes walk the rendered chapter HTML with the same heading pattern and an
ordinal counter starting at 1, so entry ``n`` of :func:`extract_toc` always
points at the ``n``-th anchor written by :func:`inject_anchors`.
"""

from __future__ import annotations

import html
import itertools
import re

from .models import TocEntry

HEADING_PATTERN = re.compile(
    r"<h([23])(\b[^>]*)>(.*?)</h\1>", re.IGNORECASE | re.DOTALL
)
TAG_PATTERN = re.compile(r"<[^>]+>")


def anchor_id(chapter_index: int, ordinal: int) -> str:
    """Return the anchor id for the ``ordinal``-th heading of a chapter."""
    return f"{chapter_index}.{ordinal}"


def extract_toc(rendered_html: str, chapter_index: int) -> list[TocEntry]:
    """Collect ``<h2>``/``<h3>`` headings from ``rendered_html`` in order.

    Parameters
    ----------
    rendered_html : str
        Chapter body produced by the markdown renderer.
    chapter_index : int
        Zero-based chapter position, used as the anchor id prefix.

    Returns
    -------
    list[TocEntry]
        One entry per heading with nested markup stripped and entities
        decoded; empty when the chapter has no second or third level headings.
    """
    entries: list[TocEntry] = []
    for ordinal, match in enumerate(HEADING_PATTERN.finditer(rendered_html), start=1):
        text = html.unescape(TAG_PATTERN.sub("", match.group(3))).strip()
        entries.append(
            TocEntry(
                level=int(match.group(1)),
                text=text,
                anchor_id=anchor_id(chapter_index, ordinal),
            )
        )
    return entries


def inject_anchors(rendered_html: str, chapter_index: int) -> str:
    """Insert an empty named anchor immediately before every h2/h3 heading."""
    ordinals = itertools.count(1)

    def _anchor(match: re.Match[str]) -> str:
        target = anchor_id(chapter_index, next(ordinals))
        return (
            f'<a name="{target}" class="md-header-anchor" id="{target}"></a>\n'
            f"{match.group(0)}"
        )

    return HEADING_PATTERN.sub(_anchor, rendered_html)


__all__ = ["HEADING_PATTERN", "anchor_id", "extract_toc", "inject_anchors"]
