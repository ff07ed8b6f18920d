"""Maintain the cross-course article index consumed by site listing pages.

The index is a flat JSON array of article records (``title``, ``url``,
``course``, ``category``), partitioned implicitly by ``course``. A build run
only knows the courses it rebuilt, so merging drops the stale entries of those
courses and appends the fresh ones while leaving every other course's entries
exactly as they were.

Typical usage after building some courses:

>>> from pathlib import Path
>>> from course_pages.article_index import update_article_index
>>> update_article_index(Path("articles.json"), articles)  # doctest: +SKIP
[{'title': 'Intro', 'url': '/courses/BMStats/BMStats0.html', ...}]

Side effects are limited to reading the index once and replacing it once. The
replacement is written to a temporary sibling file and renamed over the
target, so readers of the static site never observe a half-written index.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import typing as typ

import msgspec
import msgspec.json as msgspec_json

if typ.TYPE_CHECKING:  # pragma: no cover - import for type hints only
    import collections.abc as cabc
    from pathlib import Path

    from .generator.models import Article

logger = logging.getLogger(__name__)

IndexEntry = dict[str, typ.Any]
_INDEX_FILE_MODE = 0o644


def load_article_index(path: Path) -> list[IndexEntry]:
    """Return the persisted index entries, or an empty list when unusable.

    Parameters
    ----------
    path : Path
        Location of ``articles.json``.

    Returns
    -------
    list[dict[str, Any]]
        Entries in file order with every stored field preserved. A missing
        file yields ``[]``; an unparsable file or one that is not an array of
        objects yields ``[]`` after logging a warning.
    """
    if not path.exists():
        return []
    try:
        return msgspec_json.decode(path.read_bytes(), type=list[IndexEntry])
    except (OSError, msgspec.DecodeError) as exc:
        logger.warning("%s could not be read (%s); starting a new index", path, exc)
        return []


def merge_articles(
    existing: cabc.Iterable[IndexEntry], new_articles: cabc.Sequence[Article]
) -> list[IndexEntry]:
    """Replace the entries of every course present in ``new_articles``.

    Entries whose ``course`` does not appear in ``new_articles`` are kept in
    their original relative order, followed by ``new_articles`` in build order.
    An empty ``new_articles`` therefore leaves the index unchanged. Entries
    whose ``course`` is not a string never match and are kept.
    """
    rebuilt = {article.course for article in new_articles}
    kept = [entry for entry in existing if not _is_rebuilt(entry, rebuilt)]
    return kept + [article.as_dict() for article in new_articles]


def _is_rebuilt(entry: IndexEntry, rebuilt: cabc.Set[str]) -> bool:
    course = entry.get("course")
    return isinstance(course, str) and course in rebuilt


def write_article_index(path: Path, entries: cabc.Sequence[IndexEntry]) -> None:
    """Atomically replace ``path`` with ``entries`` as indented JSON."""
    payload = msgspec_json.format(msgspec_json.encode(list(entries)), indent=4)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.write(b"\n")
        os.chmod(tmp_name, _INDEX_FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


def update_article_index(
    path: Path, new_articles: cabc.Sequence[Article]
) -> list[IndexEntry]:
    """Merge ``new_articles`` into the index at ``path`` and persist the result.

    Returns
    -------
    list[dict[str, Any]]
        The merged entries exactly as written.
    """
    merged = merge_articles(load_article_index(path), new_articles)
    write_article_index(path, merged)
    logger.info("updated %s (%d articles)", path, len(merged))
    return merged


__all__ = [
    "IndexEntry",
    "load_article_index",
    "merge_articles",
    "update_article_index",
    "write_article_index",
]
