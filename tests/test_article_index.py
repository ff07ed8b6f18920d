"""Unit tests for merging and persisting the article index.

These tests exercise ``course_pages.article_index``: rebuilt courses replace
their own entries only, other courses' entries survive in order with any extra
fields intact, and unreadable index files are recovered as empty indexes.

Usage
-----
Run ``pytest tests/test_article_index.py -v``.
"""

from __future__ import annotations

import logging
import typing as typ

import msgspec.json as msgspec_json
import pytest

from course_pages.article_index import (
    load_article_index,
    merge_articles,
    update_article_index,
    write_article_index,
)
from course_pages.generator import Article

if typ.TYPE_CHECKING:
    from pathlib import Path


def _entry(title: str, course: str, **extra: str) -> dict[str, str]:
    return {
        "title": title,
        "url": f"/{course}/{title}.html",
        "course": course,
        "category": "Notes",
        **extra,
    }


def test_merge_replaces_only_rebuilt_courses() -> None:
    """Entries of rebuilt courses are dropped; the rest keep their order."""
    existing = [
        _entry("a0", "A"),
        _entry("b0", "B"),
        _entry("a1", "A"),
        _entry("c0", "C", pinned="yes"),
        _entry("b1", "B"),
    ]
    fresh = [Article("new", "/A/new.html", "A", "Notes")]
    merged = merge_articles(existing, fresh)
    assert merged == [
        _entry("b0", "B"),
        _entry("c0", "C", pinned="yes"),
        _entry("b1", "B"),
        {"title": "new", "url": "/A/new.html", "course": "A", "category": "Notes"},
    ]


def test_merge_without_new_articles_keeps_everything() -> None:
    """A run that produced nothing leaves the index as it was."""
    existing = [_entry("a0", "A"), {"title": "hand written"}]
    assert merge_articles(existing, []) == existing


def test_merge_is_idempotent() -> None:
    """Merging the same articles twice does not duplicate entries."""
    fresh = [
        Article("x", "/A/x.html", "A", "Notes"),
        Article("y", "/A/y.html", "A", "Notes"),
    ]
    once = merge_articles([_entry("b0", "B")], fresh)
    assert merge_articles(once, fresh) == once


def test_missing_index_loads_empty(tmp_path: Path) -> None:
    """An absent index file is an empty index."""
    assert load_article_index(tmp_path / "articles.json") == []


@pytest.mark.parametrize("content", ["{not json", '{"title": "x"}', "[1, 2]", ""])
def test_unparsable_index_warns_and_loads_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str
) -> None:
    """Corrupt or wrongly shaped files are recovered with a warning."""
    path = tmp_path / "articles.json"
    path.write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="course_pages.article_index"):
        assert load_article_index(path) == []
    assert "starting a new index" in caplog.text


def test_write_replaces_file_without_leftovers(tmp_path: Path) -> None:
    """The index is rewritten whole and no temporary files remain."""
    path = tmp_path / "articles.json"
    path.write_text("[]", encoding="utf-8")
    entries = [_entry("章节", "课程")]
    write_article_index(path, entries)
    assert msgspec_json.decode(path.read_bytes()) == entries
    assert "章节" in path.read_text(encoding="utf-8"), "non-ASCII stays readable"
    assert path.read_text(encoding="utf-8").endswith("]\n")
    assert [p.name for p in tmp_path.iterdir()] == ["articles.json"]


def test_update_round_trip_preserves_other_courses(tmp_path: Path) -> None:
    """Updating from disk keeps foreign entries field for field."""
    path = tmp_path / "articles.json"
    write_article_index(path, [_entry("b0", "B", extra="kept"), _entry("a0", "A")])
    merged = update_article_index(path, [Article("a-new", "/a.html", "A", "Notes")])
    on_disk = msgspec_json.decode(path.read_bytes())
    assert on_disk == merged
    assert on_disk[0] == _entry("b0", "B", extra="kept")
    assert [entry["title"] for entry in on_disk] == ["b0", "a-new"]


def test_update_keeps_entries_with_non_string_course(tmp_path: Path) -> None:
    """Oddly shaped ``course`` values never match a rebuilt course."""
    path = tmp_path / "articles.json"
    path.write_text(
        '[{"title": "x", "course": ["weird"]}, {"title": "y", "course": {"k": 1}}]',
        encoding="utf-8",
    )
    merged = update_article_index(path, [Article("a0", "/a0.html", "A", "Notes")])
    assert [entry["title"] for entry in merged] == ["x", "y", "a0"]
    assert merged[0]["course"] == ["weird"]
