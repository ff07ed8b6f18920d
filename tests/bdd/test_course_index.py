"""Behaviour tests for rebuilding courses against a shared article index.

These scenarios run the whole build against a temporary project written by
the ``project_writer`` fixture. They check that rebuilding one course replaces
only that course's index entries, that a course with a missing source is
skipped without aborting the run, and that course names are escaped in every
generated page.

Usage:
    Run these behaviour tests with pytest, for example:

        pytest tests/bdd/test_course_index.py -v
"""

from __future__ import annotations

from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from course_pages.build import run_build

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "course_index.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _index_entries(scenario_state: dict[str, object]) -> list[dict[str, str]]:
    config_path = scenario_state["config_path"]
    assert isinstance(config_path, Path)
    return msgspec_json.decode((config_path.parent / "articles.json").read_bytes())


def _course_pages(scenario_state: dict[str, object]) -> dict[Path, bytes]:
    config_path = scenario_state["config_path"]
    assert isinstance(config_path, Path)
    out_dir = config_path.parent / "courses" / "A"
    return {path: path.read_bytes() for path in sorted(out_dir.glob("*.html"))}


@given("a project with a two-chapter course A and a one-chapter course B")
def given_two_courses(
    project_writer,  # noqa: ANN001 - fixture callable
    two_chapter_doc: str,
    one_chapter_doc: str,
    scenario_state: dict[str, object],
) -> None:
    """Write a project holding courses A and B."""
    scenario_state["config_path"] = project_writer(
        {"A": two_chapter_doc, "B": one_chapter_doc}
    )


@given("a project where course B has no source document")
def given_missing_source(
    project_writer,  # noqa: ANN001 - fixture callable
    two_chapter_doc: str,
    scenario_state: dict[str, object],
) -> None:
    """Write a project whose second course points at a missing file."""
    scenario_state["config_path"] = project_writer({"A": two_chapter_doc, "B": None})


@given(parsers.parse('a project whose course A is named "{name}"'))
def given_hostile_name(
    project_writer,  # noqa: ANN001 - fixture callable
    two_chapter_doc: str,
    scenario_state: dict[str, object],
    name: str,
) -> None:
    """Write a single-course project with markup in the course name."""
    scenario_state["config_path"] = project_writer(
        {"A": two_chapter_doc}, names={"A": name}
    )
    scenario_state["course_name"] = name


@given("every course has been built once")
def given_built_once(scenario_state: dict[str, object]) -> None:
    """Run a full build and remember its index and pages."""
    run_build(scenario_state["config_path"])
    scenario_state["first_index"] = _index_entries(scenario_state)
    scenario_state["first_pages"] = _course_pages(scenario_state)


@when("every course is built")
def when_build_all(scenario_state: dict[str, object]) -> None:
    """Run a full build."""
    scenario_state["report"] = run_build(scenario_state["config_path"])


@when("only course A is rebuilt")
def when_rebuild_a(scenario_state: dict[str, object]) -> None:
    """Rebuild course A alone."""
    scenario_state["report"] = run_build(scenario_state["config_path"], "A")


@then(parsers.parse("the index holds exactly {count:d} entries for course A"))
def then_entries_for_a(scenario_state: dict[str, object], count: int) -> None:
    """Course A appears in the index once per chapter."""
    titles = [
        entry["title"]
        for entry in _index_entries(scenario_state)
        if entry["course"] == "Course A"
    ]
    assert len(titles) == count
    assert titles == ["Limits", "Derivatives"]


@then("the index entry for course B is unchanged")
def then_b_unchanged(scenario_state: dict[str, object]) -> None:
    """Course B keeps the entry written by the first build."""
    before = [
        entry
        for entry in scenario_state["first_index"]
        if entry["course"] == "Course B"
    ]
    after = [
        entry
        for entry in _index_entries(scenario_state)
        if entry["course"] == "Course B"
    ]
    assert after == before
    assert len(after) == 1


@then("the chapter pages of course A are byte-identical to the first build")
def then_pages_identical(scenario_state: dict[str, object]) -> None:
    """Rebuilding unchanged notes reproduces the same files."""
    assert _course_pages(scenario_state) == scenario_state["first_pages"]


@then("the index holds no entries for course B")
def then_no_b(scenario_state: dict[str, object]) -> None:
    """A skipped course contributes nothing to the index."""
    assert all(
        entry["course"] != "Course B" for entry in _index_entries(scenario_state)
    )
    report = scenario_state["report"]
    assert [result.course_id for result in report.skipped] == ["B"]


@then("no page of course A contains an executable script from the course name")
def then_name_escaped(scenario_state: dict[str, object]) -> None:
    """The course name is rendered as text, never as markup."""
    name = scenario_state["course_name"]
    pages = _course_pages(scenario_state)
    assert pages, "expected generated pages"
    for path, payload in pages.items():
        html = payload.decode("utf-8")
        soup = BeautifulSoup(html, "html.parser")
        assert not [
            tag for tag in soup.find_all("script") if "alert(1)" in tag.get_text()
        ], f"unescaped course name in {path.name}"
        assert name not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
