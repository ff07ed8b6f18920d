"""Load course build configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .._constants import ARTICLES_INDEX_FILENAME
from .helpers import (
    _build_comments,
    _build_theme,
    _lookup,
    _optional_str,
    _require_mapping,
    _require_str,
)
from .models import CourseConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the courses to build.

    Parameters
    ----------
    path : Path
        Filesystem path to the build configuration. The file may be either a
        bare sequence of course mappings (the legacy ``build-config.json``
        layout, which YAML 1.2 reads as-is) or a mapping with ``defaults`` and
        ``courses`` keys.

    Returns
    -------
    SiteConfig
        Parsed configuration with courses in file order. Relative ``source``
        and ``outputDir`` values are resolved against the configuration file's
        directory, which becomes ``SiteConfig.project_root``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the file cannot be read or parsed, defines no courses, repeats a
        course id, omits a required course field, or gives a setting of the
        wrong shape.

    Examples
    --------
    >>> from pathlib import Path
    >>> from course_pages.config import load_site_config
    >>> config = load_site_config(Path("build-config.yaml"))  # doctest: +SKIP
    >>> [course.course_id for course in config.courses]  # doctest: +SKIP
    ['BMStats']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except YAMLError as exc:
        msg = f"Configuration file '{path}' could not be parsed: {exc}"
        raise SiteConfigError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Configuration file '{path}' could not be read: {exc}"
        raise SiteConfigError(msg) from exc

    project_root = path.resolve().parent
    match loaded:
        case list():
            raw: dict[str, typ.Any] = {"courses": loaded}
        case dict():
            raw = dict(loaded)
        case _:
            msg = "Top-level YAML structure must be a sequence or a mapping."
            raise SiteConfigError(msg)

    defaults = _require_mapping(raw.get("defaults") or {}, "defaults")
    course_defaults = _CourseDefaults(
        author=_optional_str(defaults.get("author")) or "",
        category=_optional_str(defaults.get("category")) or "",
        description=_optional_str(defaults.get("description")) or "",
    )

    courses_raw = raw.get("courses") or []
    if not isinstance(courses_raw, list) or not courses_raw:
        msg = "No courses defined in build configuration."
        raise SiteConfigError(msg)

    courses: list[CourseConfig] = []
    seen: set[str] = set()
    for position, payload in enumerate(courses_raw, start=1):
        if not isinstance(payload, dict):
            msg = f"Course entry #{position} must be a mapping."
            raise SiteConfigError(msg)
        course = _build_course_config(
            payload=payload,
            position=position,
            defaults=course_defaults,
            project_root=project_root,
        )
        if course.course_id in seen:
            msg = f"Course id '{course.course_id}' is defined more than once."
            raise SiteConfigError(msg)
        seen.add(course.course_id)
        courses.append(course)

    index_value = raw.get("index", defaults.get("index", ARTICLES_INDEX_FILENAME))
    return SiteConfig(
        courses=courses,
        project_root=project_root,
        index_path=_resolve_path(project_root, str(index_value)),
        theme=_build_theme(defaults.get("theme")),
        comments=_build_comments(defaults.get("comments")),
    )


@dc.dataclass(slots=True)
class _CourseDefaults:
    """Internal container for values shared by every course entry."""

    author: str
    category: str
    description: str


def _build_course_config(
    *,
    payload: typ.Mapping[str, typ.Any],
    position: int,
    defaults: _CourseDefaults,
    project_root: Path,
) -> CourseConfig:
    """Build a CourseConfig for a single course entry using defaults."""
    course_id = _require_str(payload, "course_id", f"Course entry #{position}")
    where = f"Course '{course_id}'"
    course_name = _require_str(payload, "course_name", where)
    source = _require_str(payload, "source", where)
    output_dir = _optional_str(_lookup(payload, "output_dir")) or f"courses/{course_id}"
    output_dir = output_dir.replace("\\", "/").strip("/")
    if not output_dir:
        msg = f"{where} has an empty 'outputDir'."
        raise SiteConfigError(msg)
    return CourseConfig(
        course_id=course_id,
        course_name=course_name,
        author=_optional_str(_lookup(payload, "author")) or defaults.author,
        category=_optional_str(_lookup(payload, "category")) or defaults.category,
        description=(
            _optional_str(_lookup(payload, "description")) or defaults.description
        ),
        source=_resolve_path(project_root, source),
        output_dir=output_dir,
    )


def _resolve_path(project_root: Path, value: str) -> Path:
    """Return ``value`` as a path anchored at ``project_root`` unless absolute."""
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return project_root / candidate


__all__ = ["load_site_config"]
