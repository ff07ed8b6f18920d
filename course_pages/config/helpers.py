"""Utility helpers shared by the course configuration loader."""

from __future__ import annotations

import typing as typ

from .models import CommentsConfig, SiteConfigError, SiteTheme

COURSE_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "course_id": ("courseId", "course_id", "id"),
    "course_name": ("courseName", "course_name", "name"),
    "author": ("author",),
    "category": ("category",),
    "description": ("description",),
    "source": ("source",),
    "output_dir": ("outputDir", "output_dir"),
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _lookup(payload: typ.Mapping[str, typ.Any], field: str) -> typ.Any:
    """Return the value stored under any accepted spelling of ``field``."""
    for alias in COURSE_KEY_ALIASES.get(field, (field,)):
        if alias in payload:
            return payload[alias]
    return None


def _require_str(payload: typ.Mapping[str, typ.Any], field: str, where: str) -> str:
    """Return a non-empty string field or raise ``SiteConfigError``."""
    value = _optional_str(_lookup(payload, field))
    if value is None:
        spelling = COURSE_KEY_ALIASES.get(field, (field,))[0]
        msg = f"{where} is missing '{spelling}'."
        raise SiteConfigError(msg)
    return value


def _string_list(value: object, fallback: list[str]) -> list[str]:
    """Normalize a YAML sequence into a list of non-empty strings."""
    if not isinstance(value, list):
        return list(fallback)
    return [text for item in value if (text := _optional_str(item))]


def _require_mapping(payload: object, where: str) -> typ.Mapping[str, typ.Any]:
    """Return ``payload`` when it is a mapping or raise ``SiteConfigError``."""
    if not isinstance(payload, dict):
        msg = f"'{where}' must be a mapping."
        raise SiteConfigError(msg)
    return payload


def _build_theme(payload: object | None) -> SiteTheme:
    """Build a SiteTheme from the ``defaults.theme`` mapping, if any."""
    base = SiteTheme()
    if not payload:
        return base
    settings = _require_mapping(payload, "defaults.theme")
    return SiteTheme(
        lang=settings.get("lang", base.lang),
        category_href=settings.get("category_href", base.category_href),
        author_label=settings.get("author_label", base.author_label),
        favicon=settings.get("favicon", base.favicon),
        mathjax_url=settings.get("mathjax_url", base.mathjax_url),
        include_script=settings.get("include_script", base.include_script),
        nav_include=settings.get("nav_include", base.nav_include),
        footer_include=settings.get("footer_include", base.footer_include),
        pygments_style=settings.get("pygments_style", base.pygments_style),
        stylesheets=_string_list(settings.get("stylesheets"), base.stylesheets),
        homepage_stylesheets=_string_list(
            settings.get("homepage_stylesheets"), base.homepage_stylesheets
        ),
    )


def _build_comments(payload: object | None) -> CommentsConfig | None:
    """Build the optional Giscus settings, requiring the repository identifiers."""
    if not payload:
        return None
    settings = _require_mapping(payload, "defaults.comments")
    where = "Comments configuration"
    return CommentsConfig(
        repo=_require_str(settings, "repo", where),
        repo_id=_require_str(settings, "repo_id", where),
        category=_require_str(settings, "category", where),
        category_id=_require_str(settings, "category_id", where),
        mapping=settings.get("mapping", "pathname"),
        theme=settings.get("theme", "light"),
        lang=settings.get("lang", "zh-CN"),
    )


__all__ = [
    "COURSE_KEY_ALIASES",
    "_build_comments",
    "_build_theme",
    "_lookup",
    "_optional_str",
    "_require_mapping",
    "_require_str",
    "_string_list",
]
