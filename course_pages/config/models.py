"""Typed dataclasses describing course build configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import ARTICLES_INDEX_FILENAME


class SiteConfigError(ValueError):
    """Raised when the course configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteTheme:
    """Site chrome shared by every generated page."""

    lang: str = "zh-cmn-Hans"
    category_href: str = "/Category/LearningHomepage.html"
    author_label: str = "作者: "
    favicon: str = "/images/blog-logo.png"
    mathjax_url: str = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
    include_script: str = "/assets/js/include.js"
    nav_include: str = "/includes/nav.html"
    footer_include: str = "/includes/footer.html"
    pygments_style: str = "default"
    stylesheets: list[str] = dc.field(
        default_factory=lambda: [
            "/assets/css/global.css",
            "/assets/css/pace-theme-flash.css",
            "/assets/css/d-audio.css",
            "/assets/css/article-detail.css",
            "/assets/css/code.css",
            "/assets/css/github-markdown.css",
            "/assets/css/vditor.css",
            "/assets/css/markdown.css",
        ]
    )
    homepage_stylesheets: list[str] = dc.field(
        default_factory=lambda: [
            "/assets/css/global.css",
            "/assets/css/pace-theme-flash.css",
            "/assets/css/d-audio.css",
            "/assets/css/myPagination.css",
            "/assets/css/archive.css",
            "/assets/css/index.css",
        ]
    )


@dc.dataclass(slots=True)
class CommentsConfig:
    """Giscus discussion widget attributes appended to chapter pages."""

    repo: str
    repo_id: str
    category: str
    category_id: str
    mapping: str = "pathname"
    theme: str = "light"
    lang: str = "zh-CN"


@dc.dataclass(frozen=True, slots=True)
class CourseConfig:
    """A fully resolved course definition sourced from the build config.

    Attributes
    ----------
    course_id : str
        Short identifier used for ``--course`` selection and output filenames.
    course_name : str
        Display name; also the ``course`` key of article index entries.
    author : str
        Author shown on every chapter page.
    category : str
        Category label linked from chapter pages.
    description : str
        Blurb shown on the course homepage.
    source : Path
        Markdown document holding the whole course.
    output_dir : str
        POSIX directory, relative to the project root, receiving the pages.
    """

    course_id: str
    course_name: str
    author: str
    category: str
    description: str
    source: Path
    output_dir: str

    def chapter_filename(self, index: int) -> str:
        """Return the page filename for the chapter at ``index``."""
        return f"{self.course_id}{index}.html"

    def chapter_url(self, index: int) -> str:
        """Return the site-absolute URL of the chapter at ``index``."""
        return f"/{self.output_dir.strip('/')}/{self.chapter_filename(index)}"


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of course configs alongside shared site settings."""

    courses: list[CourseConfig]
    project_root: Path = Path()
    index_path: Path = Path(ARTICLES_INDEX_FILENAME)
    theme: SiteTheme = dc.field(default_factory=SiteTheme)
    comments: CommentsConfig | None = None

    def get_course(self, course_id: str) -> CourseConfig:
        """Return the course registered under ``course_id``.

        Raises
        ------
        SiteConfigError
            If no configured course uses ``course_id``.
        """
        for course in self.courses:
            if course.course_id == course_id:
                return course
        available = ", ".join(course.course_id for course in self.courses)
        msg = f"Unknown course '{course_id}'. Known courses: {available}"
        raise SiteConfigError(msg)


__all__ = [
    "CommentsConfig",
    "CourseConfig",
    "SiteConfig",
    "SiteConfigError",
    "SiteTheme",
]
