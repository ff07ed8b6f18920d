"""Course page templating.

This module turns rendered chapter bodies into the standalone article pages of
a course and renders the course homepage that lists them. It wires the site
theme, the Jinja environment and the table-of-contents partial; filesystem
writes are left to :class:`~course_pages.generator.course_builder.CourseBuilder`.

Typical usage mirrors the build pipeline:

>>> from course_pages.config import SiteTheme
>>> templater = PageTemplater(SiteTheme())
>>> templater.render_toc([], "Intro")
''

Templates live under ``course_pages/templates`` unless a custom directory is
provided. Autoescape is always on: every course field and title substituted
into a page is escaped, while the table of contents and chapter body are
inserted as already-rendered HTML.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from course_pages.config import CommentsConfig, CourseConfig, SiteTheme

    from .models import ChapterRecord, TocEntry


class PageTemplater:
    """Render chapter pages and course homepages from Jinja templates."""

    def __init__(
        self,
        theme: SiteTheme,
        *,
        comments: CommentsConfig | None = None,
        pygments_css: str = "",
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the templater and Jinja environment.

        Parameters
        ----------
        theme : SiteTheme
            Site chrome (stylesheets, include placeholders, MathJax URL).
        comments : CommentsConfig, optional
            Giscus settings; chapter pages carry no comments block when
            ``None``.
        pygments_css : str, optional
            Stylesheet for highlighted code blocks, inlined into chapter pages.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``course_pages/templates``.
        """
        self.theme = theme
        self.comments = comments
        self.pygments_css = pygments_css
        self.templates_dir = (
            templates_dir or Path(__file__).resolve().parents[1] / "templates"
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.toc_template = self.env.get_template("toc.jinja")
        self.chapter_template = self.env.get_template("chapter_page.jinja")
        self.homepage_template = self.env.get_template("course_homepage.jinja")

    def render_toc(self, entries: cabc.Sequence[TocEntry], page_title: str) -> str:
        """Render the table of contents, or ``""`` when there are no headings."""
        if not entries:
            return ""
        return self.toc_template.render(entries=entries, page_title=page_title)

    def render_chapter_page(
        self,
        course: CourseConfig,
        page_title: str,
        toc_html: str,
        body_html: str,
        chapter_index: int,
    ) -> str:
        """Render a complete HTML document for one chapter.

        Parameters
        ----------
        course : CourseConfig
            Course the chapter belongs to; supplies author, category and the
            course name used in page metadata.
        page_title : str
            Cleaned chapter title (escaped on output).
        toc_html : str
            Output of :meth:`render_toc`; an empty string omits the block.
        body_html : str
            Rendered chapter body with heading anchors already injected.
        chapter_index : int
            Zero-based chapter position, recorded on the page root.

        Returns
        -------
        str
            The page markup, terminated by a newline.
        """
        html = self.chapter_template.render(
            course=course,
            theme=self.theme,
            comments=self.comments,
            pygments_css=self.pygments_css,
            page_title=page_title,
            html_title=page_title,
            meta_description=f"{page_title} - {course.course_name}",
            meta_author=course.author,
            toc_html=toc_html,
            body_html=body_html,
            chapter_index=chapter_index,
        )
        return _ensure_newline(html)

    def render_homepage(
        self,
        course: CourseConfig,
        chapters: cabc.Sequence[ChapterRecord],
        listed_on: str,
    ) -> str:
        """Render the course homepage listing ``chapters`` in build order.

        ``listed_on`` is the ``YY/MM`` stamp shown beside every entry.
        """
        html = self.homepage_template.render(
            course=course,
            theme=self.theme,
            chapters=chapters,
            listed_on=listed_on,
            html_title=course.course_name,
            meta_description=course.course_name,
            meta_author="",
        )
        return _ensure_newline(html)


def _ensure_newline(html: str) -> str:
    return html if html.endswith("\n") else f"{html}\n"


__all__ = ["PageTemplater"]
