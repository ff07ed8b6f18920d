"""Build one course's chapter pages, homepage and article metadata.

This module coordinates reading a course's markdown source, splitting it into
chapters, rendering each chapter with :class:`HtmlContentRenderer`, anchoring
its headings, and writing themed HTML through :class:`PageTemplater`. It
exposes :class:`CourseBuilder`, which consumes a
:class:`~course_pages.config.CourseConfig` and returns the
:class:`~course_pages.generator.models.Article` records that feed the
cross-course article index.

Example
-------
>>> from pathlib import Path
>>> from course_pages.config import load_site_config
>>> from course_pages.generator import CourseBuilder
>>> site = load_site_config(Path("build-config.yaml"))  # doctest: +SKIP
>>> course = site.get_course("BMStats")  # doctest: +SKIP
>>> builder = CourseBuilder.from_site(site, course)  # doctest: +SKIP
>>> builder.run().written  # doctest: +SKIP
[PosixPath('courses/BMStats/BMStats0.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from course_pages._constants import HOMEPAGE_FILENAME
from course_pages.config import SiteTheme
from course_pages.generator.models import Article, ChapterRecord, CourseBuildResult
from course_pages.generator.renderer import HtmlContentRenderer
from course_pages.generator.templater import PageTemplater
from course_pages.generator.toc import extract_toc, inject_anchors
from course_pages.markdown_parser import Chapter, clean_title, split_chapters

if typ.TYPE_CHECKING:
    from pathlib import Path

    from course_pages.config import CommentsConfig, CourseConfig, SiteConfig

logger = logging.getLogger(__name__)


class CourseBuilder:
    """Split a course document and emit one themed HTML page per chapter."""

    def __init__(
        self,
        course: CourseConfig,
        *,
        project_root: Path,
        theme: SiteTheme | None = None,
        comments: CommentsConfig | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        course : CourseConfig
            Course to build: source document, output directory and metadata.
        project_root : Path
            Directory that ``course.output_dir`` is relative to.
        theme : SiteTheme, optional
            Site chrome for generated pages; defaults to :class:`SiteTheme`.
        comments : CommentsConfig, optional
            Giscus settings appended to chapter pages when provided.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.course = course
        self.project_root = project_root
        self.theme = theme or SiteTheme()
        self.renderer = HtmlContentRenderer(self.theme.pygments_style)
        self.templater = PageTemplater(
            self.theme,
            comments=comments,
            pygments_css=self.renderer.stylesheet,
            templates_dir=templates_dir,
        )

    @classmethod
    def from_site(cls, site: SiteConfig, course: CourseConfig) -> CourseBuilder:
        """Return a builder for ``course`` using the shared settings of ``site``."""
        return cls(
            course,
            project_root=site.project_root,
            theme=site.theme,
            comments=site.comments,
        )

    @property
    def output_dir(self) -> Path:
        """Directory receiving this course's pages."""
        return self.project_root / self.course.output_dir

    def run(self) -> CourseBuildResult:
        """Render every chapter and the course homepage to disk.

        Returns
        -------
        CourseBuildResult
            Articles and written paths in chapter order. When the source
            document is missing the result is marked skipped and carries no
            articles; the caller carries on with other courses.

        Notes
        -----
        Chapter ``i`` is written to ``<courseId><i>.html``. Indices follow the
        order of ``##`` headings in the source, so inserting a chapter
        renumbers every later page.
        """
        source = self.course.source
        logger.info("building %s (%s)", self.course.course_name, self.course.course_id)
        if not source.is_file():
            reason = f"source document '{source}' not found"
            logger.error("skipping %s: %s", self.course.course_id, reason)
            return CourseBuildResult(self.course.course_id, skipped_reason=reason)

        # Undecodable bytes become U+FFFD.
        text = source.read_text(encoding="utf-8", errors="replace")
        chapters = split_chapters(text)
        if chapters:
            logger.info("found %d chapters in %s", len(chapters), source)
        else:
            logger.warning("no '## ' chapters found in %s", source)

        out_dir = self.output_dir
        out_dir.mkdir(parents=True, exist_ok=True)

        result = CourseBuildResult(self.course.course_id)
        records: list[ChapterRecord] = []
        for index, chapter in enumerate(chapters):
            title, html = self._render_chapter(chapter, index)
            filename = self.course.chapter_filename(index)
            output_path = out_dir / filename
            output_path.write_text(html, encoding="utf-8")
            logger.debug("wrote %s (%s)", output_path, title)
            result.written.append(output_path)
            result.articles.append(
                Article(
                    title=title,
                    url=self.course.chapter_url(index),
                    course=self.course.course_name,
                    category=self.course.category,
                )
            )
            records.append(ChapterRecord(filename=filename, title=title))

        homepage_path = out_dir / HOMEPAGE_FILENAME
        homepage = self.templater.render_homepage(
            self.course, records, self._listed_on(source)
        )
        homepage_path.write_text(homepage, encoding="utf-8")
        result.written.append(homepage_path)
        return result

    def _render_chapter(self, chapter: Chapter, index: int) -> tuple[str, str]:
        """Return the cleaned title and full page HTML for ``chapter``."""
        title = clean_title(chapter.raw_title)
        body_html = self.renderer.markdown(chapter.body)
        toc_html = self.templater.render_toc(extract_toc(body_html, index), title)
        anchored = inject_anchors(body_html, index)
        page = self.templater.render_chapter_page(
            self.course, title, toc_html, anchored, index
        )
        return title, page

    @staticmethod
    def _listed_on(source: Path) -> str:
        """Return the ``YY/MM`` stamp of the source's last modification."""
        modified = dt.datetime.fromtimestamp(source.stat().st_mtime)  # noqa: DTZ006
        return modified.strftime("%y/%m")


__all__ = ["CourseBuilder"]
