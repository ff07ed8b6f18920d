"""Utilities for rendering, anchoring, templating, and building course pages."""

from .course_builder import CourseBuilder
from .models import Article, ChapterRecord, CourseBuildResult, TocEntry
from .renderer import HtmlContentRenderer
from .templater import PageTemplater
from .toc import extract_toc, inject_anchors

__all__ = [
    "Article",
    "ChapterRecord",
    "CourseBuildResult",
    "CourseBuilder",
    "HtmlContentRenderer",
    "PageTemplater",
    "TocEntry",
    "extract_toc",
    "inject_anchors",
]
