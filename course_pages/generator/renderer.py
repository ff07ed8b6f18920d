"""Render chapter markdown to HTML with math kept intact for MathJax."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from course_pages.math_guard import protect_math, restore_math

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class HtmlContentRenderer:
    """Render markdown into HTML with GFM-style extensions and math protection.

    Newlines inside paragraphs become ``<br>`` (``nl2br``), fenced code blocks
    are highlighted by Pygments, and ``$...$`` / ``$$...$$`` spans survive
    rendering untouched apart from their MathJax delimiters.
    """

    def __init__(self, pygments_style: str = "default") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"default"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML, shielding math spans from the renderer."""
        guarded = protect_math(self._normalize_fenced_blocks(text))
        if not guarded.markdown.strip():
            return ""
        html = self._convert(guarded.markdown)
        html = self._annotate_codehilite(html, guarded.markdown)
        return restore_math(html, guarded.placeholders)

    def _convert(self, text: str) -> str:
        extensions = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "nl2br",
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
            output_format="html",
        )
        return md.convert(text)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        return FENCED_INDENT_PATTERN.sub(r"\1", text)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
