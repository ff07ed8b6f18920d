r"""Shield LaTeX math spans from markdown rendering and restore them afterwards.

Markdown renderers treat ``_``, ``*`` and ``\`` inside formulas as emphasis or
escapes, which mangles expressions before MathJax ever sees them. This module
swaps every ``$$...$$`` and ``$...$`` span for an inert placeholder before
rendering and puts the expression back, wrapped in the ``\[...\]`` /
``\(...\)`` delimiters MathJax expects, once HTML has been produced.

Example
-------
>>> from course_pages.math_guard import protect_math, restore_math
>>> guarded = protect_math("Energy $E = mc^2$ is conserved.")
>>> guarded.markdown
'Energy %%MATH-INLINE-0%% is conserved.'
>>> restore_math(guarded.markdown, guarded.placeholders)
'Energy \\(E = mc^2\\) is conserved.'
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import re
import typing as typ

PLACEHOLDER_PREFIX = "%%MATH-"
DISPLAY_MATH_PATTERN = re.compile(r"\$\$(.*?)\$\$", re.DOTALL)
INLINE_MATH_PATTERN = re.compile(r"\$([^$\n]+?)\$")
CODE_FENCE_PATTERN = re.compile(
    r"^([`~]{3,}).*?^\1[ \t]*$", re.MULTILINE | re.DOTALL
)


@dc.dataclass(frozen=True, slots=True)
class MathPlaceholder:
    """Placeholder token and the wrapped expression it stands for.

    Attributes
    ----------
    key : str
        Literal token inserted into the markdown, e.g. ``%%MATH-INLINE-3%%``.
    value : str
        Original expression wrapped in MathJax delimiters.
    """

    key: str
    value: str


@dc.dataclass(frozen=True, slots=True)
class GuardedMarkdown:
    """Markdown with math replaced by placeholders."""

    markdown: str
    placeholders: tuple[MathPlaceholder, ...]


def protect_math(markdown: str) -> GuardedMarkdown:
    """Replace display and inline math spans with unique placeholder tokens.

    Display spans are consumed first so a ``$$`` pair can never be read as two
    empty inline spans. Fenced code blocks are copied verbatim since Pygments
    would split a placeholder across token spans. Token numbering restarts for
    every call; chapters are rendered independently and must not share
    counters.

    Parameters
    ----------
    markdown : str
        Chapter markdown, possibly containing ``$$...$$`` and ``$...$`` spans.

    Returns
    -------
    GuardedMarkdown
        The rewritten markdown and the placeholders to hand to
        :func:`restore_math`. Unterminated spans are left untouched.
    """
    counter = itertools.count()
    placeholders: list[MathPlaceholder] = []

    def _guard(
        kind: str, opener: str, closer: str
    ) -> typ.Callable[[re.Match[str]], str]:
        def _replace(match: re.Match[str]) -> str:
            key = f"{PLACEHOLDER_PREFIX}{kind}-{next(counter)}%%"
            placeholders.append(
                MathPlaceholder(key=key, value=f"{opener}{match.group(1)}{closer}")
            )
            return key

        return _replace

    display = _guard("DISPLAY", r"\[", r"\]")
    inline = _guard("INLINE", r"\(", r"\)")

    def _guard_prose(prose: str) -> str:
        return INLINE_MATH_PATTERN.sub(inline, DISPLAY_MATH_PATTERN.sub(display, prose))

    pieces: list[str] = []
    cursor = 0
    for fence in CODE_FENCE_PATTERN.finditer(markdown):
        pieces.append(_guard_prose(markdown[cursor : fence.start()]))
        pieces.append(fence.group(0))
        cursor = fence.end()
    pieces.append(_guard_prose(markdown[cursor:]))
    return GuardedMarkdown(markdown="".join(pieces), placeholders=tuple(placeholders))


def restore_math(html: str, placeholders: tuple[MathPlaceholder, ...]) -> str:
    """Swap placeholder tokens in rendered ``html`` back to wrapped math."""
    for placeholder in placeholders:
        html = html.replace(placeholder.key, placeholder.value)
    return html


__all__ = [
    "GuardedMarkdown",
    "MathPlaceholder",
    "PLACEHOLDER_PREFIX",
    "protect_math",
    "restore_math",
]
