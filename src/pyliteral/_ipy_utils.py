"""HTML rendering of literals for IPython's rich display"""
from __future__ import annotations

import functools
from typing import Any, Iterable, Iterator

import pygments
import pygments.formatters
import pygments.lexers

CSS_CLASS = "pyliteral-highlight"

#: Longest one line representation shown in full
MAX_INLINE = 120


@functools.lru_cache()
def style_defs() -> str:
    "The ``<style>`` block the highlighted snippets rely on."
    formatter = pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)
    rules: str = formatter.get_style_defs(f".{CSS_CLASS}")
    return f"<style>{rules}</style>"


class _InlineFormatter(
    pygments.formatters.HtmlFormatter  # type: ignore[type-arg]
):
    "Wraps the tokens in a ``<code>`` instead of a ``<pre>`` block."

    def wrap(
        self, source: Iterable[tuple[int, str]], *args: Any, **kwargs: Any
    ) -> Iterator[tuple[int, str]]:
        yield 0, (
            f'<code class="{self.cssclass}" '
            'style="background-color: transparent">'
        )
        for is_code, fragment in source:
            yield is_code, fragment.rstrip("\n")
        yield 0, "</code>"


@functools.lru_cache()
def _formatter(inline: bool) -> Any:
    if inline:
        return _InlineFormatter(cssclass=CSS_CLASS)
    return pygments.formatters.HtmlFormatter(cssclass=CSS_CLASS)


def to_html(code: str, inline: bool = False) -> str:
    res: str = pygments.highlight(
        code, pygments.lexers.PythonLexer(), _formatter(inline)
    )
    return res


def elide(rep: str, limit: int = MAX_INLINE) -> str:
    """Cut the middle out of *rep* if it is longer than *limit*.

    >>> elide("[0, 1, 2, 3, 4, 5, 6, 7]", limit=16)
    '[0, 1,... 6, 7]'
    """
    if len(rep) <= limit:
        return rep
    keep = (limit - 3) // 2
    return f"{rep[:keep]}...{rep[len(rep) - keep:]}"


def summarize(rep: str) -> str:
    "Inline html for a one line representation"
    return to_html(elide(rep), inline=True)
