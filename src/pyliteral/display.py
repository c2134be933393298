"""``pyliteral.display``: Show values in a REPL or a notebook
===========================================================

:class:`Literal` wraps a value so it is displayed as its python literal::

  >>> v = Literal({"a": [1, 2, 3], "b": b"\\x00"}, width=12)
  >>> v
  Literal({"a": [1, 2, 3], "b": b"\\x00"})
  >>> print(v)
  {"a": [1,
         2,
         3],
   "b": b"\\x00"}

In IPython and jupyter the pretty printed form is syntax highlighted.
"""
from __future__ import annotations

from typing import Any

from .pack import text


class Literal:
    """Display *value* as a python literal.

    The value is encoded when the :class:`Literal` is created, so values that
    cannot be encoded are reported right away.
    """

    __slots__ = ("value", "width", "_compact", "_pretty")

    value: Any
    width: int

    def __init__(self, value: Any, width: int = text.DEFAULT_WIDTH) -> None:
        self.value = value
        self.width = width
        self._compact = text.encode_compact(value)
        self._pretty = text.encode_pretty(value, max_width=width)

    def __str__(self) -> str:
        return self._pretty

    def __repr__(self) -> str:
        return f"Literal({self._compact})"

    def _repr_html_(self) -> str:
        from . import _ipy_utils

        if "\n" in self._pretty:
            body = _ipy_utils.to_html(self._pretty)
        else:
            body = _ipy_utils.summarize(self._compact)
        return _ipy_utils.style_defs() + body
