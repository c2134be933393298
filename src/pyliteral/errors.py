"""``pyliteral.errors``: Exceptions raised while encoding and decoding
=================================================================

Encoding errors are :class:`ValueError` that know where, in the value being
encoded, the problem was found::

  >>> from pyliteral import encode_compact
  >>> encode_compact({"a": [1.0, float("nan")]})
  Traceback (most recent call last):
    ...
  pyliteral.errors.NonFiniteFloatError: Cannot encode nan at $['a'][1]

Decoding errors are :class:`SyntaxError`, one subclass per kind of problem.
They carry the usual ``lineno``, ``offset``, ``end_lineno`` and
``end_offset`` along with ``pos``: the 0-based offset of the error in the
decoded text.
"""

from __future__ import annotations

from typing import Any

from pyliteral import utils

__all__ = (
    "EncodeError",
    "NonFiniteFloatError",
    "RecursiveValueError",
    "UnsupportedTypeError",
    "IntegerTooLargeError",
    "DecodeError",
    "UnexpectedEndError",
    "UnexpectedCharacterError",
    "UnexpectedTokenError",
    "UnterminatedStringError",
    "InvalidEscapeError",
    "InvalidNumberError",
    "BracketMismatchError",
    "TrailingDataError",
    "MalformedTupleError",
)


class EncodeError(ValueError):
    """A value could not be turned into text.

    Attributes:
      reason(str): What went wrong.
      path(list): The sequence indices and mapping keys leading from the root
        of the encoded value to the culprit.
    """

    reason: str
    path: list[Any]

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.path = []

    def __str__(self) -> str:
        return f"{self.reason} at {utils.format_path(self.path)}"


class NonFiniteFloatError(EncodeError):
    "nan and infinities do not have a literal representation."


class RecursiveValueError(EncodeError):
    "A container holds a reference to itself."


class UnsupportedTypeError(EncodeError, TypeError):
    "The value is not part of the data model."


class IntegerTooLargeError(EncodeError):
    """The int has more digits than python will convert to a string.

    See :func:`sys.set_int_max_str_digits`. The reader has the same limit.
    """


class DecodeError(SyntaxError):
    """Base class of all the errors raised while reading text."""

    #: 0-based offset of the error in the decoded text
    pos: int = 0


class UnexpectedEndError(DecodeError):
    pass


class UnexpectedCharacterError(DecodeError):
    pass


class UnexpectedTokenError(DecodeError):
    pass


class UnterminatedStringError(DecodeError):
    pass


class InvalidEscapeError(DecodeError):
    pass


class InvalidNumberError(DecodeError):
    pass


class BracketMismatchError(DecodeError):
    "A closing bracket doesn't match its opener or is missing altogether."


class TrailingDataError(DecodeError):
    pass


class MalformedTupleError(DecodeError):
    pass
