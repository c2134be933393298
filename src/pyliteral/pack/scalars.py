"""
``pyliteral.pack.scalars``: Textual forms of the leaves of a document
=====================================================================

Scalars are written the way :func:`repr` would write them, with one important
difference: every character that isn't printable is escaped, including the
line and paragraph separators (``U+2028``/``U+2029``) that some editors and
diff tools treat as line breaks::

  >>> print(format_constant("line\\u2029break"))
  "line\\u2029break"
  >>> print(format_constant(b"\\x00\\xffabc"))
  b"\\x00\\xffabc"

Reading is the exact inverse::

  >>> read_string('"line\\\\u2029break"', 0)
  ('line\\u2029break', 17)

"""

from __future__ import annotations

import math
import re
import string
from typing import Final

from pyliteral import errors, utils

__all__ = (
    "Scalar",
    "format_constant",
    "format_str",
    "format_bytes",
    "format_int",
    "format_float",
    "read_string",
    "read_number",
)

Scalar = int | float | None | str | bytes | bool


def _pick_quote(has_double: bool, has_single: bool) -> str:
    # Same rule as `repr`, but we prefer double quotes.
    if has_double and not has_single:
        return "'"
    return '"'


_STR_ESCAPES: Final = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_BYTES_ESCAPES: Final = {ord(k): v for k, v in _STR_ESCAPES.items()}


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def format_str(value: str) -> str:
    quote = _pick_quote('"' in value, "'" in value)
    out = [quote]
    for ch in value:
        if ch in _STR_ESCAPES:
            out.append(_STR_ESCAPES[ch])
        elif ch == quote:
            out.append("\\" + ch)
        elif ch == " " or ch.isprintable():
            out.append(ch)
        else:
            out.append(_escape_char(ch))
    out.append(quote)
    return "".join(out)


def format_bytes(value: bytes) -> str:
    quote = _pick_quote(b'"' in value, b"'" in value)
    qcode = ord(quote)
    out = ["b", quote]
    for b in value:
        if b in _BYTES_ESCAPES:
            out.append(_BYTES_ESCAPES[b])
        elif b == qcode:
            out.append("\\" + quote)
        elif 0x20 <= b < 0x7F:
            out.append(chr(b))
        else:
            out.append(f"\\x{b:02x}")
    out.append(quote)
    return "".join(out)


def format_int(value: int) -> str:
    try:
        return str(value)
    except ValueError as e:
        # Python refuses to convert ints with too many digits.
        raise errors.IntegerTooLargeError(
            f"Cannot encode an int of {value.bit_length()} bits: {e}"
        ) from None


def format_float(value: float) -> str:
    if not math.isfinite(value):
        raise errors.NonFiniteFloatError(f"Cannot encode {value!r}")
    # `repr` gives the shortest string that reads back as the same double and
    # always contains a `.` or an exponent (so it doesn't read back as an int).
    return repr(value)


def format_constant(value: Scalar) -> str:
    match value:
        case None:
            return "None"
        case bool():
            return "True" if value else "False"
        case int():
            return format_int(value)
        case float():
            return format_float(value)
        case str():
            return format_str(value)
        case bytes():
            return format_bytes(value)
    raise errors.UnsupportedTypeError(
        f"Object of type {type(value).__name__} is not a scalar"
    )


# Decoding

_SIMPLE_UNESCAPES: Final = {
    "\\": "\\",
    "'": "'",
    '"': '"',
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_OCTDIGITS: Final = frozenset(string.octdigits)
_HEXDIGITS: Final = frozenset(string.hexdigits)

# Number of hex digits following the escape letter.
_HEX_ESCAPES: Final = {"x": 2, "u": 4, "U": 8}


def _read_escape(content: str, pos: int, is_bytes: bool) -> tuple[int, int]:
    """Decode the escape sequence starting at *pos* (the ``\\``).

    Returns the code point and the position following the escape.
    """
    start = pos
    pos += 1
    if pos >= len(content):
        utils.syntax_error(
            errors.UnterminatedStringError,
            "unterminated string literal",
            content,
            start,
        )
    ch = content[pos]
    if ch in _SIMPLE_UNESCAPES:
        return ord(_SIMPLE_UNESCAPES[ch]), pos + 1
    if ch in _OCTDIGITS:
        end = pos + 1
        while end < min(pos + 3, len(content)) and content[end] in _OCTDIGITS:
            end += 1
        code = int(content[pos:end], 8)
        if is_bytes and code > 0xFF:
            utils.syntax_error(
                errors.InvalidEscapeError,
                f"octal escape value \\{content[pos:end]} outside of range "
                "0-0o377",
                content,
                start,
                end,
            )
        return code, end
    ndigits = _HEX_ESCAPES.get(ch)
    if ndigits is None or (is_bytes and ch != "x"):
        utils.syntax_error(
            errors.InvalidEscapeError,
            f"invalid escape sequence '\\{ch}'",
            content,
            start,
            pos + 1,
        )
    digits = content[pos + 1 : pos + 1 + ndigits]
    end = pos + 1 + len(digits)
    if len(digits) != ndigits or not _HEXDIGITS.issuperset(digits):
        utils.syntax_error(
            errors.InvalidEscapeError,
            f"truncated \\{ch}{'X' * ndigits} escape",
            content,
            start,
            end,
        )
    code = int(digits, 16)
    if code > 0x10FFFF:
        utils.syntax_error(
            errors.InvalidEscapeError,
            f"illegal Unicode character \\{ch}{digits}",
            content,
            start,
            end,
        )
    return code, end


def read_string(content: str, start: int) -> tuple[str | bytes, int]:
    """Read the string or bytes literal starting at *start*.

    The literal may have a ``b``/``B`` prefix and use either kind of quotes.

    Returns:
      The decoded value and the position right after the closing quote.
    """
    pos = start
    is_bytes = content[pos] in "bB"
    if is_bytes:
        pos += 1
    quote = content[pos]
    assert quote in "'\"", quote
    pos += 1
    chunks: list[str] = []
    size = len(content)
    while True:
        if pos >= size or content[pos] in "\r\n":
            utils.syntax_error(
                errors.UnterminatedStringError,
                "unterminated string literal",
                content,
                start,
                pos,
            )
        ch = content[pos]
        if ch == quote:
            pos += 1
            break
        if ch == "\\":
            code, pos = _read_escape(content, pos, is_bytes)
            chunks.append(chr(code))
            continue
        if is_bytes and ord(ch) > 0x7F:
            utils.syntax_error(
                errors.UnexpectedCharacterError,
                "bytes can only contain ASCII literal characters",
                content,
                pos,
            )
        chunks.append(ch)
        pos += 1
    res = "".join(chunks)
    if is_bytes:
        # All the code points are < 0x100 at this point
        return res.encode("latin-1"), pos
    return res, pos


_DIGITS = r"[0-9](?:_?[0-9])*"
_EXPONENT = rf"[eE][+-]?{_DIGITS}"

_INT_RE: Final = re.compile(r"[+-]?(?:0(?:_?0)*|[1-9](?:_?[0-9])*)")
_FLOAT_RE: Final = re.compile(
    rf"[+-]?(?:(?:{_DIGITS})?\.{_DIGITS}(?:{_EXPONENT})?"
    rf"|{_DIGITS}\.(?:{_EXPONENT})?"
    rf"|{_DIGITS}{_EXPONENT})"
)


def _number_end(content: str, start: int) -> int:
    "Find the end of the number-like token starting at *start*"
    pos = start
    size = len(content)
    if content[pos] in "+-":
        pos += 1
    while pos < size:
        ch = content[pos]
        if ch.isalnum() or ch in "_.":
            pos += 1
        elif ch in "+-" and content[pos - 1] in "eE":
            pos += 1
        else:
            break
    return pos


def read_number(content: str, start: int) -> tuple[int | float, int]:
    """Read the int or float literal starting at *start*.

    >>> read_number("[-1_000, 2]", 1)
    (-1000, 7)
    >>> read_number("1.5e3", 0)
    (1500.0, 5)
    """
    end = _number_end(content, start)
    token = content[start:end]
    try:
        if _INT_RE.fullmatch(token):
            return int(token), end
        if _FLOAT_RE.fullmatch(token):
            res = float(token)
            if math.isfinite(res):
                return res, end
            utils.syntax_error(
                errors.InvalidNumberError,
                f"float literal out of range: {utils.cram(token, 40)}",
                content,
                start,
                end,
            )
    except ValueError as e:
        # Python refuses to convert really long ints.
        utils.syntax_error(
            errors.InvalidNumberError, str(e), content, start, end
        )
    utils.syntax_error(
        errors.InvalidNumberError,
        f"invalid decimal literal: {utils.cram(token, 40)!r}",
        content,
        start,
        end,
    )
