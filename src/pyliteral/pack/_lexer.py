"""
Tokenizer for ``pyliteral.pack.text``
=====================================

A single pass over the text that skips whitespace and comments and yields
:class:`Token`. The values of the scalar tokens are already decoded::

  >>> [(t.kind.name, t.value) for t in tokenize("[1, 'a'] # done")]
  [('LBRACKET', '['), ('INT', 1), ('COMMA', ','), ('STRING', 'a'), \
('RBRACKET', ']'), ('EOF', None)]

"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Final, Iterator

from pyliteral import errors, utils

from . import scalars

__all__ = ("Kind", "Token", "tokenize")


class Kind(enum.Enum):
    LBRACKET = enum.auto()
    RBRACKET = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    STRING = enum.auto()
    BYTES = enum.auto()
    INT = enum.auto()
    FLOAT = enum.auto()
    NAME = enum.auto()
    EOF = enum.auto()


_PUNCTUATION: Final = {
    "[": Kind.LBRACKET,
    "]": Kind.RBRACKET,
    "(": Kind.LPAREN,
    ")": Kind.RPAREN,
    "{": Kind.LBRACE,
    "}": Kind.RBRACE,
    ",": Kind.COMMA,
    ":": Kind.COLON,
}

#: The only names that can appear in a document
NAMES: Final = {"None": None, "True": True, "False": False}

_WHITESPACE: Final = frozenset(" \t\n\r\f\v")


@dataclasses.dataclass(slots=True, frozen=True)
class Token:
    kind: Kind
    value: Any
    #: Offsets of the token in the source text
    start: int
    end: int

    def describe(self) -> str:
        "Short description used in error messages"
        if self.kind == Kind.EOF:
            return "end of input"
        return repr(utils.cram(str(self.value), 40))


def _skip_blanks(content: str, pos: int) -> int:
    size = len(content)
    while pos < size:
        ch = content[pos]
        if ch in _WHITESPACE:
            pos += 1
        elif ch == "#":
            eol = content.find("\n", pos)
            pos = size if eol == -1 else eol + 1
        else:
            break
    return pos


def _name_end(content: str, pos: int) -> int:
    size = len(content)
    while pos < size and (content[pos].isalnum() or content[pos] == "_"):
        pos += 1
    return pos


def tokenize(content: str) -> Iterator[Token]:
    pos = 0
    while True:
        pos = _skip_blanks(content, pos)
        if pos >= len(content):
            yield Token(Kind.EOF, None, pos, pos)
            return
        start = pos
        ch = content[pos]
        kind = _PUNCTUATION.get(ch)
        if kind is not None:
            pos += 1
            yield Token(kind, ch, start, pos)
        elif ch in "'\"" or (
            ch in "bB" and content[pos + 1 : pos + 2] in ("'", '"')
        ):
            value, pos = scalars.read_string(content, start)
            kind = Kind.BYTES if isinstance(value, bytes) else Kind.STRING
            yield Token(kind, value, start, pos)
        elif ch.isdigit() or ch in "+-.":
            number, pos = scalars.read_number(content, start)
            kind = Kind.FLOAT if isinstance(number, float) else Kind.INT
            yield Token(kind, number, start, pos)
        elif ch.isalpha() or ch == "_":
            pos = _name_end(content, pos)
            name = content[start:pos]
            if name not in NAMES:
                utils.syntax_error(
                    errors.UnexpectedTokenError,
                    f"unknown name {utils.cram(name, 40)!r}",
                    content,
                    start,
                    pos,
                )
            yield Token(Kind.NAME, NAMES[name], start, pos)
        else:
            utils.syntax_error(
                errors.UnexpectedCharacterError,
                f"invalid character {ch!r} (U+{ord(ch):04X})",
                content,
                start,
            )
