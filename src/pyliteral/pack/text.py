"""
``pyliteral.pack.text``: Human readable serialisation
====================================================

Values are written as python literals::

  >>> print(dump_text({"name": "名称", "mtime": (1635745617.7, -25200)}))
  {"name": "名称", "mtime": (1635745617.7, -25200)}

and read back without ever calling :func:`eval`::

  >>> load_text('{"name": "名称", "mtime": (1635745617.7, -25200)}')
  {'name': '名称', 'mtime': (1635745617.7, -25200)}

"""

from __future__ import annotations

import enum
import io
import itertools
import typing
from typing import Any, Final, Iterable, Iterator, TextIO, TypeVar

from pyliteral import errors, pretty, utils

from . import _lexer, base, scalars, tree
from ._lexer import Kind, Token

T = TypeVar("T")
V = TypeVar("V")

__all__ = (
    "dump_text",
    "load_text",
    "dump",
    "load",
    "encode_compact",
    "encode_pretty",
    "decode",
    "reduce_text",
    "CompactPrinter",
    "PrettyPrinter",
    "Format",
    "DEFAULT_WIDTH",
)

#: Same default as :mod:`pprint`
DEFAULT_WIDTH: Final = 79


class Format(enum.Enum):
    """Which format to use for :func:`dump_text`"""

    #: Print the value on one line with no breaks.
    COMPACT = enum.auto()

    #: Pretty print the value.
    PRETTY = enum.auto()


COMPACT: Final = Format.COMPACT
PRETTY: Final = Format.PRETTY


COL_SEP = pretty.text(",") + pretty.BREAK


class CompactPrinter(base.Accumulator[pretty.Doc, str]):
    "Serialize a value as a human readable text."

    def format_list(
        self,
        docs: Iterable[pretty.Doc],
        *,
        opar: str,
        cpar: str,
        is_tuple: bool = False,
    ) -> pretty.Doc:
        acc = pretty.EMPTY
        count = 0
        for doc in docs:
            if count:
                acc += pretty.text(", ")
            count += 1
            acc += doc
        if is_tuple and count == 1:
            acc += pretty.text(",")
        return pretty.text(opar) + acc + pretty.text(cpar)

    def entry(self, key: pretty.Doc, value: pretty.Doc) -> pretty.Doc:
        return key + pretty.text(": ") + value

    def constant(
        self, constant: int | float | None | str | bytes | bool
    ) -> pretty.Doc:
        return pretty.text(scalars.format_constant(constant))

    def mapping(
        self, items: Iterator[tuple[pretty.Doc, pretty.Doc]]
    ) -> pretty.Doc:
        return self.format_list(
            (self.entry(k, v) for k, v in items), opar="{", cpar="}"
        )

    def sequence(self, items: Iterator[pretty.Doc]) -> pretty.Doc:
        return self.format_list(items, opar="[", cpar="]")

    def tuple(self, items: Iterator[pretty.Doc]) -> pretty.Doc:
        return self.format_list(items, opar="(", cpar=")", is_tuple=True)

    def root(self, doc: pretty.Doc) -> str:
        # We only use a very restricted subset of pretty.Doc that always prints
        # out to one line.
        out = io.StringIO()
        docs = [doc]
        while docs:
            match docs.pop():
                case pretty.DocNil():
                    continue
                case pretty.DocText(s):
                    out.write(s)
                case pretty.DocCons(left=l, right=r):
                    docs.append(r)
                    docs.append(l)
                case _:  # pragma: no cover
                    assert False
        return out.getvalue()


class PrettyPrinter(CompactPrinter):
    """Convert a value into a multiline document

    Containers that do not fit on the current line are broken with one element
    per line, aligned on the first element::

      >>> print(encode_pretty({"a": 1, "b": [1, 2, 3]}, max_width=12))
      {"a": 1,
       "b": [1,
             2,
             3]}
    """

    width: int

    def __init__(self, width: int = DEFAULT_WIDTH) -> None:
        if type(width) is not int or width < 1:
            raise ValueError(f"width should be a positive int: {width!r}")
        self.width = width

    def format_list(
        self,
        docs: Iterable[pretty.Doc],
        *,
        opar: str,
        cpar: str,
        is_tuple: bool = False,
    ) -> pretty.Doc:
        acc = pretty.EMPTY
        count = 0
        for doc in docs:
            if count:
                acc += COL_SEP
            count += 1
            acc += doc
        if count == 0:
            return pretty.text(opar + cpar)
        if is_tuple and count == 1:
            acc += pretty.text(",")
        return pretty.agrp(
            pretty.text(opar) + pretty.align(acc) + pretty.text(cpar)
        )

    def entry(self, key: pretty.Doc, value: pretty.Doc) -> pretty.Doc:
        # Keys are always printed on one line, the value starts right after
        # the ": ".
        return pretty.hgrp(key) + pretty.text(": ") + value

    def root(self, doc: pretty.Doc) -> str:
        return doc.to_string(self.width)


_CLOSERS: Final = {
    Kind.LBRACKET: Kind.RBRACKET,
    Kind.LPAREN: Kind.RPAREN,
    Kind.LBRACE: Kind.RBRACE,
}

_CLOSING_KINDS: Final = frozenset(_CLOSERS.values())


# TODO: report errors against the name of the stream given to `load` (when it
# has one) instead of a linecache entry.
def reduce_text(orig: str, acc: base.Accumulator[T, V]) -> V:
    """Parse *orig* and feed its nodes to *acc*.

    The grammar is the subset of python's literals produced by our printers:
    ``None``, ``True``, ``False``, decimal ints and floats, string and bytes
    literals, lists, tuples and dicts. Comments and trailing commas are
    allowed. ``(x)`` is a parenthesised value and ``(x,)`` a one element tuple.

    Raises:
      DecodeError: on the first problem found.
    """
    if not isinstance(orig, str):
        raise TypeError(
            f"Expected a str, got an object of type {type(orig).__name__}"
        )
    tokens = _lexer.tokenize(orig)

    constant = acc.constant
    sequence = acc.sequence
    mk_tuple = acc.tuple
    mapping = acc.mapping

    def error(
        exc_type: type[errors.DecodeError], message: str, token: Token
    ) -> typing.NoReturn:
        utils.syntax_error(exc_type, message, orig, token.start, token.end)

    def describe_opener(opener: Token) -> str:
        lineno, col = utils.position(orig, opener.start)
        return f"{opener.value!r} (line {lineno}, column {col})"

    def unexpected(
        token: Token, opener: Token | None, expected: str
    ) -> typing.NoReturn:
        if token.kind in _CLOSING_KINDS:
            if opener is None:
                error(
                    errors.BracketMismatchError,
                    f"unmatched {token.value!r}",
                    token,
                )
            if token.kind != _CLOSERS[opener.kind]:
                error(
                    errors.BracketMismatchError,
                    f"closing parenthesis {token.value!r} does not match "
                    f"opening parenthesis {describe_opener(opener)}",
                    token,
                )
        error(
            errors.UnexpectedTokenError,
            f"expected {expected}, got {token.describe()}",
            token,
        )

    def next_token(opener: Token) -> Token:
        token = next(tokens)
        if token.kind == Kind.EOF:
            error(
                errors.BracketMismatchError,
                f"{describe_opener(opener)} was never closed",
                token,
            )
        return token

    def _gen_items(opener: Token, closer: Kind) -> Iterator[T]:
        token = next_token(opener)
        while token.kind != closer:
            yield reduce(token, opener)
            token = next_token(opener)
            if token.kind == Kind.COMMA:
                token = next_token(opener)
            elif token.kind != closer:
                unexpected(token, opener, "','")

    def _gen_kv(opener: Token) -> Iterator[tuple[T, T]]:
        token = next_token(opener)
        while token.kind != Kind.RBRACE:
            ek = reduce(token, opener)
            token = next_token(opener)
            if token.kind != Kind.COLON:
                unexpected(token, opener, "':'")
            ev = reduce(next_token(opener), opener)
            yield (ek, ev)
            token = next_token(opener)
            if token.kind == Kind.COMMA:
                token = next_token(opener)
            elif token.kind != Kind.RBRACE:
                unexpected(token, opener, "','")

    def reduce_paren(opener: Token) -> T:
        token = next_token(opener)
        if token.kind == Kind.RPAREN:
            return mk_tuple(iter(()))
        if token.kind == Kind.COMMA:
            error(
                errors.MalformedTupleError,
                "a one element tuple is written '(value,)'",
                token,
            )
        first = reduce(token, opener)
        token = next_token(opener)
        if token.kind == Kind.RPAREN:
            # Parenthesised value, not a tuple.
            return first
        if token.kind != Kind.COMMA:
            unexpected(token, opener, "','")
        return mk_tuple(
            itertools.chain((first,), _gen_items(opener, Kind.RPAREN))
        )

    def reduce(token: Token, opener: Token | None) -> T:
        match token.kind:
            case Kind.INT | Kind.FLOAT | Kind.STRING | Kind.BYTES | Kind.NAME:
                return constant(token.value)
            case Kind.LBRACKET:
                return sequence(_gen_items(token, Kind.RBRACKET))
            case Kind.LBRACE:
                return mapping(_gen_kv(token))
            case Kind.LPAREN:
                return reduce_paren(token)
            case Kind.EOF:
                error(
                    errors.UnexpectedEndError, "unexpected end of input", token
                )
        unexpected(token, opener, "a value")

    first = next(tokens)
    if first.kind == Kind.EOF:
        error(errors.UnexpectedEndError, "Empty document", first)
    res = reduce(first, None)
    tail = next(tokens)
    if tail.kind != Kind.EOF:
        error(
            errors.TrailingDataError,
            f"unexpected {tail.describe()} after the end of the document",
            tail,
        )
    return acc.root(res)


def accumulator(
    width: int = DEFAULT_WIDTH, format: Format | None = None
) -> base.Accumulator[Any, str]:
    if format is None or format == Format.COMPACT:
        return CompactPrinter()
    assert format == Format.PRETTY, format
    return PrettyPrinter(width=width)


def encode_compact(value: Any) -> str:
    """Print *value* on one line.

    >>> print(encode_compact({"a": 1, "b": False}))
    {"a": 1, "b": False}
    """
    return tree.reduce_tree(value, CompactPrinter())


def encode_pretty(value: Any, max_width: int = DEFAULT_WIDTH) -> str:
    """Print *value* trying to keep every line under *max_width* characters.

    >>> print(encode_pretty({"a": 1, "b": False}, max_width=5))
    {"a": 1,
     "b": False}
    """
    return tree.reduce_tree(value, PrettyPrinter(width=max_width))


def decode(text: str) -> tree.Node:
    """Read a value, mappings are returned as :class:`~tree.Mapping`

    >>> decode("{1: 2,}")
    Mapping(data=[(1, 2)])
    """
    return reduce_text(text, tree.NodeBuilder())


def dump_text(
    obj: Any,
    width: int = DEFAULT_WIDTH,
    format: Format | None = None,
) -> str:
    """Serialise *obj*

    + :py:const:`~pyliteral.pack.COMPACT` (the default) means it will all be
      printed on one line.

      >>> v = {'values': [1, 2, 3, 4, 5], 'name': 'range'}
      >>> print(dump_text(v, format=COMPACT))
      {"values": [1, 2, 3, 4, 5], "name": "range"}

    + :py:const:`~pyliteral.pack.PRETTY` will use the *width* argument to pretty
      print the output.

      >>> print(dump_text(v, format=PRETTY, width=20))
      {"values": [1,
                  2,
                  3,
                  4,
                  5],
       "name": "range"}

    Args:
      obj: The value to serialise
      width(int): Maximum line length (for the :const:`~pyliteral.pack.PRETTY`
         format).
      format: One of :const:`None`, :const:`~pyliteral.pack.COMPACT`,
         :const:`~pyliteral.pack.PRETTY`.

    """
    return tree.reduce_tree(obj, accumulator(width=width, format=format))


def load_text(s: str) -> Any:
    """
    Load a value encoded as a string

    Mappings are loaded as :class:`dict`.

    Args:
      s (str):
    """
    return reduce_text(s, acc=base.RuntimeValueBuilder())


def dump(
    obj: Any,
    fp: TextIO,
    width: int = DEFAULT_WIDTH,
    format: Format | None = None,
) -> None:
    """Serialise *obj* to the text stream *fp*

    Nothing is written if *obj* cannot be serialised.
    """
    fp.write(dump_text(obj, width=width, format=format))


def load(fp: TextIO) -> Any:
    "Load the value stored in the text stream *fp*"
    return load_text(fp.read())
