"""``pyliteral.pretty``: Layout of nested documents
================================================

Documents are built with a handful of combinators and laid out with Christian
Lindig's "strictly pretty" algorithm [`pdf
<https://lindig.github.io/papers/strictly-pretty-2000.pdf>`_]: a group is
printed on one line when it fits, otherwise all of its breaks turn into
newlines.

The article indents broken lines relative to the enclosing block (``nest``).
We only have :func:`align`, which indents them to the column where the aligned
document starts; that is how :mod:`pprint` lines up the elements of a
container right after the opening bracket::

    >>> items = text("1") + text(",") + BREAK + text("2")
    >>> doc = agrp(text("[") + align(items) + text("]"))
    >>> print(doc.to_string(80))
    [1, 2]
    >>> print(doc.to_string(4))
    [1,
     2]

"""

from __future__ import annotations

import dataclasses
import enum
import io

__all__ = (
    "Doc",
    "EMPTY",
    "text",
    "BREAK",
    "align",
    "agrp",
    "hgrp",
)


class Mode(enum.Enum):
    "How the breaks of a group are rendered"
    FLAT = enum.auto()
    BREAK = enum.auto()
    # Decided when the group is laid out
    AUTO = enum.auto()


class Doc:
    """A document waiting to be laid out.

    Use the functions of this module to build documents and ``+`` to
    concatenate them.
    """

    def __add__(self, other: Doc) -> Doc:
        return DocCons(self, other)

    def to_string(self, width: int = 79) -> str:
        "Lay the document out, trying to stay within *width* columns."
        return to_string(width, self)


@dataclasses.dataclass(slots=True)
class DocNil(Doc):
    pass


@dataclasses.dataclass(slots=True)
class DocCons(Doc):
    left: Doc
    right: Doc


@dataclasses.dataclass(slots=True)
class DocText(Doc):
    text: str


@dataclasses.dataclass(slots=True)
class DocAlign(Doc):
    doc: Doc


@dataclasses.dataclass(slots=True)
class DocBREAK(Doc):
    text: str


@dataclasses.dataclass(slots=True)
class DocGroup(Doc):
    mode: Mode
    doc: Doc


#: The empty document
EMPTY: Doc = DocNil()


def text(s: str) -> Doc:
    "A fragment that is always printed as is. *s* shouldn't contain newlines."
    return DocText(s)


def align(doc: Doc) -> Doc:
    """Lines broken inside *doc* start at the column *doc* starts at.

    Args:
      doc(Doc):

    Returns:
      Doc:
    """
    return DocAlign(doc)


#: Either a space or a newline followed by the current indentation.
BREAK: Doc = DocBREAK(" ")


def hgrp(doc: Doc) -> Doc:
    "A group where the breaks are never turned into newlines."
    return DocGroup(Mode.FLAT, doc)


def agrp(doc: Doc) -> Doc:
    """
    BREAKs inside the group are either all turned into spaces or all turned
    into newlines, depending on whether the group fits on the line. A group
    nested in a flat group is always flat.

    Args:
      doc(Doc):

    Returns
      Doc:
    """
    return DocGroup(Mode.AUTO, doc)


# The layout works on a stack of frames (the top is the end of the list).
# `indent` is where lines broken in `doc` start and `mode` says how the breaks
# of `doc` are rendered.
@dataclasses.dataclass(slots=True, frozen=True)
class _Frame:
    indent: int
    mode: Mode
    doc: Doc


def _fits(width: int, head: Doc, stack: list[_Frame]) -> bool:
    """Whether *head* rendered flat fits in *width* columns.

    We keep on measuring the documents that follow (the frames of *stack*,
    which is left untouched) until we reach a break that will be a newline.
    That way a group's closing brackets and separators are accounted for.
    """
    todo: list[tuple[Mode, Doc]] = [(Mode.FLAT, head)]
    below = len(stack)
    while width >= 0:
        if todo:
            mode, doc = todo.pop()
        elif below:
            below -= 1
            mode, doc = stack[below].mode, stack[below].doc
        else:
            return True
        match doc:
            case DocNil():
                pass
            case DocCons(left, right):
                todo.append((mode, right))
                todo.append((mode, left))
            case DocAlign(inner):
                # Alignment only moves the newlines.
                todo.append((mode, inner))
            case DocGroup(_, inner):
                todo.append((Mode.FLAT, inner))
            case DocText(s):
                width -= len(s)
            case DocBREAK(s):
                if mode == Mode.BREAK:
                    return True
                width -= len(s)
            case _:  # pragma: no cover
                raise TypeError(doc)
    return False


def _layout(width: int, doc: Doc) -> str:
    out = io.StringIO()
    # Column of the next character we write.
    col = 0
    stack = [_Frame(0, Mode.BREAK, DocGroup(Mode.AUTO, doc))]
    while stack:
        frame = stack.pop()
        match frame.doc:
            case DocNil():
                pass
            case DocCons(left, right):
                stack.append(_Frame(frame.indent, frame.mode, right))
                stack.append(_Frame(frame.indent, frame.mode, left))
            case DocAlign(inner):
                stack.append(_Frame(col, frame.mode, inner))
            case DocText(s):
                out.write(s)
                col += len(s)
            case DocBREAK(s) if frame.mode == Mode.FLAT:
                out.write(s)
                col += len(s)
            case DocBREAK(_):
                out.write("\n" + " " * frame.indent)
                col = frame.indent
            case DocGroup(Mode.AUTO, inner) if frame.mode != Mode.FLAT:
                mode = (
                    Mode.FLAT
                    if _fits(width - col, inner, stack)
                    else Mode.BREAK
                )
                stack.append(_Frame(frame.indent, mode, inner))
            case DocGroup(Mode.AUTO, inner):
                stack.append(_Frame(frame.indent, Mode.FLAT, inner))
            case DocGroup(mode, inner):
                stack.append(_Frame(frame.indent, mode, inner))
            case _:  # pragma: no cover
                raise TypeError(frame.doc)
    return out.getvalue()


def to_string(width: int, doc: Doc) -> str:
    return _layout(width, doc)
