from __future__ import annotations

import dataclasses
from typing import Any

from pyliteral import pretty

COMMA = pretty.text(",") + pretty.BREAK


@dataclasses.dataclass
class Add:
    left: Any
    right: Any


def mk_doc(v):
    match v:
        case []:
            return pretty.text("[]")
        case list(z):
            acc = pretty.EMPTY
            first = True
            for x in z:
                if not first:
                    acc += COMMA
                else:
                    first = False
                acc += mk_doc(x)
            return pretty.agrp(
                pretty.text("[") + pretty.align(acc) + pretty.text("]")
            )
        case int(i):
            return pretty.text(str(i))
        case Add(l, r):
            return (
                pretty.agrp(mk_doc(l) + pretty.BREAK + pretty.text("+"))
                + pretty.BREAK
                + mk_doc(r)
            )


def pp(v, width=20):
    return mk_doc(v).to_string(width)


L10 = """\
[0,
 1,
 2,
 3,
 4,
 5,
 6,
 7,
 8,
 9]\
"""

NESTED = """\
[[0, 1, 2],
 [[0, 1, 2, 3],
  [0, 1, 2, 3]]]\
"""

# This is intentionally weird. If we wanted add to come out nicely we should
# have put it in a grp.
ADD = """\
[1232341234145345634643657,
 1 +
 2]\
"""


def test_nested():
    assert pp(list(range(3))) == "[0, 1, 2]"
    assert pp(Add(1, 2)) == "1 + 2"
    assert pp([*range(10)]) == L10
    assert pp([[*range(3)], [[*range(4)], [*range(4)]]]) == NESTED
    assert pp([1232341234145345634643657, Add(1, 2)]) == ADD


def test_trailing_text_counts():
    # "[0, 1]" fits in 6 columns but not once the closing "]" of the outer
    # list is added.
    doc = mk_doc([[0, 1]])
    assert doc.to_string(8) == "[[0, 1]]"
    assert doc.to_string(7) == "[[0,\n  1]]"


def test_empty():
    assert pretty.EMPTY.to_string(0) == ""
    assert (pretty.EMPTY + pretty.text("a") + pretty.EMPTY).to_string() == "a"


QUICK_BROWN_FOX = "The quick brown fox jumps over the lazy dog"


def test_groups():
    words = QUICK_BROWN_FOX.split(" ")
    doc = None
    for w in words:
        wdoc = pretty.text(w)
        if doc is None:
            doc = wdoc
        else:
            doc += pretty.BREAK + wdoc
    as_lines = ("\n").join(words)
    h = pretty.hgrp(doc)
    a = pretty.agrp(doc)
    assert h.to_string(10) == h.to_string(100) == QUICK_BROWN_FOX
    assert a.to_string(10) == as_lines
    assert a.to_string(100) == QUICK_BROWN_FOX


def test_align():
    body = pretty.text("a") + pretty.BREAK + pretty.text("b")
    doc = pretty.text("key: ") + pretty.agrp(pretty.align(body))
    assert doc.to_string(8) == "key: a b"
    assert doc.to_string(7) == "key: a\n     b"


def test_flat_group_wins():
    words = QUICK_BROWN_FOX.split(" ")
    doc = pretty.EMPTY
    for w in words:
        doc += pretty.agrp(pretty.text(w) + pretty.BREAK)
    # Nested automatic groups are never broken inside of a flat group.
    assert pretty.hgrp(doc).to_string(10) == QUICK_BROWN_FOX + " "
