from __future__ import annotations

import math

from pyliteral import pack


def same(left, right) -> bool:
    """Strict equality: ``1 == 1.0 == True`` but they are different values.

    Floats are compared bit for bit (so ``-0.0`` isn't ``0.0``).
    """
    if type(left) is not type(right):
        return False
    if isinstance(left, float):
        return math.copysign(1.0, left) == math.copysign(1.0, right) and (
            left == right
        )
    if isinstance(left, list | tuple):
        return len(left) == len(right) and all(
            same(le, re) for le, re in zip(left, right)
        )
    if isinstance(left, pack.Mapping):
        return same(left.data, right.data)
    if isinstance(left, dict):
        return same(list(left.items()), list(right.items()))
    return left == right


def assert_same(left, right):
    assert same(left, right), f"{left!r} != {right!r}"
