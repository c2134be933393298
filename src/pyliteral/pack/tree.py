"""``pyliteral.pack.tree``: The data model
======================================

Documents are trees of plain python values: ``None``, :class:`bool`,
:class:`int`, :class:`float`, :class:`str`, :class:`bytes`, :class:`list`,
:class:`tuple` and :class:`Mapping`. The type of a value is its tag: we do
exact type comparisons instead of calls to :func:`isinstance` so subclasses
(e.g.: :class:`enum.IntEnum`) are rejected rather than silently converted.

:class:`dict` are accepted everywhere a :class:`Mapping` is but the values we
build always use :class:`Mapping` so that no information gets lost::

  >>> explode({"a": (1, 2)})
  Mapping(data=[('a', (1, 2))])
  >>> implode(Mapping([("a", 1), ("a", 2)]))
  {'a': 2}

API:
----

"""

from __future__ import annotations

import contextlib
import dataclasses
import types
from typing import Any, Iterable, Iterator, TypeVar

from pyliteral import errors

from . import base

T = TypeVar("T")
V = TypeVar("V")

__all__ = (
    "Node",
    "Mapping",
    "NodeBuilder",
    "reduce_tree",
    "explode",
    "implode",
)

SCALAR_TYPES = (int, float, types.NoneType, bool, str, bytes)


@dataclasses.dataclass(slots=True, frozen=True)
class Mapping:
    """An ordered list of key value pairs.

    Note that the mapping cannot implement the :class:`collections.Mapping`
    interface because it might contain duplicate keys and keys that aren't
    hashable:

        >>> m = Mapping([((1, [2]), "a"), ((1, [2]), "b")])
        >>> len(m)
        2
        >>> list(m.keys())
        [(1, [2]), (1, [2])]

    Parameters:
        data(list[tuple[Node, Node]]):
    """

    data: list[tuple[Node, Node]]

    def items(self) -> Iterator[tuple[Node, Node]]:
        yield from self.data

    def keys(self) -> Iterator[Node]:
        for k, _ in self.data:
            yield k

    def values(self) -> Iterator[Node]:
        for _, v in self.data:
            yield v

    def __len__(self) -> int:
        return len(self.data)


# Mypy doesn't support recursive types
# (https://github.com/python/mypy/issues/731)

#:
Node = (
    int
    | float
    | None
    | str
    | bytes
    | bool
    | Mapping
    | dict[Any, Any]
    | list[Any]
    | tuple[Any, ...]
)


class NodeBuilder(base.Accumulator[Node, Node]):
    """A :class:`base.Accumulator` used to build :class:`Node`"""

    def constant(
        self, constant: int | float | None | str | bytes | bool
    ) -> Node:
        return constant

    def mapping(self, items: Iterator[tuple[Node, Node]]) -> Node:
        return Mapping(list(items))

    def sequence(self, items: Iterator[Node]) -> Node:
        return list(items)

    def tuple(self, items: Iterator[Node]) -> Node:
        return tuple(items)

    def root(self, node: Node) -> Node:
        return node


@contextlib.contextmanager
def _at(elt: Any) -> Iterator[None]:
    "Record where we were in the tree if encoding fails"
    try:
        yield
    except errors.EncodeError as e:
        e.path.insert(0, elt)
        raise


def reduce_tree(value: Any, acc: base.Accumulator[T, V]) -> V:
    """Walk *value* depth first and feed it to *acc*.

    Raises:
      UnsupportedTypeError: if a value is not part of the data model.
      RecursiveValueError: if a container contains itself.
    """
    constant = acc.constant
    sequence = acc.sequence
    mk_tuple = acc.tuple
    mapping = acc.mapping
    # ids of the containers we are currently inside of
    visiting: set[int] = set()

    def _gen_items(elts: Iterable[Any]) -> Iterator[T]:
        for idx, elt in enumerate(elts):
            with _at(idx):
                res = reduce(elt)
            yield res

    def _gen_kv(items: Iterable[tuple[Any, Any]]) -> Iterator[tuple[T, T]]:
        for key, value in items:
            with _at(key):
                ek = reduce(key)
                ev = reduce(value)
            yield (ek, ev)

    def reduce(exp: Any) -> T:
        ty = type(exp)
        if ty in SCALAR_TYPES:
            return constant(exp)
        if ty not in (list, tuple, dict, Mapping):
            raise errors.UnsupportedTypeError(
                f"Object of type {ty.__name__} cannot be encoded"
            )
        addr = id(exp)
        if addr in visiting:
            raise errors.RecursiveValueError("Recursive value found")
        visiting.add(addr)
        try:
            if ty is list:
                return sequence(_gen_items(exp))
            if ty is tuple:
                return mk_tuple(_gen_items(exp))
            return mapping(_gen_kv(exp.items()))
        finally:
            visiting.discard(addr)

    return acc.root(reduce(value))


def explode(v: Any) -> Node:
    """Convert a python value to a :class:`Node`

    Args:
      v:
    """
    return reduce_tree(v, NodeBuilder())


def implode(v: Node) -> Any:
    """Convert a :class:`Node` to plain python values

    Args:
      v:
    """
    return reduce_tree(v, base.RuntimeValueBuilder())
