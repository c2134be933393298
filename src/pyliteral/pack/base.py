from __future__ import annotations

import abc
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")
V = TypeVar("V")

__all__ = ("Accumulator", "RuntimeValueBuilder")


class Accumulator(Generic[T, V], abc.ABC):
    """Visitor for the nodes of a document.

    Producers of documents (:func:`~pyliteral.pack.tree.reduce_tree` walks
    python values, :func:`~pyliteral.pack.text.reduce_text` parses text) call
    one method per node, depth first. :meth:`root` is called once on the
    result of the top-level node.
    """

    @abc.abstractmethod
    def constant(
        self, constant: int | float | None | str | bytes | bool
    ) -> T:  # pragma: no cover
        ...

    # We want to make sure we pass in iterators because that gives the
    # `sequence`, `tuple` and `mapping` constructors a chance to do something
    # both before and after the sub-nodes are visited.
    @abc.abstractmethod
    def mapping(self, items: Iterator[tuple[T, T]]) -> T:  # pragma: no cover
        ...

    @abc.abstractmethod
    def sequence(self, items: Iterator[T]) -> T:  # pragma: no cover
        ...

    @abc.abstractmethod
    def tuple(self, items: Iterator[T]) -> T:  # pragma: no cover
        ...

    @abc.abstractmethod
    def root(self, value: T) -> V:  # pragma: no cover
        ...


# Helping out mypy a bit
_mk_list: Callable[[Iterable[Any]], Any] = list
_mk_tuple: Callable[[Iterable[Any]], Any] = tuple
_mk_dict: Callable[[Iterable[tuple[Any, Any]]], Any] = dict


class RuntimeValueBuilder(Accumulator[Any, Any]):
    """An accumulator that build plain python values.

    Mappings are built as :class:`dict`: if a key appears more than once the
    last value wins.
    """

    def constant(
        self, constant: int | float | None | str | bytes | bool
    ) -> Any:
        return constant

    def mapping(self, items: Iterator[tuple[Any, Any]]) -> Any:
        return _mk_dict(items)

    def sequence(self, items: Iterator[Any]) -> Any:
        return _mk_list(items)

    def tuple(self, items: Iterator[Any]) -> Any:
        return _mk_tuple(items)

    def root(self, obj: Any) -> Any:
        return obj
