"""

:mod:`~pyliteral.pack` converts python values to python literals and back.

What differentiate :mod:`~pyliteral.pack` from :func:`repr` and
:func:`ast.literal_eval` is that it is very explicit. Only a small set of types
is supported, we don't rely on inheritance or the runtime structure of values
to handle anything that isn't of a supported type, and the reader only accepts
what the writers can produce.

Supported types
---------------

+ :class:`str`, :class:`bytes`, :class:`int`, :class:`float`, :class:`bool`, \
    :const:`None`: Basic python primitives (``nan`` and infinities are \
    rejected since they do not have a literal representation)
+ :class:`list`: where all the elements are serialisable
+ :class:`tuple`: where all the elements are serialisable
+ :class:`dict` and :class:`~pyliteral.pack.tree.Mapping`: where all the keys \
    and values are serialisable

"""
from __future__ import annotations

from typing import Final

from .base import Accumulator, RuntimeValueBuilder
from .text import (
    DEFAULT_WIDTH,
    CompactPrinter,
    Format,
    PrettyPrinter,
    decode,
    dump,
    dump_text,
    encode_compact,
    encode_pretty,
    load,
    load_text,
    reduce_text,
)
from .tree import Mapping, Node, NodeBuilder, explode, implode, reduce_tree

#: Print the value on one line
COMPACT: Final = Format.COMPACT

#: Pretty print the value
PRETTY: Final = Format.PRETTY

__all__ = (
    "COMPACT",
    "PRETTY",
    "DEFAULT_WIDTH",
    "encode_compact",
    "encode_pretty",
    "decode",
    "dump_text",
    "load_text",
    "dump",
    "load",
    "explode",
    "implode",
    "reduce_text",
    "reduce_tree",
    "Accumulator",
    "RuntimeValueBuilder",
    "NodeBuilder",
    "CompactPrinter",
    "PrettyPrinter",
    "Mapping",
    "Node",
)
