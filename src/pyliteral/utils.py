from __future__ import annotations

import collections
import hashlib
import io
import linecache
import pydoc
import threading
import typing
from typing import Any, Final, Sequence

cram = pydoc.cram


# We fill the linecache with the content of the documents we fail to parse so
# the SyntaxErrors we raise can show the offending line (that's what the
# traceback module uses to print the ``^^^^`` markers).
#
# Both doctest and ipython patch linecache to handle "fake files":
# + https://github.com/python/cpython/blob/26fa25a9a73/Lib/doctest.py#L1427
# + https://github.com/ipython/ipython/blob/b9c1adb1119/IPython/core
#   /compilerop.py#L189
#
# We use a mtime of None, which means our entries won't be purged by
# linecache.checkcache. We purge them ourselves: only the last
# `LINECACHE_SIZE` documents are kept.

#: Number of documents kept in the linecache
LINECACHE_SIZE: Final = 32

_registered: collections.OrderedDict[str, None] = collections.OrderedDict()
_registered_lock = threading.Lock()


def fill_linecache(data: str) -> str:
    "Fill the linecache with a fake file containing the content of ``data``."
    digest = hashlib.sha1(data.encode("utf8", "surrogatepass")).hexdigest()
    filename = f"<pyliteral-{digest}>"
    with _registered_lock:
        _registered[filename] = None
        _registered.move_to_end(filename)
        while len(_registered) > LINECACHE_SIZE:
            evicted, _ = _registered.popitem(last=False)
            linecache.cache.pop(evicted, None)
        if filename not in linecache.cache:
            linecache.cache[filename] = (
                len(data),
                None,
                list(io.StringIO(data)),
                filename,
            )
    return filename


def position(content: str, pos: int) -> tuple[int, int]:
    """Convert a 0-based offset into a (line, column) pair.

    Both the line and the column are 1-based, like in :class:`SyntaxError`::

      >>> position("[1,\\n 2]", 5)
      (2, 2)
    """
    lineno = content.count("\n", 0, pos) + 1
    col = pos - (content.rfind("\n", 0, pos) + 1) + 1
    return lineno, col


def syntax_error(
    exc_type: type[SyntaxError],
    msg: str,
    content: str,
    start: int,
    end: int | None = None,
) -> typing.NoReturn:
    """Raise a syntax error spanning ``content[start:end]``"""
    # https://github.com/python/cpython/blob/3.10/Objects/exceptions.c#L1474
    if end is None or end <= start:
        end = start + 1
    filename = fill_linecache(content)
    lineno, offset = position(content, start)
    end_lineno, end_offset = position(content, end)
    exc = exc_type(
        msg,
        (
            filename,
            lineno,
            offset,
            linecache.getline(filename, lineno),
            end_lineno,
            end_offset,
        ),
    )
    setattr(exc, "pos", start)
    raise exc


def format_path(path: Sequence[Any]) -> str:
    """Render the location of a value in a tree.

    >>> format_path([0, "a", 3])
    "$[0]['a'][3]"
    """
    return "$" + "".join(f"[{cram(repr(elt), 40)}]" for elt in path)
