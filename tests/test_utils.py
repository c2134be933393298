from __future__ import annotations

import linecache

import pytest

from pyliteral import errors, pack, utils


def test_position():
    assert utils.position("abc", 0) == (1, 1)
    assert utils.position("abc", 3) == (1, 4)
    assert utils.position("a\nbc\n", 3) == (2, 2)
    assert utils.position("a\nbc\n", 5) == (3, 1)


def test_fill_linecache():
    filename = utils.fill_linecache("[1,\n 2]")
    assert filename.startswith("<pyliteral-")
    assert linecache.getline(filename, 2) == " 2]"
    assert utils.fill_linecache("[1,\n 2]") == filename
    assert utils.fill_linecache("[1,\n 3]") != filename
    # Lone surrogates can appear in documents.
    utils.fill_linecache('"\ud800"')


def test_syntax_error():
    with pytest.raises(errors.UnexpectedTokenError) as exc_info:
        utils.syntax_error(
            errors.UnexpectedTokenError, "boom", "[1,\n 2 3]", 7, 8
        )
    e = exc_info.value
    assert e.msg == "boom"
    assert (e.lineno, e.offset, e.end_lineno, e.end_offset) == (2, 4, 2, 5)
    assert e.text == " 2 3]"
    assert e.pos == 7


def test_syntax_error_empty_span():
    with pytest.raises(errors.UnexpectedEndError) as exc_info:
        utils.syntax_error(errors.UnexpectedEndError, "eof", "[", 1)
    e = exc_info.value
    assert (e.offset, e.end_offset) == (2, 3)


def test_format_path():
    assert utils.format_path([]) == "$"
    assert utils.format_path([(1, 2), b"x"]) == "$[(1, 2)][b'x']"
    assert len(utils.format_path(["x" * 100])) < 50


def _registered_documents():
    return [k for k in linecache.cache if k.startswith("<pyliteral-")]


def test_linecache_is_bounded():
    for i in range(3 * utils.LINECACHE_SIZE):
        with pytest.raises(errors.DecodeError) as exc_info:
            pack.decode("[" + "x" * 1000 + str(i))
    linecache.checkcache()
    assert len(_registered_documents()) <= utils.LINECACHE_SIZE
    # The most recent failure can still be shown.
    e = exc_info.value
    assert linecache.getline(e.filename, 1).startswith("[xxx")
