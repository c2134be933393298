from __future__ import annotations

import pytest

from pyliteral import errors
from pyliteral.pack import scalars


def fmt(v):
    return scalars.format_constant(v)


def read(s):
    value, end = scalars.read_string(s, 0)
    assert end == len(s)
    return value


def number(s):
    value, end = scalars.read_number(s, 0)
    assert end == len(s)
    return value


def test_format_atoms():
    assert fmt(None) == "None"
    assert fmt(True) == "True"
    assert fmt(False) == "False"
    assert fmt(0) == "0"
    assert fmt(-12) == "-12"
    assert fmt(10**30) == "1" + "0" * 30
    assert fmt(1.0) == "1.0"
    assert fmt(-0.0) == "-0.0"
    assert fmt(1e100) == "1e+100"
    assert fmt(0.1) == "0.1"


@pytest.mark.parametrize("x", [float("nan"), float("inf"), -float("inf")])
def test_non_finite(x):
    with pytest.raises(errors.NonFiniteFloatError, match="Cannot encode"):
        fmt(x)


def test_unsupported_scalar():
    with pytest.raises(errors.UnsupportedTypeError):
        fmt(object())


def test_format_str():
    assert fmt("") == '""'
    assert fmt("abc") == '"abc"'
    assert fmt('say "hi"') == "'say \"hi\"'"
    assert fmt("it's") == '"it\'s"'
    assert fmt("'\"") == '"\'\\""'
    assert fmt("a\\b") == '"a\\\\b"'
    assert fmt("\n\r\t") == '"\\n\\r\\t"'
    assert fmt("\x00\x1f\x7f") == '"\\x00\\x1f\\x7f"'
    assert fmt("\u2028\u2029") == '"\\u2028\\u2029"'
    assert fmt("\ud800") == '"\\ud800"'
    assert fmt("\U000e0001") == '"\\U000e0001"'
    assert fmt("名称 é") == '"名称 é"'


def test_format_bytes():
    assert fmt(b"") == 'b""'
    assert fmt(b"abc") == 'b"abc"'
    assert fmt(b"\x00\xff") == 'b"\\x00\\xff"'
    assert fmt(b'"') == "b'\"'"
    assert fmt(b"\n\\") == 'b"\\n\\\\"'
    assert fmt("é".encode()) == 'b"\\xc3\\xa9"'


def test_read_string():
    assert read('"abc"') == "abc"
    assert read("'abc'") == "abc"
    assert read('b"abc"') == b"abc"
    assert read("B'abc'") == b"abc"
    assert read('"\\a\\b\\f\\n\\r\\t\\v\\\\\\"\\\'"') == "\a\b\f\n\r\t\v\\\"'"
    assert read('"\\0\\12\\101"') == "\x00\nA"
    assert read('"\\x41\\u00e9\\U0001F600"') == "Aé\U0001f600"
    assert read('"\\ud800"') == "\ud800"
    assert read('b"\\xff\\377"') == b"\xff\xff"
    assert read('"名称"') == "名称"


def test_read_string_position():
    assert scalars.read_string('["a", "b"]', 6) == ("b", 9)


@pytest.mark.parametrize(
    "s, exc, pos",
    [
        ('"abc', errors.UnterminatedStringError, 0),
        ('"ab\nc"', errors.UnterminatedStringError, 0),
        ('"ab\\', errors.UnterminatedStringError, 3),
        ('"\\q"', errors.InvalidEscapeError, 1),
        ('"\\N{DASH}"', errors.InvalidEscapeError, 1),
        ('"\\x4"', errors.InvalidEscapeError, 1),
        ('"\\U00110000"', errors.InvalidEscapeError, 1),
        ('b"\\u0041"', errors.InvalidEscapeError, 2),
        ('b"\\400"', errors.InvalidEscapeError, 2),
        ('b"é"', errors.UnexpectedCharacterError, 2),
    ],
)
def test_read_string_errors(s, exc, pos):
    with pytest.raises(exc) as exc_info:
        scalars.read_string(s, 0)
    assert exc_info.value.pos == pos
    assert isinstance(exc_info.value, errors.DecodeError)


def test_read_number():
    assert number("0") == 0
    assert number("-0") == 0
    assert number("+5") == 5
    assert number("1_000_000") == 1000000
    assert number("12345678901234567890") == 12345678901234567890
    assert number("1.5") == 1.5
    assert number("-.5") == -0.5
    assert number("5.") == 5.0
    assert number("1e3") == 1000.0
    assert number("1E-3") == 0.001
    assert number("1_0.2_5e+0_1") == 102.5
    assert type(number("1.0")) is float
    assert type(number("1")) is int


@pytest.mark.parametrize(
    "s",
    ["01", "1__0", "1_", "1e", "1e+", "-", "+", ".", "1.2.3", "0x10", "1a"],
)
def test_read_number_errors(s):
    with pytest.raises(errors.InvalidNumberError):
        scalars.read_number(s, 0)


def test_read_number_out_of_range():
    with pytest.raises(errors.InvalidNumberError, match="out of range"):
        scalars.read_number("1e999", 0)
