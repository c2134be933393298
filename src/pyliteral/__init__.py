"""Python literals as a data format"""
from __future__ import annotations

from importlib import metadata

from .display import Literal
from .errors import DecodeError, EncodeError
from .pack import (
    COMPACT,
    PRETTY,
    Mapping,
    decode,
    dump,
    dump_text,
    encode_compact,
    encode_pretty,
    load,
    load_text,
)

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "COMPACT",
    "PRETTY",
    "DecodeError",
    "EncodeError",
    "Literal",
    "Mapping",
    "decode",
    "dump",
    "dump_text",
    "encode_compact",
    "encode_pretty",
    "load",
    "load_text",
)
