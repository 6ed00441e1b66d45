"""Attributed text buffer, its persisted form, and host boundary types."""

from .attributed import AttributedBuffer, TextRun, Transaction, check_partition
from .codec import CodecError, decode, dumps, encode, loads
from .state import Cursor, CursorIntent, TextRange
from .sync import (
    BufferInvariantError,
    BufferMirror,
    BufferSync,
    CursorHost,
    RangeError,
)
from .validation import ensure_offset, ensure_range

__all__ = [
    "AttributedBuffer",
    "BufferInvariantError",
    "BufferMirror",
    "BufferSync",
    "CodecError",
    "Cursor",
    "CursorHost",
    "CursorIntent",
    "RangeError",
    "TextRange",
    "TextRun",
    "Transaction",
    "check_partition",
    "decode",
    "dumps",
    "encode",
    "ensure_offset",
    "ensure_range",
    "loads",
]
