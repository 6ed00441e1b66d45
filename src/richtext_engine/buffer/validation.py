"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import TextRange
from .sync import RangeError


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise RangeError(
            f"Offset {offset} outside [0, {length}]", offset=offset, length=length
        )
    return offset


def ensure_range(length: int, span: TextRange) -> TextRange:
    if span.start > span.end:
        raise RangeError(
            f"Range {span.start}..{span.end} is inverted", span=span, length=length
        )
    if span.start < 0 or span.end > length:
        raise RangeError(
            f"Range {span.start}..{span.end} outside [0, {length}]",
            span=span,
            length=length,
        )
    return span
