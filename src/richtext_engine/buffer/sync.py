"""Adapter boundary types for syncing buffers with host text surfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from .state import Cursor, TextRange

if TYPE_CHECKING:  # pragma: no cover
    from .attributed import TextRun


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Authoritative buffer state handed back to the host after an edit."""

    text: str
    runs: tuple["TextRun", ...]
    cursor: Cursor
    selection: TextRange
    version: int = 0


class BufferSync(Protocol):
    """How a host surface exchanges state with an editing session."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot the host should render."""
        ...

    def push_host_edit(self, start: int, end: int, replacement: str) -> BufferMirror:
        """Submit a pending keystroke edit before the host applies it."""
        ...


class CursorHost(Protocol):
    """Minimal view of a host text surface that owns a caret."""

    def get_cursor(self) -> Cursor: ...

    def set_cursor(self, position: Cursor) -> None: ...

    def text_length(self) -> int: ...


class RangeError(IndexError):
    """Raised when an offset or range falls outside the buffer bounds."""

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        span: Optional[TextRange] = None,
        length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.offset = offset
        self.span = span
        self.length = length


class BufferInvariantError(RuntimeError):
    """Raised when the run partition no longer matches the text."""


__all__ = [
    "BufferInvariantError",
    "BufferMirror",
    "BufferSync",
    "CursorHost",
    "RangeError",
]
