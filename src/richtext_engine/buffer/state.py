"""Offset ranges and cursor intents shared by the buffer and the engine."""

from __future__ import annotations

from dataclasses import dataclass

Cursor = int  # code-point offset into the buffer text


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """Half-open ``[start, end)`` span of buffer offsets."""

    start: int
    end: int

    @classmethod
    def caret(cls, position: int) -> "TextRange":
        return cls(position, position)

    @classmethod
    def of_length(cls, start: int, length: int) -> "TextRange":
        return cls(start, start + length)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True, slots=True)
class CursorIntent:
    """Cursor position that must win over the host's own placement."""

    position: Cursor


__all__ = ["Cursor", "CursorIntent", "TextRange"]
