"""Edits, decisions and session state exchanged with the continuation engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from richtext_engine.buffer.state import CursorIntent, TextRange
from richtext_engine.styles import PLAIN, StyleAttributes


class EditKind(str, Enum):
    ENTER = "enter"
    BACKSPACE = "backspace"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class PendingEdit:
    """A host edit reported before it is applied: replace ``span`` with text."""

    span: TextRange
    replacement: str = ""

    @classmethod
    def enter(cls, position: int) -> "PendingEdit":
        return cls(TextRange.caret(position), "\n")

    @classmethod
    def backspace(cls, cursor: int) -> "PendingEdit":
        return cls(TextRange(cursor - 1, cursor), "")

    @classmethod
    def typing(cls, text: str, position: int) -> "PendingEdit":
        return cls(TextRange.caret(position), text)

    @property
    def kind(self) -> EditKind:
        if self.replacement == "\n":
            return EditKind.ENTER
        if self.replacement == "" and self.span.length == 1:
            return EditKind.BACKSPACE
        return EditKind.OTHER


@dataclass(frozen=True, slots=True)
class ContinuationState:
    """Blank-line bookkeeping carried between consecutive backspaces."""

    was_on_empty_line: bool = False
    empty_line_location: int = 0

    def armed(self, location: int) -> "ContinuationState":
        return ContinuationState(was_on_empty_line=True, empty_line_location=location)

    def cleared(self) -> "ContinuationState":
        return ContinuationState()


@dataclass(frozen=True, slots=True)
class DefaultEdit:
    """Let the edit apply as reported, optionally correcting the cursor."""

    cursor_intent: Optional[CursorIntent] = None


@dataclass(frozen=True, slots=True)
class OverrideEdit:
    """Apply ``replace(span, text, attrs)`` instead of the reported edit."""

    span: TextRange
    text: str
    attrs: StyleAttributes = PLAIN
    cursor_intent: Optional[CursorIntent] = None
    reason: str = ""


Outcome = Union[DefaultEdit, OverrideEdit]


@dataclass(frozen=True, slots=True)
class Decision:
    state: ContinuationState
    outcome: Outcome

    @property
    def is_override(self) -> bool:
        return isinstance(self.outcome, OverrideEdit)


__all__ = [
    "ContinuationState",
    "Decision",
    "DefaultEdit",
    "EditKind",
    "Outcome",
    "OverrideEdit",
    "PendingEdit",
]
