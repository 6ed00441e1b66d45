"""Continuation engine, cursor correction and the editing session."""

from .continuation import ContinuationEngine
from .cursor import CursorPolicy
from .models import (
    ContinuationState,
    Decision,
    DefaultEdit,
    EditKind,
    Outcome,
    OverrideEdit,
    PendingEdit,
)
from .session import EditingSession
from .structure import (
    Rewrite,
    insert_blockquote,
    insert_ordered_list,
    insert_unordered_list,
    quote_lines,
)

__all__ = [
    "ContinuationEngine",
    "ContinuationState",
    "CursorPolicy",
    "Decision",
    "DefaultEdit",
    "EditKind",
    "EditingSession",
    "Outcome",
    "OverrideEdit",
    "PendingEdit",
    "Rewrite",
    "insert_blockquote",
    "insert_ordered_list",
    "insert_unordered_list",
    "quote_lines",
]
