"""Toolbar-driven structural rewrites: list insertion and quoting.

Each function inspects the buffer and returns a ``Rewrite`` (or ``None``
when there is nothing to do); the session applies it with a single
``AttributedBuffer.replace`` so the change is atomic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from richtext_engine.buffer.attributed import AttributedBuffer
from richtext_engine.buffer.state import TextRange
from richtext_engine.buffer.validation import ensure_range
from richtext_engine.config import EditorConfig
from richtext_engine.lines import BLOCKQUOTE_PREFIX, leading_whitespace, line_range
from richtext_engine.styles import PLAIN, StyleAttributes

BLOCKQUOTE = StyleAttributes(is_blockquote=True)


@dataclass(frozen=True, slots=True)
class Rewrite:
    span: TextRange
    text: str
    attrs: StyleAttributes
    selection: TextRange


def _current_indent(buffer: AttributedBuffer, position: int) -> str:
    return leading_whitespace(buffer.substring(line_range(buffer, position)))


def _list_rewrite(
    buffer: AttributedBuffer, selection: TextRange, marker_for: Callable[[int], str]
) -> Rewrite:
    ensure_range(len(buffer), selection)
    indent = _current_indent(buffer, selection.start)

    if selection.is_empty:
        text = "\n" + indent + marker_for(1)
        return Rewrite(
            span=selection,
            text=text,
            attrs=PLAIN,
            selection=TextRange.caret(selection.start + len(text)),
        )

    lines = [line for line in buffer.substring(selection).split("\n") if line]
    text = "\n".join(
        f"{indent}{marker_for(index)}{line.strip()}"
        for index, line in enumerate(lines, start=1)
    )
    return Rewrite(
        span=selection,
        text=text,
        attrs=PLAIN,
        selection=TextRange.of_length(selection.start, len(text)),
    )


def insert_ordered_list(buffer: AttributedBuffer, selection: TextRange) -> Rewrite:
    """Start a numbered item at the caret, or number every selected line."""

    return _list_rewrite(buffer, selection, lambda index: f"{index}. ")


def insert_unordered_list(
    buffer: AttributedBuffer,
    selection: TextRange,
    config: Optional[EditorConfig] = None,
) -> Rewrite:
    bullet = (config or EditorConfig()).default_bullet
    return _list_rewrite(buffer, selection, lambda _index: f"{bullet} ")


def insert_blockquote(
    buffer: AttributedBuffer,
    selection: TextRange,
    config: Optional[EditorConfig] = None,
) -> Rewrite:
    """Wrap the selection (or a placeholder) in its own quoted paragraph.

    Placeholder content is left selected so typing replaces it.
    """

    cfg = config or EditorConfig()
    ensure_range(len(buffer), selection)
    selected = buffer.substring(selection)
    content = selected or cfg.blockquote_placeholder
    head = "\n" + BLOCKQUOTE_PREFIX
    text = head + content + "\n"
    content_start = selection.start + len(head)
    if selected:
        after = TextRange.caret(content_start + len(content))
    else:
        after = TextRange.of_length(content_start, len(content))
    return Rewrite(span=selection, text=text, attrs=BLOCKQUOTE, selection=after)


def quote_lines(buffer: AttributedBuffer, selection: TextRange) -> Optional[Rewrite]:
    """Prefix the selected lines (or the caret line) with ``"> "``."""

    ensure_range(len(buffer), selection)
    if not selection.is_empty:
        lines = buffer.substring(selection).split("\n")
        text = "\n".join(BLOCKQUOTE_PREFIX + line for line in lines)
        return Rewrite(
            span=selection,
            text=text,
            attrs=BLOCKQUOTE,
            selection=TextRange.of_length(selection.start, len(text)),
        )

    span = line_range(buffer, selection.start)
    current = buffer.substring(span)
    if current.startswith(BLOCKQUOTE_PREFIX):
        return None
    return Rewrite(
        span=span,
        text=BLOCKQUOTE_PREFIX + current,
        attrs=BLOCKQUOTE,
        selection=TextRange.caret(selection.start + len(BLOCKQUOTE_PREFIX)),
    )


__all__ = [
    "BLOCKQUOTE",
    "Rewrite",
    "insert_blockquote",
    "insert_ordered_list",
    "insert_unordered_list",
    "quote_lines",
]
