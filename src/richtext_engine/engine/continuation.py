"""Edit interception for structured lines.

``ContinuationEngine.decide`` is a pure function of
``(state, buffer, edit) -> Decision(state', outcome)``. It never mutates the
buffer; the session applies the outcome. Only two edits are intercepted:

* Enter (replacement ``"\\n"``) continues, splits or exits list items and
  blockquotes, and corrects the cursor on plain lines.
* Backspace (empty replacement over one character) never changes what is
  deleted; it only tracks blank lines and corrects the cursor.

Numbers after a newly created ordered item are not renumbered.
"""

from __future__ import annotations

from typing import Optional

from richtext_engine.buffer.attributed import AttributedBuffer
from richtext_engine.buffer.state import CursorIntent, TextRange
from richtext_engine.buffer.validation import ensure_range
from richtext_engine.lines import (
    Blockquote,
    ListItem,
    OrderedListItem,
    PlainLine,
    classify,
    is_list_item,
    line_range,
    prefix_span,
)
from richtext_engine.runtime import telemetry
from richtext_engine.styles import PLAIN, StyleAttributes

from .models import (
    ContinuationState,
    Decision,
    DefaultEdit,
    EditKind,
    OverrideEdit,
    PendingEdit,
)


class ContinuationEngine:
    """Decides how a pending edit should change a structured buffer."""

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name or "richtext_engine.engine"

    def decide(
        self,
        state: ContinuationState,
        buffer: AttributedBuffer,
        edit: PendingEdit,
    ) -> Decision:
        ensure_range(len(buffer), edit.span)
        kind = edit.kind
        if kind is EditKind.ENTER:
            return self._decide_enter(state.cleared(), buffer, edit)
        if kind is EditKind.BACKSPACE:
            return self._decide_backspace(state, buffer, edit)
        return Decision(state.cleared(), DefaultEdit())

    # Enter -----------------------------------------------------------------

    def _decide_enter(
        self, state: ContinuationState, buffer: AttributedBuffer, edit: PendingEdit
    ) -> Decision:
        start = edit.span.start
        line = classify(buffer, start)
        plain = Decision(state, DefaultEdit(CursorIntent(start + 1)))

        if isinstance(line, PlainLine) or edit.span.end > line.span.end:
            return plain
        if isinstance(line, Blockquote):
            return self._enter_blockquote(state, buffer, edit, line)
        if start < line.content.start:
            # caret inside the marker: a plain line break
            return plain
        return self._enter_list_item(state, buffer, edit, line)

    def _enter_list_item(
        self,
        state: ContinuationState,
        buffer: AttributedBuffer,
        edit: PendingEdit,
        line: ListItem,
    ) -> Decision:
        start = edit.span.start
        attrs = _continuation_attributes(buffer, line.span.start)

        if line.content.is_empty:
            exit_text = "\n" + line.indent
            return self._override(
                state,
                edit.span,
                exit_text,
                attrs,
                start + len(exit_text),
                reason="exit_list",
            )

        remainder = buffer.text[edit.span.end : line.span.end]
        if remainder:
            # split keeps the current number on the moved remainder
            split_text = "\n" + line.marker() + remainder
            return self._override(
                state,
                TextRange(start, line.span.end),
                split_text,
                attrs,
                start + len(split_text) - len(remainder),
                reason="split_list",
            )

        if isinstance(line, OrderedListItem):
            marker = line.marker(line.number + 1)
        else:
            marker = line.marker()
        continue_text = "\n" + marker
        return self._override(
            state,
            edit.span,
            continue_text,
            attrs,
            start + len(continue_text),
            reason="continue_list",
        )

    def _enter_blockquote(
        self,
        state: ContinuationState,
        buffer: AttributedBuffer,
        edit: PendingEdit,
        line: Blockquote,
    ) -> Decision:
        start = edit.span.start
        offset = start - line.content.start
        content = buffer.text[line.content.start : line.content.end]

        if offset <= 0 and not content.strip():
            return self._override(
                state, edit.span, "\n", PLAIN, start + 1, reason="exit_blockquote"
            )
        if offset < 0:
            return Decision(state, DefaultEdit(CursorIntent(start + 1)))

        attrs = _continuation_attributes(buffer, line.span.start)
        prefix = "\n" + line.marker()
        remainder = buffer.text[edit.span.end : line.span.end]
        if remainder:
            return self._override(
                state,
                TextRange(start, line.span.end),
                prefix + remainder,
                attrs,
                start + len(prefix),
                reason="split_blockquote",
            )
        return self._override(
            state,
            edit.span,
            prefix,
            attrs,
            start + len(prefix),
            reason="continue_blockquote",
        )

    def _override(
        self,
        state: ContinuationState,
        span: TextRange,
        text: str,
        attrs: StyleAttributes,
        cursor: int,
        *,
        reason: str,
    ) -> Decision:
        telemetry.record_event(
            "continuation.override",
            level="debug",
            data={"reason": reason, "start": span.start, "end": span.end},
            logger_name=self._logger_name,
        )
        return Decision(
            state,
            OverrideEdit(
                span=span,
                text=text,
                attrs=attrs,
                cursor_intent=CursorIntent(cursor),
                reason=reason,
            ),
        )

    # Backspace -------------------------------------------------------------

    def _decide_backspace(
        self, state: ContinuationState, buffer: AttributedBuffer, edit: PendingEdit
    ) -> Decision:
        text = buffer.text
        position = edit.span.start
        line = classify(buffer, position)
        listed = is_list_item(line)
        intent = CursorIntent(position)

        if listed and prefix_span(line).contains(position):
            return Decision(state.cleared(), DefaultEdit(intent))

        # only a backspace at the stored offset jumps; one offset earlier
        # deletes the newline like any other character and disarms
        if state.was_on_empty_line and position == state.empty_line_location:
            if position > 0:
                intent = CursorIntent(_end_of_line_before(text, position))
            self._note_blank_line("leave", position)
            return Decision(state.cleared(), DefaultEdit(intent))

        next_state = state
        if 0 < position < len(text):
            if text[position] == "\n":
                next_state = self._track_blank(state, text, line.span.start, position)
            elif position + 1 < len(text) and text[position + 1] == "\n":
                # deleting the last visible character may leave the line blank
                if listed:
                    return Decision(state.cleared(), DefaultEdit(intent))
                next_state = self._track_blank(state, text, line.span.start, position)

        return Decision(next_state, DefaultEdit(intent))

    def _track_blank(
        self, state: ContinuationState, text: str, line_start: int, position: int
    ) -> ContinuationState:
        if text[line_start:position].strip():
            return state.cleared()
        self._note_blank_line("arm", position)
        return state.armed(position)

    def _note_blank_line(self, action: str, position: int) -> None:
        telemetry.record_event(
            "continuation.blank_line",
            level="debug",
            data={"action": action, "position": position},
            logger_name=self._logger_name,
        )


def _continuation_attributes(buffer: AttributedBuffer, line_start: int) -> StyleAttributes:
    return buffer.attributes_at(line_start).paragraph_projection()


def _end_of_line_before(text: str, position: int) -> int:
    previous = line_range(text, position - 1)
    if previous.end < len(text):
        return previous.end
    return max(previous.start, previous.end - 1)


__all__ = ["ContinuationEngine"]
