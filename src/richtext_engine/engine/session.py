"""Editing session: the single entry point host surfaces talk to."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from richtext_engine.buffer import codec
from richtext_engine.buffer.attributed import AttributedBuffer
from richtext_engine.buffer.state import TextRange
from richtext_engine.buffer.sync import BufferMirror
from richtext_engine.buffer.validation import ensure_offset, ensure_range
from richtext_engine.config import EditorConfig, load_config
from richtext_engine.runtime import telemetry
from richtext_engine.styles import FormatFlag, HeaderLevel, StyleAttributes

from . import structure
from .continuation import ContinuationEngine
from .cursor import CursorPolicy
from .models import ContinuationState, OverrideEdit, PendingEdit
from .structure import Rewrite


class EditingSession:
    """Owns one buffer, its selection, typing attributes and engine state.

    Every keystroke goes through ``submit_edit``: classify, decide, apply,
    then settle the cursor. The session is also the ``CursorHost`` its
    ``CursorPolicy`` corrects, standing in for the host text surface.
    """

    def __init__(
        self,
        buffer: Optional[AttributedBuffer] = None,
        *,
        config: Optional[EditorConfig] = None,
        engine: Optional[ContinuationEngine] = None,
        name: str = "note",
    ) -> None:
        self.config = config or load_config()
        self.buffer = buffer if buffer is not None else AttributedBuffer(name=name)
        self.engine = engine or ContinuationEngine()
        self.state = ContinuationState()
        end = len(self.buffer)
        self._selection = TextRange.caret(end)
        self._typing = self.buffer.attributes_at(end)
        self.cursor_policy = CursorPolicy(self)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        config: Optional[EditorConfig] = None,
        name: str = "note",
    ) -> "EditingSession":
        return cls(codec.decode(payload, name=name), config=config, name=name)

    def to_payload(self) -> dict[str, Any]:
        return codec.encode(self.buffer)

    # CursorHost ------------------------------------------------------------

    def get_cursor(self) -> int:
        return self._selection.end

    def set_cursor(self, position: int) -> None:
        self._selection = TextRange.caret(position)

    def text_length(self) -> int:
        return len(self.buffer)

    # Selection & typing attributes ------------------------------------------

    @property
    def selection(self) -> TextRange:
        return self._selection

    @property
    def cursor(self) -> int:
        return self._selection.end

    def select(self, start: int, end: Optional[int] = None) -> TextRange:
        """Move the caret (``end`` omitted) or select ``[start, end)``."""

        span = ensure_range(
            len(self.buffer), TextRange(start, start if end is None else end)
        )
        self._selection = span
        if span.is_empty:
            self._typing = self._attributes_before(span.start)
        return span

    def move_cursor(self, delta: int) -> int:
        target = min(max(0, self.cursor + delta), len(self.buffer))
        self.select(target)
        return target

    def get_typing_attributes(self) -> StyleAttributes:
        return self._typing

    def set_typing_attributes(self, attrs: StyleAttributes) -> None:
        self._typing = attrs

    def _attributes_before(self, position: int) -> StyleAttributes:
        if not len(self.buffer):
            return self._typing
        return self.buffer.attributes_at(max(0, position - 1))

    # Styling ---------------------------------------------------------------

    def apply_style(self, span: TextRange, attrs: StyleAttributes) -> None:
        """Stamp ``attrs`` on a selection; an empty span sets typing attributes."""

        ensure_range(len(self.buffer), span)
        if span.is_empty:
            self._typing = attrs
            return
        self.buffer.set_attributes(span, attrs)

    def toggle_header(self, level: HeaderLevel) -> StyleAttributes:
        enable = self._reference_attributes().header_level != level
        return self._toggle(
            lambda style: StyleAttributes(
                header_level=level if enable else None,
                format_flags=style.format_flags,
                is_blockquote=style.is_blockquote,
            )
        )

    def toggle_format(self, flag: FormatFlag) -> StyleAttributes:
        enable = not self._reference_attributes().has_format(flag)
        return self._toggle(
            lambda style: StyleAttributes(
                header_level=style.header_level,
                format_flags=(
                    style.format_flags | {flag}
                    if enable
                    else style.format_flags - {flag}
                ),
                is_blockquote=style.is_blockquote,
            )
        )

    def toggle_blockquote(self) -> StyleAttributes:
        enable = not self._reference_attributes().is_blockquote
        return self._toggle(
            lambda style: StyleAttributes(
                header_level=style.header_level,
                format_flags=style.format_flags,
                is_blockquote=enable,
            )
        )

    def _reference_attributes(self) -> StyleAttributes:
        if self._selection.is_empty:
            return self._typing
        return self.buffer.attributes_at(self._selection.start)

    def _toggle(
        self, transform: Callable[[StyleAttributes], StyleAttributes]
    ) -> StyleAttributes:
        if self._selection.is_empty:
            self._typing = transform(self._typing)
            return self._typing
        self.buffer.map_attributes(self._selection, transform)
        return self.buffer.attributes_at(self._selection.start)

    # Edits -----------------------------------------------------------------

    def submit_edit(self, edit: PendingEdit) -> BufferMirror:
        """Decide, apply and settle one pending host edit."""

        with telemetry.span(
            "engine::submit_edit",
            component="engine",
            metadata={
                "kind": edit.kind.value,
                "start": edit.span.start,
                "end": edit.span.end,
            },
        ) as handle:
            decision = self.engine.decide(self.state, self.buffer, edit)
            outcome = decision.outcome
            before = self.cursor_policy.capture()
            if isinstance(outcome, OverrideEdit):
                handle.add_metadata("override", outcome.reason)
                self.buffer.replace(outcome.span, outcome.text, outcome.attrs)
                placed = outcome.span.start + len(outcome.text)
            else:
                self.buffer.replace(edit.span, edit.replacement, self._typing)
                placed = edit.span.start + len(edit.replacement)
            # the host would leave the caret at the end of the changed region
            self.set_cursor(placed)
            settled = self.cursor_policy.settle(outcome.cursor_intent)
            handle.note("settled", before=before, cursor=settled, placed=placed)
            self.state = decision.state
        return self.mirror()

    def type_text(self, text: str) -> BufferMirror:
        return self.submit_edit(PendingEdit(self._selection, text))

    def press_enter(self) -> BufferMirror:
        return self.submit_edit(PendingEdit(self._selection, "\n"))

    def press_backspace(self) -> BufferMirror:
        if not self._selection.is_empty:
            return self.submit_edit(PendingEdit(self._selection, ""))
        if self.cursor == 0:
            return self.mirror()
        return self.submit_edit(PendingEdit.backspace(self.cursor))

    # Structural commands ---------------------------------------------------

    def insert_ordered_list(self) -> BufferMirror:
        return self._apply_rewrite(
            structure.insert_ordered_list(self.buffer, self._selection)
        )

    def insert_unordered_list(self) -> BufferMirror:
        return self._apply_rewrite(
            structure.insert_unordered_list(self.buffer, self._selection, self.config)
        )

    def insert_blockquote(self) -> BufferMirror:
        rewrite = structure.insert_blockquote(
            self.buffer, self._selection, self.config
        )
        self._typing = StyleAttributes(
            header_level=self._typing.header_level,
            format_flags=self._typing.format_flags,
            is_blockquote=True,
        )
        return self._apply_rewrite(rewrite, keep_typing=True)

    def quote_lines(self) -> BufferMirror:
        was_caret = self._selection.is_empty
        rewrite = structure.quote_lines(self.buffer, self._selection)
        if was_caret:
            # quoting the caret line clears formats for what is typed next
            self._typing = structure.BLOCKQUOTE
        if rewrite is None:
            return self.mirror()
        return self._apply_rewrite(rewrite, keep_typing=was_caret)

    def _apply_rewrite(
        self, rewrite: Rewrite, *, keep_typing: bool = False
    ) -> BufferMirror:
        with telemetry.span(
            "engine::rewrite",
            component="engine",
            metadata={"start": rewrite.span.start, "end": rewrite.span.end},
        ):
            self.buffer.replace(rewrite.span, rewrite.text, rewrite.attrs)
            ensure_offset(len(self.buffer), rewrite.selection.end)
            self._selection = rewrite.selection
            self.state = self.state.cleared()
            if not keep_typing and rewrite.selection.is_empty:
                self._typing = self._attributes_before(rewrite.selection.start)
        return self.mirror()

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self.buffer.text,
            runs=self.buffer.runs,
            cursor=self.cursor,
            selection=self._selection,
            version=self.buffer.version,
        )

    # BufferSync ------------------------------------------------------------

    def pull_buffer(self) -> BufferMirror:
        return self.mirror()

    def push_host_edit(self, start: int, end: int, replacement: str) -> BufferMirror:
        return self.submit_edit(PendingEdit(TextRange(start, end), replacement))


__all__ = ["EditingSession"]
