from __future__ import annotations

import pytest

from richtext_engine.buffer import AttributedBuffer, CursorIntent, RangeError, TextRange
from richtext_engine.engine import (
    ContinuationEngine,
    ContinuationState,
    DefaultEdit,
    EditKind,
    OverrideEdit,
    PendingEdit,
)
from richtext_engine.styles import PLAIN, FormatFlag, StyleAttributes

QUOTE = StyleAttributes(is_blockquote=True)


def make_engine() -> ContinuationEngine:
    return ContinuationEngine()


def apply(buffer: AttributedBuffer, edit: PendingEdit, outcome) -> str:
    if isinstance(outcome, OverrideEdit):
        buffer.replace(outcome.span, outcome.text, outcome.attrs)
    else:
        buffer.replace(edit.span, edit.replacement)
    return buffer.text


def test_edit_kind_detection() -> None:
    assert PendingEdit.enter(3).kind is EditKind.ENTER
    assert PendingEdit.backspace(3).kind is EditKind.BACKSPACE
    assert PendingEdit.backspace(3).span == TextRange(2, 3)
    assert PendingEdit.typing("x", 0).kind is EditKind.OTHER
    assert PendingEdit(TextRange(0, 2), "").kind is EditKind.OTHER


def test_ordered_split_keeps_number_on_remainder() -> None:
    buffer = AttributedBuffer("1. abc")
    edit = PendingEdit.enter(4)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert isinstance(decision.outcome, OverrideEdit)
    assert decision.outcome.reason == "split_list"
    assert apply(buffer, edit, decision.outcome) == "1. a\n1. bc"
    assert decision.outcome.cursor_intent == CursorIntent(8)
    assert buffer.text[8:] == "bc"


def test_ordered_continuation_at_end_increments() -> None:
    buffer = AttributedBuffer("2. done")
    edit = PendingEdit.enter(7)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert apply(buffer, edit, decision.outcome) == "2. done\n3. "
    assert decision.outcome.cursor_intent == CursorIntent(11)


def test_following_items_are_not_renumbered() -> None:
    buffer = AttributedBuffer("1. a\n2. b")
    edit = PendingEdit.enter(4)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert apply(buffer, edit, decision.outcome) == "1. a\n2. \n2. b"


def test_empty_ordered_item_exits_list() -> None:
    buffer = AttributedBuffer("1. x\n  2. ")
    edit = PendingEdit.enter(10)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert decision.outcome.reason == "exit_list"
    assert decision.outcome.text == "\n  "
    assert decision.outcome.span == TextRange(10, 10)
    assert decision.outcome.cursor_intent == CursorIntent(13)


def test_empty_first_ordered_item_exits_like_others() -> None:
    buffer = AttributedBuffer("1. ")

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.enter(3))

    assert decision.outcome.reason == "exit_list"
    assert decision.outcome.text == "\n"


def test_unordered_continuation_reuses_bullet() -> None:
    buffer = AttributedBuffer("  * milk")
    edit = PendingEdit.enter(8)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert apply(buffer, edit, decision.outcome) == "  * milk\n  * "
    assert decision.outcome.cursor_intent == CursorIntent(13)


def test_unordered_split_and_exit() -> None:
    buffer = AttributedBuffer("• ab")
    edit = PendingEdit.enter(3)
    decision = make_engine().decide(ContinuationState(), buffer, edit)
    assert apply(buffer, edit, decision.outcome) == "• a\n• b"
    assert decision.outcome.cursor_intent == CursorIntent(6)

    empty = AttributedBuffer("• ")
    exit_decision = make_engine().decide(ContinuationState(), empty, PendingEdit.enter(2))
    assert exit_decision.outcome.reason == "exit_list"
    assert exit_decision.outcome.text == "\n"


def test_caret_inside_marker_is_plain_break() -> None:
    buffer = AttributedBuffer("10. item")

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.enter(1))

    assert decision.outcome == DefaultEdit(CursorIntent(2))


def test_plain_enter_sets_cursor_intent() -> None:
    buffer = AttributedBuffer("hello")

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.enter(2))

    assert not decision.is_override
    assert decision.outcome.cursor_intent == CursorIntent(3)


def test_continuation_copies_paragraph_attributes_only() -> None:
    buffer = AttributedBuffer(
        "1. x",
        StyleAttributes(format_flags={FormatFlag.BOLD}, is_blockquote=True),
    )

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.enter(4))

    assert decision.outcome.attrs == QUOTE


def test_blockquote_split_preserves_attributes() -> None:
    buffer = AttributedBuffer("> hello", QUOTE)
    edit = PendingEdit.enter(4)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert decision.outcome.reason == "split_blockquote"
    assert apply(buffer, edit, decision.outcome) == "> he\n> llo"
    assert decision.outcome.cursor_intent == CursorIntent(7)
    assert buffer.attributes_at(5) == QUOTE
    assert buffer.attributes_at(8) == QUOTE


def test_blockquote_continues_at_end() -> None:
    buffer = AttributedBuffer("> hi", QUOTE)
    edit = PendingEdit.enter(4)

    decision = make_engine().decide(ContinuationState(), buffer, edit)

    assert apply(buffer, edit, decision.outcome) == "> hi\n> "
    assert decision.outcome.attrs == QUOTE
    assert decision.outcome.cursor_intent == CursorIntent(7)


def test_empty_blockquote_exits_with_plain_newline() -> None:
    buffer = AttributedBuffer("> ", QUOTE)

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.enter(2))

    assert decision.outcome.reason == "exit_blockquote"
    assert decision.outcome.text == "\n"
    assert decision.outcome.attrs == PLAIN
    assert decision.outcome.cursor_intent == CursorIntent(3)


def test_backspace_through_blank_line() -> None:
    engine = make_engine()
    buffer = AttributedBuffer("x\n\n")
    edit = PendingEdit.backspace(3)

    first = engine.decide(ContinuationState(), buffer, edit)
    assert first.state == ContinuationState(True, 2)
    assert first.outcome == DefaultEdit(CursorIntent(2))

    second = engine.decide(first.state, buffer, edit)
    assert not second.state.was_on_empty_line
    assert second.outcome == DefaultEdit(CursorIntent(1))


def test_deleting_last_visible_character_arms_blank_line() -> None:
    buffer = AttributedBuffer("ab\n \ncd")

    decision = make_engine().decide(ContinuationState(), buffer, PendingEdit.backspace(4))

    assert decision.state == ContinuationState(True, 3)


def test_deleting_into_text_clears_blank_line() -> None:
    buffer = AttributedBuffer("ab\ncd")
    state = ContinuationState(True, 4)

    decision = make_engine().decide(state, buffer, PendingEdit.backspace(3))

    assert not decision.state.was_on_empty_line


def test_prefix_protected_backspace() -> None:
    buffer = AttributedBuffer("1. abc")
    edit = PendingEdit.backspace(2)

    decision = make_engine().decide(ContinuationState(True, 7), buffer, edit)

    assert decision.outcome == DefaultEdit(CursorIntent(1))
    assert decision.state == ContinuationState()
    assert apply(buffer, edit, decision.outcome) == "1 abc"


def test_typing_clears_state() -> None:
    decision = make_engine().decide(
        ContinuationState(True, 1), AttributedBuffer("ab"), PendingEdit.typing("z", 1)
    )

    assert decision.outcome == DefaultEdit()
    assert not decision.state.was_on_empty_line


@pytest.mark.parametrize(
    "edit",
    [PendingEdit.enter(9), PendingEdit(TextRange(2, 1), ""), PendingEdit.backspace(0)],
)
def test_invalid_edit_raises_range_error(edit: PendingEdit) -> None:
    buffer = AttributedBuffer("1. abc")

    with pytest.raises(RangeError):
        make_engine().decide(ContinuationState(True, 3), buffer, edit)

    assert buffer.text == "1. abc"
