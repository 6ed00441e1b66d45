from __future__ import annotations

import pytest

from richtext_engine.buffer import AttributedBuffer, RangeError, TextRange
from richtext_engine.lines import (
    Blockquote,
    OrderedListItem,
    PlainLine,
    UnorderedListItem,
    classify,
    classify_line,
    is_list_item,
    is_structural,
    line_range,
    prefix_span,
)


def test_line_range_excludes_newline() -> None:
    text = "first\nsecond\n"

    assert line_range(text, 0) == TextRange(0, 5)
    assert line_range(text, 5) == TextRange(0, 5)
    assert line_range(text, 6) == TextRange(6, 12)
    assert line_range(text, 13) == TextRange(13, 13)


def test_line_range_rejects_out_of_bounds() -> None:
    with pytest.raises(RangeError):
        line_range("abc", 4)


def test_ordered_item_fields() -> None:
    line = classify_line("  12.  step", start=10)

    assert isinstance(line, OrderedListItem)
    assert line.indent == "  "
    assert line.number == 12
    assert line.separator == "  "
    assert line.content == TextRange(17, 21)
    assert line.marker() == "  12.  "
    assert line.marker(13) == "  13.  "
    assert prefix_span(line) == TextRange(10, 17)


@pytest.mark.parametrize("bullet", ["•", "-", "*"])
def test_unordered_item_bullets(bullet: str) -> None:
    line = classify_line(f"{bullet} milk")

    assert isinstance(line, UnorderedListItem)
    assert line.bullet == bullet
    assert line.marker() == f"{bullet} "
    assert line.content == TextRange(2, 6)


def test_empty_list_items_still_classify() -> None:
    ordered = classify_line("2. ")
    bullet = classify_line("- ")

    assert isinstance(ordered, OrderedListItem)
    assert ordered.content.is_empty
    assert isinstance(bullet, UnorderedListItem)
    assert bullet.content.is_empty


def test_blockquote_line() -> None:
    line = classify_line("> said", start=4)

    assert isinstance(line, Blockquote)
    assert line.content == TextRange(6, 10)
    assert line.marker() == "> "
    assert is_structural(line)
    assert not is_list_item(line)


@pytest.mark.parametrize("text", ["", "plain", "1.missing space", "-dash", ">quote", "a. b"])
def test_unmatched_lines_are_plain(text: str) -> None:
    line = classify_line(text)

    assert isinstance(line, PlainLine)
    assert prefix_span(line).is_empty
    assert not is_structural(line)


def test_classify_reads_the_line_under_position() -> None:
    buffer = AttributedBuffer("intro\n1. one\n> q")

    assert isinstance(classify(buffer, 2), PlainLine)
    assert isinstance(classify(buffer, 8), OrderedListItem)
    assert isinstance(classify(buffer, 12), OrderedListItem)
    assert isinstance(classify(buffer, 15), Blockquote)
    assert classify(buffer, 8).span == TextRange(6, 12)
