"""Structural classification of a single buffer line.

``classify`` is total: a line that matches no pattern is a ``PlainLine``,
never an error. Patterns are tried in order: ordered list, unordered list,
blockquote.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from richtext_engine.buffer.attributed import AttributedBuffer
from richtext_engine.buffer.state import TextRange
from richtext_engine.buffer.validation import ensure_offset
from richtext_engine.config import BULLETS

ORDERED_PATTERN = re.compile(r"^(\s*)([0-9]+)\.(\s+)(.*)$")
UNORDERED_PATTERN = re.compile(
    r"^(\s*)([" + re.escape("".join(BULLETS)) + r"])(\s+)(.*)$"
)
BLOCKQUOTE_PREFIX = "> "


@dataclass(frozen=True, slots=True)
class PlainLine:
    span: TextRange


@dataclass(frozen=True, slots=True)
class OrderedListItem:
    span: TextRange
    indent: str
    number: int
    separator: str
    content: TextRange

    def marker(self, number: int | None = None) -> str:
        value = self.number if number is None else number
        return f"{self.indent}{value}.{self.separator}"


@dataclass(frozen=True, slots=True)
class UnorderedListItem:
    span: TextRange
    indent: str
    bullet: str
    separator: str
    content: TextRange

    def marker(self) -> str:
        return f"{self.indent}{self.bullet}{self.separator}"


@dataclass(frozen=True, slots=True)
class Blockquote:
    span: TextRange
    content: TextRange

    def marker(self) -> str:
        return BLOCKQUOTE_PREFIX


Line = Union[PlainLine, OrderedListItem, UnorderedListItem, Blockquote]
ListItem = Union[OrderedListItem, UnorderedListItem]


def _text_of(source: AttributedBuffer | str) -> str:
    return source if isinstance(source, str) else source.text


def line_range(source: AttributedBuffer | str, position: int) -> TextRange:
    """Span of the line holding ``position``, without its trailing newline.

    A newline belongs to the line it terminates.
    """

    text = _text_of(source)
    ensure_offset(len(text), position)
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end == -1:
        end = len(text)
    return TextRange(start, end)


def classify_line(line: str, start: int = 0) -> Line:
    """Classify the text of one line whose first character sits at ``start``."""

    span = TextRange(start, start + len(line))

    match = ORDERED_PATTERN.match(line)
    if match:
        return OrderedListItem(
            span=span,
            indent=match.group(1),
            number=int(match.group(2)),
            separator=match.group(3),
            content=TextRange(start + match.start(4), span.end),
        )

    match = UNORDERED_PATTERN.match(line)
    if match:
        return UnorderedListItem(
            span=span,
            indent=match.group(1),
            bullet=match.group(2),
            separator=match.group(3),
            content=TextRange(start + match.start(4), span.end),
        )

    if line.startswith(BLOCKQUOTE_PREFIX):
        return Blockquote(
            span=span,
            content=TextRange(start + len(BLOCKQUOTE_PREFIX), span.end),
        )

    return PlainLine(span=span)


def classify(source: AttributedBuffer | str, position: int) -> Line:
    text = _text_of(source)
    span = line_range(text, position)
    return classify_line(text[span.start : span.end], span.start)


def prefix_span(line: Line) -> TextRange:
    """Offsets taken by indent, marker and separator (empty for plain lines)."""

    if isinstance(line, PlainLine):
        return TextRange.caret(line.span.start)
    return TextRange(line.span.start, line.content.start)


def is_list_item(line: Line) -> bool:
    return isinstance(line, (OrderedListItem, UnorderedListItem))


def is_structural(line: Line) -> bool:
    return not isinstance(line, PlainLine)


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


__all__ = [
    "BLOCKQUOTE_PREFIX",
    "BULLETS",
    "Blockquote",
    "Line",
    "ListItem",
    "OrderedListItem",
    "PlainLine",
    "UnorderedListItem",
    "classify",
    "classify_line",
    "is_list_item",
    "is_structural",
    "leading_whitespace",
    "line_range",
    "prefix_span",
]
