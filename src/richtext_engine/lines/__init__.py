"""Line-level structure: list items, blockquotes and plain lines."""

from .classifier import (
    BLOCKQUOTE_PREFIX,
    BULLETS,
    Blockquote,
    Line,
    ListItem,
    OrderedListItem,
    PlainLine,
    UnorderedListItem,
    classify,
    classify_line,
    is_list_item,
    is_structural,
    leading_whitespace,
    line_range,
    prefix_span,
)

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
