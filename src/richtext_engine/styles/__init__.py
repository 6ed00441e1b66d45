"""Style attributes and their rendering derivation."""

from .attributes import (
    PLAIN,
    FontDescriptor,
    FormatFlag,
    HeaderLevel,
    ParagraphStyle,
    RenderAttributes,
    StyleAttributes,
    blockquote_paragraph,
    merge,
    render_attributes,
    resolve_font,
)

__all__ = [
    "PLAIN",
    "FontDescriptor",
    "FormatFlag",
    "HeaderLevel",
    "ParagraphStyle",
    "RenderAttributes",
    "StyleAttributes",
    "blockquote_paragraph",
    "merge",
    "render_attributes",
    "resolve_font",
]
