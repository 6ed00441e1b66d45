"""Textual host adapter for the rich text engine."""

from .controller import TextualRichTextAdapter, TextualUIHooks

__all__ = ["TextualRichTextAdapter", "TextualUIHooks"]
