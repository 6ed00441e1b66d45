"""Style attribute values and the rendering attributes derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional

from richtext_engine.config import EditorConfig


class HeaderLevel(str, Enum):
    """Header styles; at most one is active on any character."""

    H1 = "H1"
    H2 = "H2"
    H3 = "H3"
    H4 = "H4"
    H5 = "H5"
    H6 = "H6"

    @property
    def font_size(self) -> float:
        return _HEADER_SIZES[self]

    @property
    def font_weight(self) -> str:
        if self in (HeaderLevel.H1, HeaderLevel.H2):
            return "bold"
        if self in (HeaderLevel.H3, HeaderLevel.H4):
            return "semibold"
        return "medium"

    @property
    def label(self) -> str:
        return f"Heading {self.value[1]}"


_HEADER_SIZES = {
    HeaderLevel.H1: 32.0,
    HeaderLevel.H2: 28.0,
    HeaderLevel.H3: 24.0,
    HeaderLevel.H4: 20.0,
    HeaderLevel.H5: 18.0,
    HeaderLevel.H6: 16.0,
}


class FormatFlag(str, Enum):
    """Independently combinable character formats."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"

    @property
    def label(self) -> str:
        return self.name[0]


def _normalize_flags(flags: Iterable[FormatFlag | str]) -> FrozenSet[FormatFlag]:
    return frozenset(FormatFlag(flag) for flag in flags)


@dataclass(frozen=True, slots=True)
class StyleAttributes:
    """Formatting that applies at a point or over a range."""

    header_level: Optional[HeaderLevel] = None
    format_flags: FrozenSet[FormatFlag] = field(default_factory=frozenset)
    is_blockquote: bool = False

    def __post_init__(self) -> None:
        if self.header_level is not None and not isinstance(
            self.header_level, HeaderLevel
        ):
            object.__setattr__(self, "header_level", HeaderLevel(self.header_level))
        object.__setattr__(self, "format_flags", _normalize_flags(self.format_flags))

    @property
    def is_plain(self) -> bool:
        return (
            self.header_level is None
            and not self.format_flags
            and not self.is_blockquote
        )

    def has_format(self, flag: FormatFlag) -> bool:
        return flag in self.format_flags

    def toggle_header(self, level: HeaderLevel) -> "StyleAttributes":
        new_level = None if self.header_level == level else level
        return replace(self, header_level=new_level)

    def toggle_format(self, flag: FormatFlag) -> "StyleAttributes":
        return replace(self, format_flags=self.format_flags ^ {flag})

    def toggle_blockquote(self) -> "StyleAttributes":
        return replace(self, is_blockquote=not self.is_blockquote)

    def paragraph_projection(self) -> "StyleAttributes":
        """Keep only the paragraph-level part (what a new line inherits)."""

        return StyleAttributes(is_blockquote=self.is_blockquote)


PLAIN = StyleAttributes()


def merge(base: StyleAttributes, overlay: StyleAttributes) -> StyleAttributes:
    """Layer ``overlay`` on ``base``.

    A header set on the overlay replaces the base header, the overlay's
    blockquote flag wins, and format flags are unioned.
    """

    return StyleAttributes(
        header_level=overlay.header_level or base.header_level,
        format_flags=base.format_flags | overlay.format_flags,
        is_blockquote=overlay.is_blockquote,
    )


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    size: float
    weight: str = "regular"
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True, slots=True)
class ParagraphStyle:
    head_indent: float = 0.0
    first_line_head_indent: float = 0.0
    tail_indent: float = 0.0
    paragraph_spacing: float = 0.0
    paragraph_spacing_before: float = 0.0


@dataclass(frozen=True, slots=True)
class RenderAttributes:
    """Concrete presentation attributes a host renders a run with."""

    font: FontDescriptor
    paragraph: Optional[ParagraphStyle] = None
    foreground: Optional[str] = None
    background: Optional[str] = None
    underline: bool = False
    strikethrough: bool = False


def resolve_font(
    style: StyleAttributes, config: Optional[EditorConfig] = None
) -> FontDescriptor:
    """Resolve the font: base size, then header size/weight, then bold/italic."""

    cfg = config or EditorConfig()
    font = FontDescriptor(size=cfg.base_font_size)
    if style.header_level is not None:
        font = FontDescriptor(
            size=style.header_level.font_size, weight=style.header_level.font_weight
        )
    bold = FormatFlag.BOLD in style.format_flags
    italic = FormatFlag.ITALIC in style.format_flags
    if bold or italic:
        # bold/italic are traits on whatever size is already active
        font = replace(
            font,
            bold=bold,
            italic=italic,
            weight="bold" if bold else font.weight,
        )
    return font


def blockquote_paragraph(config: Optional[EditorConfig] = None) -> ParagraphStyle:
    cfg = config or EditorConfig()
    return ParagraphStyle(
        head_indent=cfg.blockquote_indent,
        first_line_head_indent=0.0,
        tail_indent=-cfg.blockquote_indent,
        paragraph_spacing=cfg.blockquote_spacing,
        paragraph_spacing_before=cfg.blockquote_spacing,
    )


def render_attributes(
    style: StyleAttributes, config: Optional[EditorConfig] = None
) -> RenderAttributes:
    cfg = config or EditorConfig()
    paragraph = None
    foreground = None
    background = None
    if style.is_blockquote:
        paragraph = blockquote_paragraph(cfg)
        foreground = cfg.blockquote_foreground
        background = cfg.blockquote_background
    return RenderAttributes(
        font=resolve_font(style, cfg),
        paragraph=paragraph,
        foreground=foreground,
        background=background,
        underline=FormatFlag.UNDERLINE in style.format_flags,
        strikethrough=FormatFlag.STRIKETHROUGH in style.format_flags,
    )


__all__ = [
    "FontDescriptor",
    "FormatFlag",
    "HeaderLevel",
    "PLAIN",
    "ParagraphStyle",
    "RenderAttributes",
    "StyleAttributes",
    "blockquote_paragraph",
    "merge",
    "render_attributes",
    "resolve_font",
]
