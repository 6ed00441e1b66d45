from __future__ import annotations

import pytest

from richtext_engine.config import EditorConfig, load_config
from richtext_engine.styles import (
    PLAIN,
    FormatFlag,
    HeaderLevel,
    StyleAttributes,
    merge,
    render_attributes,
    resolve_font,
)


def test_format_flags_normalize_from_strings() -> None:
    style = StyleAttributes(header_level="H3", format_flags=["bold", FormatFlag.ITALIC])

    assert style.header_level is HeaderLevel.H3
    assert style.format_flags == frozenset({FormatFlag.BOLD, FormatFlag.ITALIC})
    assert style == StyleAttributes(
        header_level=HeaderLevel.H3,
        format_flags={FormatFlag.ITALIC, FormatFlag.BOLD},
    )


def test_toggles_are_involutions() -> None:
    style = StyleAttributes(format_flags={FormatFlag.UNDERLINE})

    assert style.toggle_format(FormatFlag.BOLD).toggle_format(FormatFlag.BOLD) == style
    assert style.toggle_header(HeaderLevel.H1).header_level is HeaderLevel.H1
    assert (
        style.toggle_header(HeaderLevel.H1).toggle_header(HeaderLevel.H1).header_level
        is None
    )
    assert style.toggle_blockquote().is_blockquote
    assert not PLAIN.toggle_blockquote().toggle_blockquote().is_blockquote


def test_switching_header_replaces_previous_level() -> None:
    style = StyleAttributes(header_level=HeaderLevel.H1)

    assert style.toggle_header(HeaderLevel.H4).header_level is HeaderLevel.H4


def test_merge_layers_overlay() -> None:
    base = StyleAttributes(header_level=HeaderLevel.H2, format_flags={FormatFlag.BOLD})
    overlay = StyleAttributes(format_flags={FormatFlag.ITALIC}, is_blockquote=True)

    merged = merge(base, overlay)

    assert merged.header_level is HeaderLevel.H2
    assert merged.format_flags == {FormatFlag.BOLD, FormatFlag.ITALIC}
    assert merged.is_blockquote
    assert merge(base, StyleAttributes(header_level=HeaderLevel.H5)).header_level is (
        HeaderLevel.H5
    )


def test_merge_overlay_can_clear_blockquote() -> None:
    quote = StyleAttributes(format_flags={FormatFlag.BOLD}, is_blockquote=True)

    merged = merge(quote, PLAIN)

    assert merged.is_blockquote is False
    assert merged.format_flags == {FormatFlag.BOLD}


def test_paragraph_projection_keeps_only_blockquote() -> None:
    style = StyleAttributes(
        header_level=HeaderLevel.H1,
        format_flags={FormatFlag.BOLD},
        is_blockquote=True,
    )

    assert style.paragraph_projection() == StyleAttributes(is_blockquote=True)
    assert StyleAttributes(format_flags={FormatFlag.BOLD}).paragraph_projection().is_plain


def test_resolve_font_applies_header_then_traits() -> None:
    assert resolve_font(PLAIN).size == 17.0

    header = resolve_font(StyleAttributes(header_level=HeaderLevel.H3))
    assert header.size == 24.0
    assert header.weight == "semibold"

    bold_header = resolve_font(
        StyleAttributes(
            header_level=HeaderLevel.H6,
            format_flags={FormatFlag.BOLD, FormatFlag.ITALIC},
        )
    )
    assert bold_header.size == 16.0
    assert bold_header.bold and bold_header.italic
    assert bold_header.weight == "bold"


def test_render_attributes_for_blockquote() -> None:
    config = EditorConfig(blockquote_indent=12.0, blockquote_foreground="gray")

    rendered = render_attributes(
        StyleAttributes(format_flags={FormatFlag.STRIKETHROUGH}, is_blockquote=True),
        config,
    )

    assert rendered.paragraph is not None
    assert rendered.paragraph.head_indent == 12.0
    assert rendered.paragraph.tail_indent == -12.0
    assert rendered.foreground == "gray"
    assert rendered.strikethrough
    assert not rendered.underline
    assert render_attributes(PLAIN).paragraph is None


def test_header_metadata() -> None:
    assert [level.font_size for level in HeaderLevel] == [32, 28, 24, 20, 18, 16]
    assert HeaderLevel.H2.label == "Heading 2"
    assert HeaderLevel.H6.font_weight == "medium"
    assert FormatFlag.STRIKETHROUGH.label == "S"


def test_load_config_reads_prefixed_environment() -> None:
    config = load_config(
        {
            "RICHTEXT_ENGINE_BASE_FONT_SIZE": "15",
            "RICHTEXT_ENGINE_DEFAULT_BULLET": "-",
            "RICHTEXT_ENGINE_BLOCKQUOTE_SPACING": "not-a-number",
            "RICHTEXT_ENGINE_BLOCKQUOTE_PLACEHOLDER": "",
        }
    )

    assert config.base_font_size == 15.0
    assert config.default_bullet == "-"
    assert config.blockquote_spacing == 10.0
    assert config.blockquote_placeholder == "Quote"


def test_config_rejects_unknown_bullet() -> None:
    with pytest.raises(ValueError):
        EditorConfig(default_bullet="+")
    with pytest.raises(ValueError):
        EditorConfig(base_font_size=0)


@pytest.mark.parametrize(
    "environ",
    [
        {"RICHTEXT_ENGINE_BASE_FONT_SIZE": "0"},
        {"RICHTEXT_ENGINE_BASE_FONT_SIZE": "-3"},
        {"RICHTEXT_ENGINE_BASE_FONT_SIZE": "nan"},
        {"RICHTEXT_ENGINE_DEFAULT_BULLET": "x"},
        {"RICHTEXT_ENGINE_DEFAULT_BULLET": "+"},
    ],
)
def test_load_config_falls_back_on_out_of_range_values(environ: dict) -> None:
    assert load_config(environ) == EditorConfig()
