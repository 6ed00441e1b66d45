"""Built-in toolbar commands and the shortcuts that trigger them."""

from __future__ import annotations

from functools import partial
from typing import Iterable

from richtext_engine.styles import FormatFlag, HeaderLevel

from . import actions
from .models import CommandRef, KeyStroke, ShortcutBinding
from .registry import CommandRegistry

_FORMAT_SHORTCUTS = {
    FormatFlag.BOLD: "ctrl+b",
    FormatFlag.ITALIC: "ctrl+i",
    FormatFlag.UNDERLINE: "ctrl+u",
    FormatFlag.STRIKETHROUGH: "ctrl+shift+x",
}


def _header_commands() -> Iterable[CommandRef]:
    for level in HeaderLevel:
        yield CommandRef(
            id=f"header.{level.value.lower()}",
            handler=partial(actions.toggle_header, level=level),
            description=f"Toggle {level.label}",
        )


def _format_commands() -> Iterable[CommandRef]:
    for flag in FormatFlag:
        yield CommandRef(
            id=f"format.{flag.value}",
            handler=partial(actions.toggle_format, flag=flag),
            description=f"Toggle {flag.value}",
        )


DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    *_header_commands(),
    *_format_commands(),
    CommandRef(
        id="blockquote.toggle",
        handler=actions.toggle_blockquote,
        description="Toggle blockquote styling",
    ),
    CommandRef(
        id="list.ordered",
        handler=actions.insert_ordered_list,
        description="Insert or convert to an ordered list",
    ),
    CommandRef(
        id="list.unordered",
        handler=actions.insert_unordered_list,
        description="Insert or convert to a bulleted list",
    ),
    CommandRef(
        id="blockquote.insert",
        handler=actions.insert_blockquote,
        description="Insert a blockquote paragraph",
    ),
    CommandRef(
        id="blockquote.quote_lines",
        handler=actions.quote_lines,
        description="Quote the current line or selected lines",
    ),
)

DEFAULT_BINDINGS: tuple[ShortcutBinding, ...] = (
    *(
        ShortcutBinding(
            id=f"shortcut.header.{level.value.lower()}",
            stroke=KeyStroke(level.value[1], ("ctrl",)),
            command_id=f"header.{level.value.lower()}",
            description=f"Toggle {level.label}",
        )
        for level in HeaderLevel
    ),
    *(
        ShortcutBinding(
            id=f"shortcut.format.{flag.value}",
            stroke=KeyStroke.parse(token),
            command_id=f"format.{flag.value}",
            description=f"Toggle {flag.value}",
        )
        for flag, token in _FORMAT_SHORTCUTS.items()
    ),
    ShortcutBinding(
        id="shortcut.list.ordered",
        stroke=KeyStroke.parse("ctrl+shift+7"),
        command_id="list.ordered",
        description="Ordered list",
    ),
    ShortcutBinding(
        id="shortcut.list.unordered",
        stroke=KeyStroke.parse("ctrl+shift+8"),
        command_id="list.unordered",
        description="Bulleted list",
    ),
    ShortcutBinding(
        id="shortcut.blockquote.toggle",
        stroke=KeyStroke.parse("ctrl+shift+period"),
        command_id="blockquote.toggle",
        description="Blockquote styling",
    ),
    ShortcutBinding(
        id="shortcut.blockquote.quote_lines",
        stroke=KeyStroke.parse("ctrl+shift+q"),
        command_id="blockquote.quote_lines",
        description="Quote lines",
    ),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    commands: Iterable[CommandRef] = DEFAULT_COMMANDS,
    bindings: Iterable[ShortcutBinding] = DEFAULT_BINDINGS,
) -> CommandRegistry:
    for command in commands:
        registry.register_command(command, replace=True)
    for binding in bindings:
        registry.register_binding(binding, replace=True)
    return registry


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_COMMANDS", "load_default_commands"]
