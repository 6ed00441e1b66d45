"""Minimal Textual adapter that wires an EditingSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional

from richtext_engine.buffer import BufferMirror
from richtext_engine.commands import (
    CommandRegistry,
    CommandResult,
    KeyStroke,
    load_default_commands,
)
from richtext_engine.engine import EditingSession
from richtext_engine.styles import FormatFlag, HeaderLevel

_MOTION_KEYS = ("left", "right", "home", "end")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    # Active toolbar toggles keyed by command id
    update_toolbar: Callable[[Mapping[str, bool]], None] = _noop
    log: Callable[[str], None] = _noop


class TextualRichTextAdapter:
    """Bridges an EditingSession + command registry to a Textual surface."""

    def __init__(
        self,
        session: EditingSession,
        hooks: TextualUIHooks,
        *,
        registry: Optional[CommandRegistry] = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        if registry is None:
            registry = load_default_commands(CommandRegistry())
        self.registry = registry
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a Textual key event into a shortcut, edit or caret move."""

        if len(key) == 1:
            # printable characters are keys as-is, "+" included
            stroke = KeyStroke(key, tuple(modifiers))
        else:
            parsed = KeyStroke.parse(key)
            stroke = KeyStroke(parsed.key, parsed.modifiers + tuple(modifiers))
        self._log_state("key ->", key=stroke.token, text=text)
        result = self._dispatch(stroke, text)
        if result.message:
            self.hooks.update_status(result.message)
        self._refresh()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def run_command(self, command_id: str) -> CommandResult:
        result = self.registry.execute(command_id, self.session)
        if result.message:
            self.hooks.update_status(result.message)
        self._refresh()
        return result

    def toolbar_state(self) -> Dict[str, bool]:
        session = self.session
        if session.selection.is_empty:
            attrs = session.get_typing_attributes()
        else:
            attrs = session.buffer.attributes_at(session.selection.start)
        state: Dict[str, bool] = {}
        for level in HeaderLevel:
            state[f"header.{level.value.lower()}"] = attrs.header_level == level
        for flag in FormatFlag:
            state[f"format.{flag.value}"] = attrs.has_format(flag)
        state["blockquote.toggle"] = attrs.is_blockquote
        return state

    def _dispatch(self, stroke: KeyStroke, text: Optional[str]) -> CommandResult:
        binding = self.registry.lookup(stroke)
        if binding is not None:
            return self.registry.execute(binding.command_id, self.session)

        session = self.session
        if stroke.modifiers and stroke.modifiers != ("shift",):
            return CommandResult(consumed=False, status="unbound")
        if stroke.key == "enter":
            session.press_enter()
            return CommandResult(status="edit")
        if stroke.key == "backspace":
            session.press_backspace()
            return CommandResult(status="edit")
        if stroke.key in _MOTION_KEYS:
            self._move(stroke.key)
            return CommandResult(status="motion")
        if text and text.isprintable():
            session.type_text(text)
            return CommandResult(status="edit")
        return CommandResult(consumed=False, status="ignored")

    def _move(self, key: str) -> None:
        session = self.session
        selection = session.selection
        if key == "left":
            if selection.is_empty:
                session.move_cursor(-1)
            else:
                session.select(selection.start)
        elif key == "right":
            if selection.is_empty:
                session.move_cursor(1)
            else:
                session.select(selection.end)
        else:
            text = session.buffer.text
            caret = session.cursor
            if key == "home":
                session.select(text.rfind("\n", 0, caret) + 1)
            else:
                stop = text.find("\n", caret)
                session.select(len(text) if stop == -1 else stop)

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.session.mirror())
        self.hooks.update_toolbar(self.toolbar_state())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "cursor": session.cursor,
            "selection": (session.selection.start, session.selection.end),
            "armed": session.state.was_on_empty_line,
            "buffer": session.buffer.name,
            "buffer_version": session.buffer.version,
        }


__all__ = ["TextualRichTextAdapter", "TextualUIHooks"]
