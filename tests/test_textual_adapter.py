from __future__ import annotations

from typing import Dict, List, Mapping

from richtext_engine.adapters.textual import TextualRichTextAdapter, TextualUIHooks
from richtext_engine.buffer import AttributedBuffer
from richtext_engine.engine import EditingSession


def make_adapter(
    text: str = "",
    *,
    updates: List[str] | None = None,
    statuses: List[str] | None = None,
    toolbars: List[Dict[str, bool]] | None = None,
    logs: List[str] | None = None,
) -> TextualRichTextAdapter:
    updates = [] if updates is None else updates
    statuses = [] if statuses is None else statuses
    toolbars = [] if toolbars is None else toolbars
    logs = [] if logs is None else logs

    def record_toolbar(state: Mapping[str, bool]) -> None:
        toolbars.append(dict(state))

    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=statuses.append,
        update_toolbar=record_toolbar,
        log=logs.append,
    )
    return TextualRichTextAdapter(EditingSession(AttributedBuffer(text)), hooks)


def test_adapter_pushes_initial_snapshot() -> None:
    updates: List[str] = []
    toolbars: List[Dict[str, bool]] = []

    make_adapter("hi", updates=updates, toolbars=toolbars)

    assert updates == ["hi"]
    assert toolbars and not any(toolbars[0].values())


def test_adapter_types_and_continues_lists() -> None:
    updates: List[str] = []
    adapter = make_adapter(updates=updates)

    for char in "1. one":
        key = "space" if char == " " else char
        adapter.handle_textual_key(key, text=char)
    result = adapter.handle_textual_key("enter")

    assert result.consumed
    assert updates[-1] == "1. one\n2. "
    assert adapter.session.cursor == 10


def test_adapter_types_plus_key() -> None:
    adapter = make_adapter()

    result = adapter.handle_textual_key("+", text="+")

    assert result.consumed
    assert result.status == "edit"
    assert adapter.session.buffer.text == "+"
    assert adapter.session.cursor == 1


def test_adapter_backspace_and_motion() -> None:
    adapter = make_adapter("ab\ncd")

    adapter.handle_textual_key("home")
    assert adapter.session.cursor == 3
    adapter.handle_textual_key("left")
    adapter.handle_textual_key("left")
    assert adapter.session.cursor == 1
    adapter.handle_textual_key("end")
    assert adapter.session.cursor == 2

    adapter.handle_textual_key("backspace")

    assert adapter.session.buffer.text == "a\ncd"
    assert adapter.session.cursor == 1


def test_adapter_runs_shortcuts_and_reports_toolbar() -> None:
    statuses: List[str] = []
    toolbars: List[Dict[str, bool]] = []
    adapter = make_adapter(statuses=statuses, toolbars=toolbars)

    adapter.handle_textual_key("ctrl+b")
    adapter.handle_textual_key("2", modifiers=("ctrl",))

    assert statuses == ["bold:on", "header:H2"]
    assert toolbars[-1]["format.bold"]
    assert toolbars[-1]["header.h2"]
    assert not toolbars[-1]["header.h1"]


def test_adapter_ignores_unbound_shortcuts() -> None:
    updates: List[str] = []
    logs: List[str] = []
    adapter = make_adapter("x", updates=updates, logs=logs)

    result = adapter.handle_textual_key("ctrl+z")

    assert not result.consumed
    assert result.status == "unbound"
    assert adapter.session.buffer.text == "x"
    assert any(line.startswith("key ->") for line in logs)


def test_adapter_run_command_by_id() -> None:
    adapter = make_adapter("quote me")

    result = adapter.run_command("blockquote.quote_lines")

    assert result.message == "quote_lines"
    assert adapter.session.buffer.text == "> quote me"
