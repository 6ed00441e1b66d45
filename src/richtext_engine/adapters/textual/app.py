"""Executable Textual app that hosts the rich text engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.style import Style
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use richtext_engine.adapters.textual.app"
    ) from exc

from richtext_engine.buffer import BufferMirror, TextRun, loads
from richtext_engine.config import load_config
from richtext_engine.engine import EditingSession
from richtext_engine.runtime.telemetry import configure, get_logger
from richtext_engine.styles import FormatFlag, StyleAttributes

from .controller import TextualRichTextAdapter, TextualUIHooks

_TOOLBAR_LABELS = (
    ("header.h1", "H1"),
    ("header.h2", "H2"),
    ("header.h3", "H3"),
    ("format.bold", "B"),
    ("format.italic", "I"),
    ("format.underline", "U"),
    ("format.strikethrough", "S"),
    ("blockquote.toggle", ">"),
)


def run_style(style: StyleAttributes) -> Style:
    """Map a run's attributes onto a terminal style."""

    return Style(
        bold=style.has_format(FormatFlag.BOLD) or style.header_level is not None,
        italic=style.has_format(FormatFlag.ITALIC) or style.is_blockquote,
        underline=style.has_format(FormatFlag.UNDERLINE),
        strike=style.has_format(FormatFlag.STRIKETHROUGH),
        dim=style.is_blockquote,
    )


def render_mirror(mirror: BufferMirror) -> Text:
    text = Text()
    runs: Tuple[TextRun, ...] = mirror.runs
    for run in runs:
        text.append(mirror.text[run.start : run.end], style=run_style(run.style))
    if not mirror.selection.is_empty:
        text.stylize("on blue", mirror.selection.start, mirror.selection.end)
    caret = mirror.cursor
    if caret < len(mirror.text) and mirror.text[caret] != "\n":
        text.stylize("reverse", caret, caret + 1)
        return text
    # caret sits on a line break or past the end
    head, tail = text[:caret], text[caret:]
    head.append(" ", style="reverse")
    head.append_text(tail)
    return head


@dataclass
class UIState:
    status_text: str = ""
    toolbar_text: str = ""


class RichTextEngineApp(App[None]):
    """Minimal Textual UI embedding the rich text engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#toolbar {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: Optional[EditingSession] = None) -> None:
        super().__init__()
        self._state = UIState()
        self.session = session or EditingSession()
        self.adapter: TextualRichTextAdapter | None = None
        self._logger = get_logger("richtext_engine.demo")
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._toolbar_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._toolbar_widget = Static("", id="toolbar")
        yield self._toolbar_widget
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_toolbar=self._update_toolbar,
            log=self._log_line,
        )
        self.adapter = TextualRichTextAdapter(self.session, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_toolbar(self, state: Mapping[str, bool]) -> None:
        labels = []
        for command_id, label in _TOOLBAR_LABELS:
            labels.append(f"[{label}]" if state.get(command_id) else f" {label} ")
        self._state.toolbar_text = " ".join(labels)
        if self._toolbar_widget:
            self._toolbar_widget.update(self._state.toolbar_text)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key in {"enter", "return"}:
            return ("enter", None, ())
        if key == "space":
            return ("space", " ", ())
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return (key, None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the rich text engine Textual demo.")
    parser.add_argument(
        "--load",
        type=Path,
        default=None,
        help="JSON document (text + runs) to open instead of an empty note",
    )
    parser.add_argument(
        "--name",
        default="note",
        help="Buffer name used in telemetry (default: note)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("quiet", "production", "development"),
        default="quiet",
        help="Telemetry preset while the UI owns the terminal (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # console logging would draw over the Textual screen
    configure(preset=args.log_preset)
    config = load_config()
    if args.load is not None:
        buffer = loads(args.load.read_text(encoding="utf-8"), name=args.name)
        session = EditingSession(buffer, config=config, name=args.name)
    else:
        session = EditingSession(config=config, name=args.name)
    RichTextEngineApp(session).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
