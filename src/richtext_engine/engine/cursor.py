"""Cursor correction around buffer mutations."""

from __future__ import annotations

from typing import Optional

from richtext_engine.buffer.state import CursorIntent
from richtext_engine.buffer.sync import CursorHost


class CursorPolicy:
    """Re-asserts the engine's intended cursor after the host moved it.

    Host surfaces reposition the caret as a side effect of programmatic
    mutation (usually to the end of the changed region). The policy does
    not decide positions; it only captures and restores them.
    """

    def __init__(self, host: CursorHost) -> None:
        self.host = host
        self._captured: Optional[int] = None

    @property
    def captured(self) -> Optional[int]:
        return self._captured

    def capture(self) -> int:
        self._captured = self.host.get_cursor()
        return self._captured

    def restore(self, position: int) -> int:
        clamped = min(max(0, position), self.host.text_length())
        self.host.set_cursor(clamped)
        return clamped

    def settle(self, intent: Optional[CursorIntent]) -> int:
        """Apply ``intent`` if present; otherwise keep the host's placement."""

        if intent is None:
            return self.host.get_cursor()
        return self.restore(intent.position)


__all__ = ["CursorPolicy"]
