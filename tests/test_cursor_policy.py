from __future__ import annotations

from dataclasses import dataclass

from richtext_engine.buffer import CursorIntent
from richtext_engine.engine import CursorPolicy


@dataclass
class FakeHost:
    cursor: int = 0
    length: int = 10

    def get_cursor(self) -> int:
        return self.cursor

    def set_cursor(self, position: int) -> None:
        self.cursor = position

    def text_length(self) -> int:
        return self.length


def test_capture_records_host_cursor() -> None:
    host = FakeHost(cursor=4)
    policy = CursorPolicy(host)

    assert policy.captured is None
    assert policy.capture() == 4
    assert policy.captured == 4


def test_restore_clamps_to_text_bounds() -> None:
    host = FakeHost(cursor=3, length=5)
    policy = CursorPolicy(host)

    assert policy.restore(9) == 5
    assert host.cursor == 5
    assert policy.restore(-2) == 0
    assert host.cursor == 0


def test_settle_overrides_host_placement_only_with_intent() -> None:
    host = FakeHost(cursor=7)
    policy = CursorPolicy(host)

    assert policy.settle(None) == 7
    assert policy.settle(CursorIntent(2)) == 2
    assert host.cursor == 2
