"""Styled text container: text plus a coalesced partition of style runs."""

from __future__ import annotations

from bisect import bisect_right
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, Iterable, List, Optional, Sequence, Tuple

from richtext_engine.runtime import telemetry
from richtext_engine.styles import PLAIN, StyleAttributes

from .state import TextRange
from .sync import BufferInvariantError
from .validation import ensure_offset, ensure_range

Segment = Tuple[int, StyleAttributes]  # (length, style)


@dataclass(frozen=True, slots=True)
class TextRun:
    start: int
    end: int
    style: StyleAttributes

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def range(self) -> TextRange:
        return TextRange(self.start, self.end)


class AttributedBuffer:
    """Text annotated with non-overlapping, coalesced style runs.

    Every mutator builds the candidate text and runs first, verifies the
    partition, and only then swaps them in, so a failing edit leaves the
    buffer untouched.
    """

    def __init__(
        self,
        text: str = "",
        style: StyleAttributes = PLAIN,
        *,
        name: str = "default",
    ) -> None:
        self.name = name
        self.version = 0
        self._text = text
        self._runs: Tuple[TextRun, ...] = _build_runs([(len(text), style)])

    @classmethod
    def from_runs(
        cls,
        text: str,
        runs: Iterable[TextRun],
        *,
        name: str = "default",
    ) -> "AttributedBuffer":
        """Build a buffer from explicit runs, coalescing equal neighbours."""

        ordered = sorted(runs, key=lambda run: run.start)
        expected = 0
        for run in ordered:
            if run.start != expected or run.end < run.start:
                raise BufferInvariantError(
                    f"Run {run.start}..{run.end} does not continue at {expected}"
                )
            expected = run.end
        if expected != len(text):
            raise BufferInvariantError(
                f"Runs cover {expected} characters but text has {len(text)}"
            )
        buffer = cls(name=name)
        buffer._text = text
        buffer._runs = _build_runs([(run.length, run.style) for run in ordered])
        buffer.verify()
        return buffer

    @property
    def text(self) -> str:
        return self._text

    @property
    def runs(self) -> Tuple[TextRun, ...]:
        return self._runs

    @property
    def length(self) -> int:
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def copy(self) -> "AttributedBuffer":
        clone = AttributedBuffer(name=self.name)
        clone._text = self._text
        clone._runs = self._runs
        clone.version = self.version
        return clone

    def substring(self, span: TextRange) -> str:
        span = ensure_range(len(self._text), span)
        return self._text[span.start : span.end]

    def run_at(self, position: int) -> Optional[TextRun]:
        ensure_offset(len(self._text), position)
        if not self._runs:
            return None
        if position == len(self._text):
            return self._runs[-1]
        index = bisect_right([run.start for run in self._runs], position) - 1
        return self._runs[index]

    def attributes_at(self, position: int) -> StyleAttributes:
        """Style covering ``position``; at the end, the style just typed."""

        run = self.run_at(position)
        return run.style if run is not None else PLAIN

    def insert(self, text: str, at: int, attrs: StyleAttributes = PLAIN) -> None:
        ensure_offset(len(self._text), at)
        if not text:
            return
        with Transaction(self, "insert") as tx:
            segments = (
                _slice_segments(self._runs, 0, at)
                + [(len(text), attrs)]
                + _slice_segments(self._runs, at, len(self._text))
            )
            tx.commit(self._text[:at] + text + self._text[at:], segments)

    def delete(self, span: TextRange) -> None:
        span = ensure_range(len(self._text), span)
        if span.is_empty:
            return
        with Transaction(self, "delete") as tx:
            segments = _slice_segments(self._runs, 0, span.start) + _slice_segments(
                self._runs, span.end, len(self._text)
            )
            tx.commit(self._text[: span.start] + self._text[span.end :], segments)

    def replace(
        self, span: TextRange, text: str, attrs: StyleAttributes = PLAIN
    ) -> None:
        """Delete ``span`` and insert ``text`` as one indivisible mutation."""

        span = ensure_range(len(self._text), span)
        if span.is_empty and not text:
            return
        with Transaction(self, "replace") as tx:
            segments = (
                _slice_segments(self._runs, 0, span.start)
                + [(len(text), attrs)]
                + _slice_segments(self._runs, span.end, len(self._text))
            )
            tx.commit(
                self._text[: span.start] + text + self._text[span.end :], segments
            )

    def set_attributes(self, span: TextRange, attrs: StyleAttributes) -> None:
        span = ensure_range(len(self._text), span)
        if span.is_empty:
            return
        with Transaction(self, "set_attributes") as tx:
            segments = (
                _slice_segments(self._runs, 0, span.start)
                + [(span.length, attrs)]
                + _slice_segments(self._runs, span.end, len(self._text))
            )
            tx.commit(self._text, segments)

    def map_attributes(
        self,
        span: TextRange,
        transform: Callable[[StyleAttributes], StyleAttributes],
    ) -> None:
        """Restyle every run piece inside ``span`` through ``transform``."""

        span = ensure_range(len(self._text), span)
        if span.is_empty:
            return
        with Transaction(self, "map_attributes") as tx:
            inner = [
                (length, transform(style))
                for length, style in _slice_segments(self._runs, span.start, span.end)
            ]
            segments = (
                _slice_segments(self._runs, 0, span.start)
                + inner
                + _slice_segments(self._runs, span.end, len(self._text))
            )
            tx.commit(self._text, segments)

    def verify(self) -> None:
        check_partition(len(self._text), self._runs)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry-wrapped commit point for a single buffer mutation."""

    def __init__(self, buffer: AttributedBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name, "version": self.buffer.version},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, text: str, segments: Sequence[Segment]) -> None:
        runs = _build_runs(segments)
        check_partition(len(text), runs)
        self.buffer._text = text
        self.buffer._runs = runs
        self.buffer.version += 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def check_partition(length: int, runs: Sequence[TextRun]) -> None:
    """Raise ``BufferInvariantError`` unless ``runs`` exactly tile ``[0, length)``."""

    expected = 0
    previous: Optional[TextRun] = None
    for run in runs:
        if run.start != expected:
            raise BufferInvariantError(
                f"Run starting at {run.start} leaves a gap or overlap at {expected}"
            )
        if run.end <= run.start:
            raise BufferInvariantError(f"Empty run at {run.start}")
        if previous is not None and previous.style == run.style:
            raise BufferInvariantError(
                f"Adjacent runs at {previous.start} and {run.start} share a style"
            )
        expected = run.end
        previous = run
    if expected != length:
        raise BufferInvariantError(
            f"Runs cover {expected} characters but text has {length}"
        )


def _slice_segments(runs: Sequence[TextRun], start: int, end: int) -> List[Segment]:
    segments: List[Segment] = []
    for run in runs:
        lo = max(run.start, start)
        hi = min(run.end, end)
        if lo < hi:
            segments.append((hi - lo, run.style))
    return segments


def _build_runs(segments: Iterable[Segment]) -> Tuple[TextRun, ...]:
    runs: List[TextRun] = []
    offset = 0
    for length, style in segments:
        if length <= 0:
            continue
        if runs and runs[-1].style == style:
            last = runs[-1]
            runs[-1] = TextRun(last.start, last.end + length, style)
        else:
            runs.append(TextRun(offset, offset + length, style))
        offset += length
    return tuple(runs)


__all__ = ["AttributedBuffer", "TextRun", "Transaction", "check_partition"]
