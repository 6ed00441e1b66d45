"""Persisted form of an ``AttributedBuffer``.

Payload shape::

    {"text": "...",
     "runs": [{"start": 0, "end": 5, "headerLevel": "H1" | None,
               "formatFlags": ["bold"], "isBlockquote": false}]}

The note storage layer treats the payload (or its JSON string) as an opaque
blob; only this module knows its layout.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping

from richtext_engine.styles import FormatFlag, HeaderLevel, StyleAttributes

from .attributed import AttributedBuffer, TextRun
from .sync import BufferInvariantError


class CodecError(ValueError):
    """Raised when a persisted payload cannot be decoded."""


def encode_style(style: StyleAttributes) -> Dict[str, Any]:
    return {
        "headerLevel": style.header_level.value if style.header_level else None,
        "formatFlags": sorted(flag.value for flag in style.format_flags),
        "isBlockquote": style.is_blockquote,
    }


def decode_style(payload: Mapping[str, Any]) -> StyleAttributes:
    header = payload.get("headerLevel")
    flags = payload.get("formatFlags", [])
    if not isinstance(flags, list):
        raise CodecError(f"formatFlags must be a list, got {type(flags).__name__}")
    quoted = payload.get("isBlockquote", False)
    if not isinstance(quoted, bool):
        raise CodecError(f"isBlockquote must be a bool, got {type(quoted).__name__}")
    try:
        return StyleAttributes(
            header_level=HeaderLevel(header) if header is not None else None,
            format_flags=frozenset(FormatFlag(flag) for flag in flags),
            is_blockquote=quoted,
        )
    except ValueError as exc:
        raise CodecError(str(exc)) from exc


def encode(buffer: AttributedBuffer) -> Dict[str, Any]:
    runs: List[Dict[str, Any]] = []
    for run in buffer.runs:
        entry: Dict[str, Any] = {"start": run.start, "end": run.end}
        entry.update(encode_style(run.style))
        runs.append(entry)
    return {"text": buffer.text, "runs": runs}


def decode(payload: Mapping[str, Any], *, name: str = "default") -> AttributedBuffer:
    text = payload.get("text")
    if not isinstance(text, str):
        raise CodecError("payload is missing a 'text' string")
    raw_runs = payload.get("runs")
    if not isinstance(raw_runs, list):
        raise CodecError("payload is missing a 'runs' list")

    runs: List[TextRun] = []
    for index, raw in enumerate(raw_runs):
        if not isinstance(raw, Mapping):
            raise CodecError(f"run #{index} is not an object")
        try:
            start = int(raw["start"])
            end = int(raw["end"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CodecError(f"run #{index} has no valid start/end") from exc
        runs.append(TextRun(start, end, decode_style(raw)))

    try:
        return AttributedBuffer.from_runs(text, runs, name=name)
    except BufferInvariantError as exc:
        raise CodecError(f"runs do not partition the text: {exc}") from exc


def dumps(buffer: AttributedBuffer) -> str:
    return json.dumps(encode(buffer), ensure_ascii=False)


def loads(data: str | bytes, *, name: str = "default") -> AttributedBuffer:
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise CodecError(f"invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CodecError("payload must be a JSON object")
    return decode(payload, name=name)


__all__ = [
    "CodecError",
    "decode",
    "decode_style",
    "dumps",
    "encode",
    "encode_style",
    "loads",
]
