"""Dataclasses describing toolbar commands and their keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

_MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    known = [m for m in _MODIFIER_ORDER if m in values]
    extra = sorted(values.difference(_MODIFIER_ORDER))
    return tuple(known + extra)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+shift+7``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        raw = token.strip()
        if raw == "+" or raw.endswith("++"):
            # the plus key itself, bare or after modifiers
            return cls("+", tuple(part for part in raw[:-2].split("+") if part))
        parts = [part for part in raw.split("+") if part]
        if not parts:
            raise ValueError("shortcut cannot be empty")
        return cls(parts[-1], tuple(parts[:-1]))


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of running a command against a session."""

    consumed: bool = True
    status: str = "ok"
    message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CommandRef:
    """Callable metadata for one toolbar command."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    telemetry_name: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class ShortcutBinding:
    """Associates a key stroke with a command."""

    id: str
    stroke: KeyStroke
    command_id: str
    description: str = ""
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = [
    "CommandRef",
    "CommandResult",
    "KeyStroke",
    "ShortcutBinding",
]
