"""Command registry: toolbar commands plus their keyboard shortcuts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from richtext_engine.runtime.telemetry import span

from .models import CommandRef, CommandResult, KeyStroke, ShortcutBinding


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int


class CommandConflictError(RuntimeError):
    """Raised when a shortcut is already taken by another binding."""

    def __init__(self, binding: ShortcutBinding, conflicts: Iterable[ShortcutBinding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Shortcut '{binding.key_signature}' of '{binding.id}' conflicts with "
            f"{[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class CommandRegistry:
    """Owns command references and shortcut bindings."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._bindings: Dict[str, ShortcutBinding] = {}
        self._by_signature: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_command(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> ShortcutBinding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_command(
        self, command: CommandRef, *, replace: bool = False
    ) -> CommandRef:
        with span(
            "commands::register_command",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ):
            if not replace and command.id in self._commands:
                raise ValueError(f"Command '{command.id}' already registered")
            self._commands[command.id] = command
            return command

    def register_binding(
        self, binding: ShortcutBinding, *, replace: bool = False
    ) -> ShortcutBinding:
        with span(
            "commands::register_binding",
            logger_name=self._logger_name,
            component="commands",
            metadata={"binding_id": binding.id, "shortcut": binding.key_signature},
        ) as handle:
            if binding.command_id not in self._commands:
                handle.add_metadata("missing_command", binding.command_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command '{binding.command_id}'"
                )

            conflict = self.lookup(binding.stroke)
            if conflict is not None and conflict.id != binding.id:
                if not replace:
                    handle.add_metadata("conflicts", conflict.id)
                    raise CommandConflictError(binding, (conflict,))
                self._drop_binding(conflict)

            existing = self._bindings.get(binding.id)
            if existing is not None:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._drop_binding(existing)

            self._bindings[binding.id] = binding
            self._by_signature[binding.key_signature] = binding.id
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[ShortcutBinding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop_binding(binding)
        self._revision += 1
        return binding

    def lookup(self, stroke: KeyStroke | str) -> Optional[ShortcutBinding]:
        if isinstance(stroke, str):
            stroke = KeyStroke.parse(stroke)
        binding_id = self._by_signature.get(stroke.token)
        return self._bindings.get(binding_id) if binding_id else None

    def execute(self, command_id: str, *args: object) -> CommandResult:
        command = self.get_command(command_id)
        with span(
            f"commands::{command.telemetry_name}",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ):
            outcome = command(*args)
        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(consumed=True)

    def iter_commands(self) -> Iterator[CommandRef]:
        yield from self._commands.values()

    def iter_bindings(self) -> Iterator[ShortcutBinding]:
        yield from self._bindings.values()

    def bindings_for(self, command_id: str) -> list[ShortcutBinding]:
        return [b for b in self._bindings.values() if b.command_id == command_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
        )

    def _drop_binding(self, binding: ShortcutBinding) -> None:
        self._bindings.pop(binding.id, None)
        if self._by_signature.get(binding.key_signature) == binding.id:
            self._by_signature.pop(binding.key_signature, None)


__all__ = [
    "CommandConflictError",
    "CommandRegistry",
    "RegistryStats",
]
