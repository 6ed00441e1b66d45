"""Toolbar command registry and default shortcuts."""

from .models import CommandRef, CommandResult, KeyStroke, ShortcutBinding
from .registry import CommandConflictError, CommandRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_commands

__all__ = [
    "CommandConflictError",
    "CommandRef",
    "CommandRegistry",
    "CommandResult",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "KeyStroke",
    "RegistryStats",
    "ShortcutBinding",
    "load_default_commands",
]
