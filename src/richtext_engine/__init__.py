"""UI-agnostic rich text editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "config",
    "engine",
    "lines",
    "runtime",
    "styles",
]

__version__ = "0.1.0"
