"""Editor configuration resolved from ``RICHTEXT_ENGINE_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "RICHTEXT_ENGINE_"
BULLETS = ("•", "-", "*")


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Presentation defaults shared by style resolution and commands."""

    base_font_size: float = 17.0
    default_bullet: str = "•"
    blockquote_indent: float = 20.0
    blockquote_spacing: float = 10.0
    blockquote_foreground: str = "darkGray"
    blockquote_background: str = "systemGray6"
    blockquote_placeholder: str = "Quote"

    def __post_init__(self) -> None:
        if self.base_font_size <= 0:
            raise ValueError("base_font_size must be positive")
        if self.default_bullet not in BULLETS:
            raise ValueError(
                f"default_bullet must be one of {BULLETS} (got {self.default_bullet!r})"
            )
        if not self.blockquote_placeholder:
            raise ValueError("blockquote_placeholder cannot be empty")


def _env_float(
    environ: Mapping[str, str],
    key: str,
    fallback: float,
    *,
    positive: bool = False,
) -> float:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = float(value)
    except ValueError:
        return fallback
    if positive and not parsed > 0:
        return fallback
    return parsed


def _env_str(environ: Mapping[str, str], key: str, fallback: str) -> str:
    value = environ.get(f"{ENV_PREFIX}{key}")
    return value if value else fallback


def _env_bullet(environ: Mapping[str, str], fallback: str) -> str:
    value = _env_str(environ, "DEFAULT_BULLET", fallback)
    return value if value in BULLETS else fallback


def load_config(environ: Optional[Mapping[str, str]] = None) -> EditorConfig:
    """Build an ``EditorConfig`` from the environment (or a given mapping).

    Unparseable or out-of-range values fall back to the defaults.
    """

    env = os.environ if environ is None else environ
    defaults = EditorConfig()
    return EditorConfig(
        base_font_size=_env_float(
            env, "BASE_FONT_SIZE", defaults.base_font_size, positive=True
        ),
        default_bullet=_env_bullet(env, defaults.default_bullet),
        blockquote_indent=_env_float(
            env, "BLOCKQUOTE_INDENT", defaults.blockquote_indent
        ),
        blockquote_spacing=_env_float(
            env, "BLOCKQUOTE_SPACING", defaults.blockquote_spacing
        ),
        blockquote_foreground=_env_str(
            env, "BLOCKQUOTE_FOREGROUND", defaults.blockquote_foreground
        ),
        blockquote_background=_env_str(
            env, "BLOCKQUOTE_BACKGROUND", defaults.blockquote_background
        ),
        blockquote_placeholder=_env_str(
            env, "BLOCKQUOTE_PLACEHOLDER", defaults.blockquote_placeholder
        ),
    )


__all__ = ["BULLETS", "EditorConfig", "ENV_PREFIX", "load_config"]
