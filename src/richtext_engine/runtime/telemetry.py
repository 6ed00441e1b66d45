"""Telemetry for the rich text engine, built on telelog.

Engine layers only use four entry points:

``configure(...)`` -- activate a preset, explicit settings or a raw telelog config
``get_logger(name)`` -- fetch (and cache) a logger bound to the active config
``record_event(name, ...)`` -- emit one structured ``event::<name>`` line
``span(name, ...)`` -- profile a block, optionally tracked as a component

Settings come from ``RICHTEXT_ENGINE_*`` environment variables unless a
preset or explicit settings are given.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "RICHTEXT_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "richtext_engine")
PRODUCTION_LOG_FILE = "richtext_engine.log"

_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Flat description of a telelog configuration."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", self.level.upper())
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(key: str, fallback: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{key}")
            return fallback if raw is None else raw.lower() in _TRUTHY

        size = env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE")
        return cls(
            level=env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO",
            console=not flag("DISABLE_CONSOLE", False),
            colored=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=int(size) if size else 2048,
        )


PRESETS: Dict[str, TelemetrySettings] = {
    "development": TelemetrySettings(level="DEBUG", colored=True),
    "production": TelemetrySettings(
        console=False, log_file=PRODUCTION_LOG_FILE, buffered=True
    ),
    # host UIs that own the terminal
    "quiet": TelemetrySettings(level="WARNING", console=False),
}


def preset_settings(
    preset: str, environ: Optional[Mapping[str, str]] = None
) -> TelemetrySettings:
    try:
        settings = PRESETS[preset.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    env = os.environ if environ is None else environ
    log_file = env.get(f"{ENV_PREFIX}LOG_FILE")
    if settings.log_file and log_file:
        settings = replace(settings, log_file=log_file)
    return settings


def build_config(settings: TelemetrySettings) -> Any:
    """Translate settings into a ``telelog.Config`` (profiling always on)."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Replace the active telelog configuration and drop cached loggers.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt as-is.
    preset:
        One of ``"development"``, ``"production"`` or ``"quiet"``.
    settings:
        ``TelemetrySettings`` to build a config from.

    At most one of the three may be given; with none, settings are read
    from the environment.
    """

    global _ACTIVE_CONFIG
    if sum(option is not None for option in (config, preset, settings)) > 1:
        raise ValueError("Provide only one of `config`, `preset` or `settings`.")

    if config is None:
        if preset is not None:
            settings = preset_settings(preset)
        config = build_config(settings or TelemetrySettings.from_env())

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active configuration."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(TelemetrySettings.from_env())
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with ``payload`` as key/value data when supported."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def note(self, message: str, **extra: Any) -> None:
        self._log("debug", f"span::{message}", extra)

    def fail(self, reason: str) -> None:
        self._log("error", "span::fail", {"reason": reason})

    def _log(self, level: str, message: str, extra: Dict[str, Any]) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update(extra)
        _emit(self.logger, level, message, payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component called ``name``; a
    string names the component. ``metadata`` stays attached to the logger's
    context until the block exits, and an escaping exception is logged via
    ``SpanHandle.fail`` before it propagates.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "configure",
    "get_logger",
    "logger",
    "preset_settings",
    "record_event",
    "span",
]
