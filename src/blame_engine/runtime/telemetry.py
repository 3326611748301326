"""Engine telemetry on top of telelog.

Settings come from ``BLAME_ENGINE_*`` environment variables unless a preset
or an explicit ``telelog.Config`` is passed to ``configure``. Events are
emitted as ``event::<name>`` records; ``span`` profiles a block and closes
it with a ``span::done`` (or ``span::fail``) record carrying its metadata.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BLAME_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "blame_engine")

# Preset name -> (min level, console, colors, buffered, default log file).
_PRESETS: Dict[str, tuple[str, bool, bool, bool, Optional[str]]] = {
    "development": ("DEBUG", True, True, False, None),
    "production": ("INFO", False, False, True, "blame_engine.log"),
    "quiet": ("ERROR", False, False, False, None),
}

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _setting(name: str) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name)


def _enabled(name: str) -> bool:
    return (_setting(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _as_text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return value if isinstance(value, str) else str(value)


def _preset_config(preset: str) -> Any:
    try:
        level, console, colored, buffered, log_file = _PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset '{preset}'.") from None

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(colored)
    if buffered:
        config.with_buffering(True)
    target = _setting("LOG_FILE") or log_file
    if target:
        config.with_file_output(target)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_setting("LOG_LEVEL") or "WARNING").upper())
    console = not _enabled("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _enabled("NO_COLOR"))
    if _enabled("LOG_JSON"):
        config.with_json_format(True)
    if _setting("LOG_FILE"):
        config.with_file_output(_setting("LOG_FILE"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Switch to ``config``, a named preset, or the environment settings.

    Presets are ``"development"``, ``"production"`` and ``"quiet"``. Loggers
    handed out earlier are forgotten so the new settings apply everywhere.
    """

    global _config
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()
    # Dispatch spans rely on telelog's profiler.
    config.with_profiling(True)
    _config = config
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    key = name or DEFAULT_LOGGER_NAME
    if key not in _loggers:
        if _config is None:
            configure()
        _loggers[key] = tl.Logger.with_config(key, _config)
    return _loggers[key]


def _write(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    structured: Optional[Callable[..., None]] = getattr(
        logger, f"{level.lower()}_with", None
    )
    if structured is not None:
        structured(message, [(str(k), _as_text(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, level.lower(), None)
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
    payload = {"event": name, **(data or {})}
    _write(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Live view of a running ``span``; metadata added here lands in its
    closing record."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _as_text(value)

    def close(self, level: str, outcome: str, **extra: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata, **extra}
        if self.component_name:
            payload["component"] = self.component_name
        _write(self.logger, level, f"span::{outcome}", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` also tracks it as a telelog component of the same
    name; a string names the component explicitly. Initial ``metadata`` is
    pushed as logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=name if component is True else (component or None),
        metadata={key: _as_text(value) for key, value in (metadata or {}).items()},
    )
    pushed = list(handle.metadata)

    with ExitStack() as stack:
        for key in pushed:
            log.add_context(key, handle.metadata[key])
            stack.callback(log.remove_context, key)
        if handle.component_name:
            stack.enter_context(log.track_component(handle.component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.close("error", "fail", reason=str(exc))
            raise
        handle.close("debug", "done")


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
