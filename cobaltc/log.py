"""Context-based logging configured from a JSON file."""

from __future__ import annotations

import functools
import json
import logging
import os
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from logging.handlers import RotatingFileHandler
from typing import IO, Any

DEFAULT_CONTEXT = "main"
CONFIG_ENV_VAR = "LOG_CONFIG_PATH"


class LogConfigParseError(RuntimeError):
    """Raised when a logging configuration cannot be read or applied."""


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    CRITICAL = 5
    OFF = 6


_LEVEL_NAMES = {
    LogLevel.TRACE: "trace",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warn",
    LogLevel.ERROR: "error",
    LogLevel.CRITICAL: "critical",
    LogLevel.OFF: "off",
}
_LEVELS_BY_NAME = {name: level for level, name in _LEVEL_NAMES.items()}

_PY_LEVELS = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.OFF: logging.CRITICAL + 10,
}


def log_level_from_string(level: str) -> LogLevel:
    """Parse a level name; unknown names give INFO."""
    return _LEVELS_BY_NAME.get(level, LogLevel.INFO)


def log_level_to_string(level: LogLevel) -> str:
    """Return the configuration name of a level."""
    return _LEVEL_NAMES.get(level, "unknown")


@dataclass
class ContextConfig:
    enabled: bool = True
    level: LogLevel = LogLevel.INFO
    console: bool = False
    file_path: str = ""
    max_size_mb: int = 5
    max_files: int = 3


@dataclass
class LoggerConfig:
    default_level: LogLevel = LogLevel.INFO
    contexts: dict[str, ContextConfig] = field(default_factory=dict)


def _typed_value(obj: dict[str, Any], key: str, default: Any, kind: type, context: str) -> Any:
    if key not in obj:
        return default
    value = obj[key]
    # bool is a subclass of int; keep them apart.
    if kind is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise LogConfigParseError(f"'{key}' must be an integer for context: {context}")
    if not isinstance(value, kind):
        raise LogConfigParseError(f"'{key}' has the wrong type for context: {context}")
    return value


def read_config_file(config_file: str | os.PathLike[str]) -> LoggerConfig:
    """Read a LoggerConfig from a JSON file."""
    try:
        with open(config_file, encoding="utf-8") as handle:
            text = handle.read()
    except OSError:
        raise LogConfigParseError(f"Failed to open config file: {os.fspath(config_file)}") from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LogConfigParseError(f"Invalid JSON format in config file: {exc}") from None

    if not isinstance(data, dict) or "default_level" not in data:
        raise LogConfigParseError("Missing required field 'default_level' in config")

    default_level = data["default_level"]
    if not isinstance(default_level, str):
        raise LogConfigParseError("Invalid 'default_level' value: expected a string")
    config = LoggerConfig(default_level=log_level_from_string(default_level))

    if "contexts" not in data:
        return config
    contexts = data["contexts"]
    if not isinstance(contexts, dict):
        raise LogConfigParseError("'contexts' must be an object")

    for name, raw in contexts.items():
        if not isinstance(raw, dict):
            raise LogConfigParseError(f"Configuration for context '{name}' must be an object")
        is_default = name == DEFAULT_CONTEXT
        level_name = _typed_value(raw, "level", log_level_to_string(config.default_level), str, name)
        cfg = ContextConfig(
            enabled=_typed_value(raw, "enabled", True, bool, name),
            level=log_level_from_string(level_name),
            console=_typed_value(raw, "console", is_default, bool, name),
        )
        if not cfg.console and is_default:
            raise LogConfigParseError(" main's console can't be set to false")
        if "file" in raw:
            if not isinstance(raw["file"], str):
                raise LogConfigParseError(f"'file' must be a string for context: {name}")
            cfg.file_path = raw["file"]
            cfg.max_size_mb = _typed_value(raw, "max_size_mb", 5, int, name)
            cfg.max_files = _typed_value(raw, "max_files", 3, int, name)
        config.contexts[name] = cfg

    return config


class ContextLogger:
    """Routes messages to per-context outputs, filtered by per-context levels."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._default_level = LogLevel.INFO
        self._console = logging.StreamHandler(stream if stream is not None else sys.stdout)
        self._console.setFormatter(logging.Formatter("%(message)s"))
        self._loggers: dict[str, logging.Logger] = {}
        self._file_handlers: dict[str, RotatingFileHandler] = {}
        self._context_configs: dict[str, ContextConfig] = {}
        self._loggers[DEFAULT_CONTEXT] = self._new_logger(
            DEFAULT_CONTEXT, [self._console], self._default_level
        )

    def __enter__(self) -> ContextLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._close()

    @staticmethod
    def _new_logger(name: str, handlers: list[logging.Handler], level: LogLevel) -> logging.Logger:
        logger = logging.Logger(name)
        logger.propagate = False
        logger.setLevel(_PY_LEVELS[level])
        for handler in handlers:
            logger.addHandler(handler)
        return logger

    def _close(self) -> None:
        for logger in self._loggers.values():
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
        for handler in self._file_handlers.values():
            handler.close()
        self._file_handlers.clear()
        self._loggers.clear()
        self._console.flush()

    def log(self, context: str, level: LogLevel, message: str) -> None:
        if not self.is_enabled(context, level) or level == LogLevel.OFF:
            return
        self._context_logger(context).log(_PY_LEVELS[level], message)

    def trace(self, context: str, message: str) -> None:
        self.log(context, LogLevel.TRACE, message)

    def debug(self, context: str, message: str) -> None:
        self.log(context, LogLevel.DEBUG, message)

    def info(self, context: str, message: str) -> None:
        self.log(context, LogLevel.INFO, message)

    def warn(self, context: str, message: str) -> None:
        self.log(context, LogLevel.WARN, message)

    def error(self, context: str, message: str) -> None:
        self.log(context, LogLevel.ERROR, message)

    def critical(self, context: str, message: str) -> None:
        self.log(context, LogLevel.CRITICAL, message)

    def is_enabled(self, context: str, level: LogLevel) -> bool:
        """Whether a message of this level in this context would be emitted."""
        cfg = self._context_configs.get(context)
        if cfg is not None:
            return cfg.enabled and level >= cfg.level
        return level >= self._default_level

    def configure(self, config: LoggerConfig) -> None:
        """Apply a configuration."""
        self._default_level = config.default_level
        for name, context_config in config.contexts.items():
            self._configure_context(name, context_config)

    def configure_file(self, config_file: str | os.PathLike[str]) -> None:
        """Read a JSON configuration file and apply it."""
        try:
            self.configure(read_config_file(config_file))
        except Exception as exc:
            msg = f"Configuration error: {exc}"
            print(msg, file=sys.stderr)
            raise LogConfigParseError(msg) from exc

    def flush_all(self) -> None:
        for handler in self._file_handlers.values():
            handler.flush()
        self._console.flush()

    def _configure_context(self, name: str, config: ContextConfig) -> None:
        self._context_configs[name] = config
        if not config.enabled:
            return

        is_default = name == DEFAULT_CONTEXT
        handlers: list[logging.Handler] = []

        if config.file_path:
            max_bytes = config.max_size_mb * 1024 * 1024
            try:
                file_handler = RotatingFileHandler(
                    config.file_path,
                    maxBytes=max_bytes,
                    backupCount=config.max_files,
                    encoding="utf-8",
                )
            except OSError as exc:
                raise LogConfigParseError(
                    f"Failed to add log file for context '{name}': {exc}"
                ) from exc
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            old = self._file_handlers.pop(name, None)
            if old is not None:
                old.close()
            self._file_handlers[name] = file_handler
            handlers.append(file_handler)

        if config.console and not is_default:
            handlers.append(self._console)

        if not handlers and not is_default:
            raise LogConfigParseError(f"No output specified for context {name}")

        if not is_default:
            self._loggers[name] = self._new_logger(name, handlers, config.level)
        elif handlers:
            self._loggers[DEFAULT_CONTEXT].addHandler(handlers[-1])

    def _context_logger(self, context: str) -> logging.Logger:
        logger = self._loggers.get(context)
        if logger is not None:
            return logger
        default = self._loggers[DEFAULT_CONTEXT]
        default.log(_PY_LEVELS[LogLevel.ERROR], f"Log context not initialized: {context}")
        return default


@functools.lru_cache(maxsize=None)
def get_logger() -> ContextLogger:
    """Return the process-wide logger, configured from $LOG_CONFIG_PATH when set."""
    logger = ContextLogger()
    path = os.environ.get(CONFIG_ENV_VAR)
    if path:
        logger.configure_file(path)
    return logger