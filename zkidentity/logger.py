"""Structured JSON-lines logger with levels, bound fields and a process-wide default."""

from __future__ import annotations

import json
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, TextIO


class Level(IntEnum):
    """Severity levels, ordered from most verbose to silent."""

    TRACE = -1
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5
    NO_LEVEL = 6
    DISABLED = 7

    @property
    def label(self) -> str:
        """Name written in the ``level`` field; empty for ``NO_LEVEL``."""
        if self is Level.NO_LEVEL:
            return ""
        return self.name.lower()


class LoggerPanic(RuntimeError):
    """Raised after a message is logged at panic level."""


_RFC3339 = "rfc3339"
_UNIX = "unix"


def _caller() -> str:
    frame = sys._getframe(1)
    while frame is not None and frame.f_code.co_filename == __file__:
        frame = frame.f_back
    if frame is None:
        return ""
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class Logger:
    """Writes one JSON object per log line to its output stream."""

    def __init__(
        self,
        stream: TextIO | None = None,
        level: Level = Level.TRACE,
        time_format: str = _RFC3339,
        fields: dict[str, Any] | None = None,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._level = Level(level)
        self._time_format = time_format
        self._fields: dict[str, Any] = dict(fields or {})

    @property
    def level(self) -> Level:
        return self._level

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._fields)

    def _copy(self, **extra: Any) -> Logger:
        return Logger(
            stream=self._stream,
            level=self._level,
            time_format=self._time_format,
            fields={**self._fields, **extra},
        )

    def with_output(self, stream: TextIO) -> Logger:
        """Redirect output to ``stream``; returns this logger."""
        self._stream = stream
        return self

    def with_level(self, level: Level) -> Logger:
        """Set the minimum level; returns this logger."""
        self._level = Level(level)
        return self

    def with_context(self, ctx: Any) -> Logger:
        """Return an independent copy of this logger."""
        return self._copy()

    def bind(self, **kwargs: Any) -> Logger:
        """Return a copy that adds ``kwargs`` to every line."""
        return self._copy(**kwargs)

    def _enabled(self, level: Level) -> bool:
        return not (level < self._level or self._level >= Level.DISABLED)

    def _timestamp(self) -> Any:
        if self._time_format == _UNIX:
            return int(time.time())
        return datetime.now().astimezone().isoformat(timespec="microseconds")

    def _write(self, level: Level, err: BaseException | None, msg: str, args: tuple) -> str:
        message = msg % args if args else msg
        if not self._enabled(level):
            return message
        entry: dict[str, Any] = {}
        if level.label:
            entry["level"] = level.label
        entry.update(self._fields)
        if err is not None:
            entry["error"] = str(err)
        entry["time"] = self._timestamp()
        entry["caller"] = _caller()
        entry["message"] = message
        self._stream.write(json.dumps(entry, default=str) + "\n")
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()
        return message

    def debug(self, msg: str, *args: Any) -> None:
        self._write(Level.DEBUG, None, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._write(Level.INFO, None, msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._write(Level.WARN, None, msg, args)

    def error(self, err: BaseException | None, msg: str, *args: Any) -> None:
        self._write(Level.ERROR, err, msg, args)

    def fatal(self, err: BaseException | None, msg: str, *args: Any) -> None:
        """Log at fatal level, then exit the process with status 1."""
        self._write(Level.FATAL, err, msg, args)
        raise SystemExit(1)

    def panic(self, err: BaseException | None, msg: str, *args: Any) -> None:
        """Log at panic level, then raise :class:`LoggerPanic`."""
        message = self._write(Level.PANIC, err, msg, args)
        raise LoggerPanic(message)

    def log(self, level: Level, msg: str, *args: Any) -> None:
        """Log at an arbitrary level without exiting or raising."""
        self._write(Level(level), None, msg, args)


@dataclass
class LoggerConfig:
    log_level: Level = Level.DEBUG


@dataclass
class LoggerConfigJson:
    log_level: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> LoggerConfigJson:
        data = data or {}
        return cls(log_level=int(data.get("log_level", 0)))

    def convert_to_domain(self) -> LoggerConfig:
        return LoggerConfig(log_level=Level(self.log_level))


@dataclass
class GlobalLoggerConfig:
    args: list[tuple[str, str]] = field(default_factory=list)


def new() -> Logger:
    """Logger to stdout with RFC 3339 timestamps and no level filter."""
    return Logger(time_format=_RFC3339)


def new_from_config(cfg: LoggerConfig) -> Logger:
    """Logger to stdout with Unix timestamps at the configured level."""
    level = cfg.log_level
    if level == Level.NO_LEVEL:
        level = Level.INFO
    return Logger(level=level, time_format=_UNIX)


_default_logger: Logger | None = None
_default_lock = threading.Lock()


def init_default_logger(config: GlobalLoggerConfig) -> None:
    """Create the process-wide logger; later calls have no effect."""
    global _default_logger
    with _default_lock:
        if _default_logger is not None:
            return
        _default_logger = new().bind(**dict(config.args))


def default() -> Logger:
    """Return the process-wide logger."""
    if _default_logger is None:
        raise RuntimeError("Default logger not initialized: call init_default_logger() first")
    return _default_logger