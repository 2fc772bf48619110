"""
trinav.log - Injectable logging with proper Python exception handling.

Every component takes an optional sink at construction time. A sink is any
object with a ``log(level, message)`` method; without one nothing is logged.

Usage:
    from trinav.log import Log, LoggingSink

    log = Log(LoggingSink())
    log.info("Hello")

    try:
        do_something()
    except Exception as e:
        log.error(e, "Failed to do something")  # includes traceback
"""

from __future__ import annotations

import logging
import traceback
from enum import Enum
from typing import Callable, Optional, Protocol, Union


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class LogSink(Protocol):
    def log(self, level: LogLevel, message: str) -> None:
        ...


class NullLogSink:
    """Discards everything."""

    def log(self, level: LogLevel, message: str) -> None:
        pass


class LoggingSink:
    """Forwards messages to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger if logger is not None else logging.getLogger("trinav")

    def log(self, level: LogLevel, message: str) -> None:
        self.logger.log(_STDLIB_LEVELS[LogLevel(level)], message)


class CallbackLogSink:
    """Wraps a plain ``callback(level, message)`` function."""

    def __init__(self, callback: Callable[[LogLevel, str], None]):
        self.callback = callback

    def log(self, level: LogLevel, message: str) -> None:
        self.callback(level, message)


SinkLike = Union[LogSink, Callable[[LogLevel, str], None], None]


def as_sink(sink: SinkLike) -> LogSink:
    """Normalise None, a sink object or a callable into a sink."""
    if sink is None:
        return NullLogSink()
    if hasattr(sink, "log"):
        return sink
    if callable(sink):
        return CallbackLogSink(sink)
    raise TypeError(f"Not a log sink: {sink!r}")


class Log:
    """Level helpers over a single sink."""

    def __init__(self, sink: SinkLike = None):
        self.sink = as_sink(sink)

    @property
    def enabled(self) -> bool:
        return not isinstance(self.sink, NullLogSink)

    def debug(self, msg_or_exc, context: str = ""):
        self._emit(LogLevel.DEBUG, msg_or_exc, context)

    def info(self, msg_or_exc, context: str = ""):
        self._emit(LogLevel.INFO, msg_or_exc, context)

    def warn(self, msg_or_exc, context: str = ""):
        self._emit(LogLevel.WARN, msg_or_exc, context)

    def warning(self, msg_or_exc, context: str = ""):
        """Alias for warn()."""
        self.warn(msg_or_exc, context)

    def error(self, msg_or_exc, context: str = ""):
        self._emit(LogLevel.ERROR, msg_or_exc, context)

    def _emit(self, level: LogLevel, msg_or_exc, context: str):
        if isinstance(msg_or_exc, BaseException):
            self.sink.log(level, _format_exception(msg_or_exc, context))
        else:
            self.sink.log(level, str(msg_or_exc))


def _format_exception(exc: BaseException, context: str) -> str:
    """Format exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        return f"{context}: {exc_type}: {exc_msg}\n{tb}"
    return f"{exc_type}: {exc_msg}\n{tb}"
