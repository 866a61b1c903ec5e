"""
Run Logging
===========

Every component owns a named logger so a run can be followed through the
loop, one line per event:

    [10:30:00] INFO  [Agent:3f2a91c0] Run started for 'math_agent': What is 2 + 2?
    [10:30:01] INFO  [ToolExecutor] Executing tool: calculator
    [10:30:02] WARN  [ToolExecutor] Tool calculator failed: Division by zero
    [10:30:02] ERROR [Agent:3f2a91c0] Run failed after 1 turns error_type=ProviderError

Levels (DEBUG, INFO, WARNING, ERROR) are filtered by LOG_LEVEL, or by
Config.log_level once the entry point applies it with set_default_level(). Lines are
colored when the stream is a terminal, and ERROR lines go to stderr.
Structured data is appended as key=value pairs, values JSON-encoded.

Usage:
    from adk.utils.logger import Logger

    logger = Logger("Agent")
    logger.info("Run started", {"run_id": "3f2a"})

    run_logger = logger.child("3f2a")
    run_logger.debug("Model requested 2 tool calls")
"""

import json
import os
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


# level -> (label, ANSI color)
_STYLES = {
    LogLevel.DEBUG: ("DEBUG", "\033[36m"),
    LogLevel.INFO: ("INFO", "\033[32m"),
    LogLevel.WARNING: ("WARN", "\033[33m"),
    LogLevel.ERROR: ("ERROR", "\033[31m"),
}
_RESET = "\033[0m"
_DIM = "\033[2m"
_LABEL_WIDTH = max(len(label) for label, _ in _STYLES.values())


def parse_log_level(value: str | None, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """
    Parse a level name such as "debug" or "WARN".

    Args:
        value: The level name (case-insensitive), or None
        default: Level returned for missing or unknown names

    Returns:
        LogLevel: The parsed level
    """
    if not value:
        return default
    name = value.strip().upper()
    if name == "WARN":
        return LogLevel.WARNING
    return LogLevel.__members__.get(name, default)


_default_level = parse_log_level(os.getenv("LOG_LEVEL"))


def set_default_level(level: LogLevel | str) -> None:
    """
    Set the level of every logger that was not given one explicitly.

    Module loggers are created at import time, before configuration is
    loaded; this is how Config.log_level reaches them.
    """
    global _default_level
    if isinstance(level, str):
        level = parse_log_level(level, _default_level)
    _default_level = level


def get_default_level() -> LogLevel:
    return _default_level


def _format_data(data: dict[str, Any]) -> str:
    return " ".join(
        f"{key}={value if isinstance(value, str) else json.dumps(value, default=str)}"
        for key, value in data.items()
    )


class Logger:
    """
    A named logger with a minimum level.

    Without an explicit level a logger follows the package default
    (LOG_LEVEL, or whatever set_default_level() chose). Child loggers share
    their parent's setting.

    Example:
        logger = Logger("ToolExecutor")
        logger.warning("Tool failed", {"tool": "calculator"})
    """

    def __init__(self, context: str = "", level: LogLevel | None = None):
        self.context = context
        self._level = level

    @property
    def level(self) -> LogLevel:
        return self._level if self._level is not None else _default_level

    def set_level(self, level: LogLevel | str) -> None:
        if isinstance(level, str):
            level = parse_log_level(level, self.level)
        self._level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def child(self, name: str) -> "Logger":
        """Logger for a nested scope: Logger("Agent").child("run") logs as [Agent:run]."""
        context = f"{self.context}:{name}" if self.context else name
        return Logger(context, level=self._level)

    def log(self, level: LogLevel, message: str, data: dict[str, Any] | None = None) -> None:
        """
        Emit one line if `level` passes this logger's minimum.

        Args:
            level: Severity of the event
            message: Human-readable text
            data: Optional structured fields appended as key=value
        """
        if not self.is_enabled_for(level):
            return

        stream: TextIO = sys.stderr if level >= LogLevel.ERROR else sys.stdout
        label, color = _STYLES[level]
        color_on = stream.isatty()

        parts = [datetime.now().strftime("[%H:%M:%S]")]
        parts.append(label.ljust(_LABEL_WIDTH))
        if self.context:
            parts.append(f"[{self.context}]")
        parts.append(message)
        if data:
            parts.append(_format_data(data))

        if color_on:
            parts[0] = f"{_DIM}{parts[0]}{_RESET}"
            parts[1] = f"{color}{parts[1]}{_RESET}"
        print(" ".join(parts), file=stream)

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.log(LogLevel.DEBUG, message, data)

    def info(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.log(LogLevel.INFO, message, data)

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Used for tool failures that the run recovers from."""
        self.log(LogLevel.WARNING, message, data)

    def error(
        self,
        message: str,
        error: BaseException | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """
        Log an error, optionally with the exception that caused it.

        Args:
            message: What failed
            error: Exception whose type and text are appended
            data: Extra structured fields
        """
        fields = dict(data or {})
        if error is not None:
            fields["error_type"] = type(error).__name__
            fields["error_message"] = str(error)
        self.log(LogLevel.ERROR, message, fields)


logger = Logger("ADK")
