"""
Log formatter for trapinfra loggers.

Renders records as::

    [12:34:56,789] [W] signal is paused          [signal:SIGINT] [/trap]

Extra fields passed through ``extra={...}`` are rendered in sorted key order
after the message, padded to a common rule width.
"""

import logging
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants


def _format_value(value: Any) -> str:
    """Render one extra value; exceptions show their class name."""
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(map(str, value))
    return str(value)


def format_extra(extra: dict[str, Any] | None) -> str:
    """Format extra fields as ``[key:value]`` pairs, sorted by key."""
    if not extra:
        return ""
    parts = [f"[{key}:{_format_value(extra[key])}]" for key in sorted(extra)]
    return " ".join(parts)


class LogFormatter(logging.Formatter):
    """
    Formatter producing the bracketed trapinfra line layout.

    Args:
        config: Display configuration (colors, micros)
    """

    def __init__(self, config: LogConfig) -> None:
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format timestamp as time of day with optional microsecond precision."""
        s = super().formatTime(record, "%H:%M:%S")
        s += f",{int(record.msecs):03d}"
        if self._config.micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extra = format_extra(getattr(record, "trap_extra", None))
        if extra:
            line += " " * max(1, LogConstants.DEFAULT_RULE_WIDTH - len(line)) + extra
        line += f" [{record.name}]"

        if not self._config.colors:
            return line

        col = ColorManager.get_color_for_level(record.levelno)
        return col + line + ColorManager.RESET
