"""
Logging for trapinfra.

Extends Python's standard logging with:
- Custom TRACE and TRACE2 log levels for detailed debugging
- Structured extra fields rendered as ``[key:value]`` pairs
- Optional ANSI colors per level
- Slash-separated logger hierarchy with derived "view" loggers

Log Level Control:
- Use standard levels: debug, info, warning, error, critical
- Use custom levels: trace, trace2
- Disable logging completely: False or "false"
"""

import logging

from .config import LogConfig
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

# Define custom log levels for more granular debugging
logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")
logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE2"], "TRACE2")

LogConstants.LEVEL_NAMES.update(
    {
        "trace": LogConstants.CUSTOM_LEVELS["TRACE"],
        "trace2": LogConstants.CUSTOM_LEVELS["TRACE2"],
    }
)


def resolve_level(s: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        s: Log level as string name, numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(s, bool):
        return s

    if str(s).isnumeric():
        return int(s)

    if isinstance(s, str) and s.lower() in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[s.lower()]

    raise InvalidLogLevelError(s)


def create_lg(
    name: str, level: str | int | bool = "warning", colors: bool = False
) -> Logger:
    """
    Create a logger with the specified level.

    Example:
        >>> lg = create_lg("/trap", "debug")
    """
    config = LogConfig.from_params(level, colors=colors)
    return LoggerFactory.create(name, config)


def derive_lg(lg: Logger, tags: str | list[str]) -> Logger:
    """
    Derive a logger with tags from a parent logger.

    Example:
        >>> flush_lg = derive_lg(lg, "flush")
    """
    return LoggerFactory.derive(lg, tags)


def set_level(lg: Logger, level: str | int | bool) -> None:
    """Change a logger's level; False disables it."""
    resolved = resolve_level(level)
    if resolved is False:
        lg.setLevel(logging.CRITICAL + 1)
    elif resolved is True:
        lg.setLevel(logging.INFO)
    else:
        lg.setLevel(resolved)


__all__ = [
    "Logger",
    "LoggerFactory",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LogError",
    "InvalidLogLevelError",
    "resolve_level",
    "create_lg",
    "derive_lg",
    "set_level",
]
