"""
Configuration for the logging system.

LogConfig is immutable so a logger's display settings cannot drift after
creation; derive a new instance to change them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for loggers created by LoggerFactory.

    level is an int for normal levels, False to disable logging.
    """

    level: int | bool = logging.WARNING
    micros: bool = False
    colors: bool = False

    @staticmethod
    def _resolve_level(level: str | int | bool) -> int | bool:
        """Resolve level parameter to int or False."""
        from .constants import LogConstants
        from .exceptions import InvalidLogLevelError

        if isinstance(level, bool):
            return False if not level else logging.INFO
        elif isinstance(level, str):
            if level.isnumeric():
                return int(level)
            elif level.lower() in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[level.lower()]
            else:
                raise InvalidLogLevelError(level)
        return level

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        micros: bool = False,
        colors: bool = False,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Returns:
            LogConfig instance
        """
        return cls(level=cls._resolve_level(level), micros=micros, colors=colors)
