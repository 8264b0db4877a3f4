"""
ANSI colors per log level.
"""

import logging

from .constants import LogConstants


class ColorManager:
    """Centralized ANSI color code management."""

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    DEFAULT = "\x1b[38m"

    RESET = LogConstants.RESET

    COLORS: dict[int, str] = {
        LogConstants.CUSTOM_LEVELS["TRACE2"]: "\x1b[38;5;238m",
        LogConstants.CUSTOM_LEVELS["TRACE"]: "\x1b[38;5;244m",
        logging.DEBUG: "\x1b[38;5;32m",
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def get_color_for_level(level: int) -> str:
        """Get the color sequence for a level, falling back to the default."""
        return ColorManager.COLORS.get(level, ColorManager.DEFAULT)
