"""
Constants for the logging system.

Format strings, custom level numbers and ANSI sequences shared by the
logger, formatter and factory.
"""

import logging


class LogConstants:
    """Constants for the logging system."""

    # Default format strings
    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"

    # Rule width the message is padded to before extra fields
    DEFAULT_RULE_WIDTH: int = 60

    # Custom log levels
    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5, "TRACE2": 4}

    # Log level names for resolution (custom levels are added in __init__)
    LEVEL_NAMES: dict[str, int | bool] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "false": False,  # Special value to disable all logging
    }

    # ANSI escape sequences
    RESET: str = "\x1b[0m"
