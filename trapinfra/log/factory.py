"""
Factory for creating and configuring loggers.

Loggers use slash-separated names (``/trap``, ``/trap/flush``). A logger
created with ``create`` owns a stderr handler; loggers obtained with
``derive`` are lightweight views sharing their root's handler.
"""

import logging
import sys
from typing import cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def _check_existing_logger(name: str) -> Logger | None:
        """Return the registered trapinfra logger with this name, if any."""
        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger):
            return existing
        return None

    @staticmethod
    def create(name: str, config: LogConfig, stream=None) -> Logger:
        """
        Create a logger writing to ``stream`` (stderr by default).

        Example:
            >>> config = LogConfig.from_params(level="debug")
            >>> lg = LoggerFactory.create("/trap", config)
            >>> lg.debug("flushed", extra={"signal": "SIGINT"})
            [12:34:56,789] [D] flushed                     [signal:SIGINT] [/trap]
        """
        existing = LoggerFactory._check_existing_logger(name)
        if existing is not None:
            return existing

        lg = Logger(name, config)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.parent = logging.root

        # Register in loggerDict so later lookups return the same instance
        logging.root.manager.loggerDict[name] = lg

        lg.trace2(
            "created logger",
            extra={"level": logging.getLevelName(cast(int, lg.level))},
        )
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a view logger sharing the root's handlers.

        Example:
            >>> LoggerFactory.derive(lg, ["trap", "flush"]).name
            '/trap/flush'
        """
        if isinstance(tags, str):
            tags = [tags]
        prefix = "" if parent.name == "/" else parent.name
        name = prefix + "/" + "/".join(tags)

        existing = LoggerFactory._check_existing_logger(name)
        if existing is not None:
            return existing

        lg = Logger(name, parent.config)
        lg.setLevel(logging.NOTSET)
        lg._root_logger = parent.root_logger
        lg.parent = parent
        lg.propagate = False

        logging.root.manager.loggerDict[name] = lg
        return lg
