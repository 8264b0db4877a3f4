"""
Logger class for the logging system.

Extends the standard logger with the TRACE and TRACE2 levels and keeps
structured ``extra`` fields on the record for the formatter instead of
spreading them over record attributes.
"""

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants


class Logger(logging.Logger):
    """
    Enhanced logger with trace levels and structured extra fields.

    Derived loggers (see LoggerFactory.derive) have no handlers of their own
    and delegate to their root logger's handlers.
    """

    def __init__(self, name: str, config: LogConfig | None = None):
        """
        Initialize the logger.

        Args:
            name: Logger name
            config: Logger configuration, default LogConfig if None
        """
        if config is None:
            config = LogConfig()

        # A disabled logger sits above CRITICAL until set_level lowers it
        level = logging.CRITICAL + 1 if config.level is False else config.level
        super().__init__(name, level)

        self._config = config
        self._root_logger: Logger | None = None

    @property
    def config(self) -> LogConfig:
        """Get logger configuration."""
        return self._config

    @property
    def root_logger(self) -> "Logger":
        """Logger whose handlers this logger writes to."""
        return self._root_logger or self

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record carrying the extra fields as ``trap_extra``."""
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        record.trap_extra = dict(extra) if extra else {}
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE level message."""
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def trace2(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE2 level message (most verbose level)."""
        level = LogConstants.CUSTOM_LEVELS["TRACE2"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """Pass a record to the root logger's handlers for derived loggers."""
        if self._root_logger is None:
            super().callHandlers(record)
            return
        for handler in self._root_logger.handlers:
            if record.levelno >= handler.level:
                handler.handle(record)
