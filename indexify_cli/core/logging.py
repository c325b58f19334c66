"""
Structured Logging for indexify-cli.

All modules obtain loggers from here rather than from ``logging`` directly:

    from indexify_cli.core.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Listing content", namespace="default")
    logger.activity("content::download", id="abc")

Fields passed as keyword arguments are appended to the message and also
attached to the record as ``record.fields`` so handlers (telemetry) can read
them without parsing text.

Handlers are installed once per process by configure_logging(), which the
root command calls from its pre_run step. Until then records propagate to an
unconfigured root logger and are dropped below WARNING.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from rich.console import Console
from rich.logging import RichHandler

#: Name of the field that marks a record as a user activity
ACTIVITY_FIELD = "activity"

#: Environment variable overriding the verbosity derived from -v flags
LOG_ENV_VAR = "INDEXIFY_LOG"

_VERBOSITY_LEVELS = ["WARNING", "INFO", "DEBUG"]


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None


class StructuredLogger:
    """
    Structured logger.

    Wraps a standard library logger and adds the keyword fields of each
    call to the message and to the record.
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)

    def _format_message(self, message: str, fields: dict[str, Any]) -> str:
        """Append the fields to the message."""
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def _log(
        self, level: int, message: str, exc_info: bool = False, **kwargs: Any
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        fields = dict(kwargs)
        self.logger.log(
            level,
            self._format_message(message, fields),
            exc_info=exc_info,
            extra={"fields": fields},
            stacklevel=3,
        )

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def activity(self, name: str, /, **kwargs: Any) -> None:
        """Record that a user-facing operation started.

        Activities are logged at INFO and picked up by the telemetry handler
        regardless of the console level.
        """
        fields = {ACTIVITY_FIELD: name, **kwargs}
        self.logger.info(
            self._format_message(name, fields),
            extra={"fields": fields},
            stacklevel=2,
        )


# Module-level logger factory
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Cached StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def level_for_verbosity(verbosity: int) -> str:
    """Map the count of -v flags to a level name.

    INDEXIFY_LOG, when set to a valid level name, takes precedence.

    Args:
        verbosity: Number of -v flags (0 = warnings only)

    Returns:
        Level name understood by the logging module
    """
    override = os.environ.get(LOG_ENV_VAR, "").strip().upper()
    if override and isinstance(logging.getLevelName(override), int):
        return override

    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


class _ConfigHolder:
    """Holds the active logging configuration and the handlers it installed."""

    _config: LogConfig = LogConfig()
    _handlers: List[logging.Handler] = []

    @classmethod
    def replace(cls, config: LogConfig, handlers: List[logging.Handler]) -> None:
        """Swap in new handlers, closing the ones installed previously."""
        root = logging.getLogger()
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root.addHandler(handler)
        cls._config = config
        cls._handlers = handlers


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    console: bool = True,
    extra_handlers: Optional[List[logging.Handler]] = None,
) -> LogConfig:
    """
    Configure process-wide logging.

    Console output goes to stderr through rich so it never mixes with
    command output on stdout. Calling again replaces the handlers installed
    by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to the console.
        extra_handlers: Additional handlers (e.g. telemetry) to install.

    Returns:
        The applied configuration.
    """
    config = LogConfig(level=level.upper(), file_path=log_file)
    numeric_level = getattr(logging, config.level, logging.WARNING)
    handlers: List[logging.Handler] = []

    if console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(numeric_level)
        handlers.append(console_handler)

    if config.file_path:
        config.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.file_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(config.format, datefmt=config.date_format)
        )
        handlers.append(file_handler)

    handlers.extend(extra_handlers or [])

    root = logging.getLogger()
    # Extra handlers filter for themselves; the root must let their records through
    if extra_handlers and numeric_level > logging.INFO:
        root.setLevel(logging.INFO)
    else:
        root.setLevel(numeric_level)
    _ConfigHolder.replace(config, handlers)

    return config


def flush_logging() -> None:
    """Flush the handlers installed by configure_logging().

    Telemetry delivery happens on a background thread; flushing waits for
    it so events are not lost when the process exits.
    """
    for handler in _ConfigHolder._handlers:
        handler.flush()
