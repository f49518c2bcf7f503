"""
Logging configuration for haikal-markdown.

Library modules only create ``logging.getLogger(__name__)`` loggers and log
at DEBUG; handlers are installed by the application (the CLI) through
``LoggingManager``.

Formats:
- STANDARD: rich console output via ``RichHandler``
- JSON: one JSON object per record, for machine consumption
- DETAILED: plain text including module, function and line
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Look up a level by case-insensitive name (``"debug"`` -> DEBUG)."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'exc_info', 'exc_text', 'stack_info',
    'message',
})


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        for attr_name, attr_value in record.__dict__.items():
            if not attr_name.startswith('_') and attr_name not in _STANDARD_ATTRS:
                log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, separators=(',', ':'))


class LoggingManager:
    """
    Installs handlers on the root logger.

    Attributes:
        log_level: Threshold for every handler
        log_format: Console/file record format
        log_file: Optional file to log to in addition to the console
    """

    def __init__(
        self,
        log_level: Union[LogLevel, str] = LogLevel.INFO,
        log_format: Union[LogFormat, str] = LogFormat.STANDARD,
        log_file: Optional[Path] = None,
        console: Optional[Console] = None
    ):
        self.log_level = log_level if isinstance(log_level, LogLevel) else LogLevel.from_name(log_level)
        self.log_format = LogFormat(log_format)
        self.log_file = log_file
        self.console = console or Console(stderr=True)

        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)
        root_logger.handlers.clear()

        console_handler = self._create_console_handler()
        console_handler.setLevel(self.log_level.value)
        root_logger.addHandler(console_handler)

        if self.log_file:
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(self._create_formatter())
            root_logger.addHandler(file_handler)

    def _create_console_handler(self) -> logging.Handler:
        if self.log_format is LogFormat.STANDARD:
            return RichHandler(
                console=self.console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
        handler = logging.StreamHandler()
        handler.setFormatter(self._create_formatter())
        return handler

    def _create_formatter(self) -> logging.Formatter:
        if self.log_format is LogFormat.JSON:
            return JSONFormatter()
        if self.log_format is LogFormat.DETAILED:
            return logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
            )
        return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger; level filtering happens on the root handlers."""
        return logging.getLogger(name)


def configure_logging(
    config: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> LoggingManager:
    """
    Configure root logging from the ``logging`` section of a configuration.

    Args:
        config: Full configuration dictionary (``ConfigManager.config``)
        verbose: Force DEBUG level regardless of the configured level
        console: Console the rich handler writes to

    Returns:
        The LoggingManager that installed the handlers
    """
    settings = (config or {}).get('logging', {})
    level = 'DEBUG' if verbose else settings.get('level', 'INFO')
    log_file = settings.get('file')
    return LoggingManager(
        log_level=level,
        log_format=settings.get('format', LogFormat.STANDARD.value),
        log_file=Path(log_file) if log_file else None,
        console=console,
    )
