#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging Configuration Module

Provides the configurable logging used by the Spark client and its command-line
interface. Supports console and rotating file handlers, plain or JSON formatting,
and helpers for integration events and masking credentials.
"""

import os
import sys
import json
import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional, Dict, Any, Union

# Default log levels
DEFAULT_CONSOLE_LEVEL = logging.INFO
DEFAULT_FILE_LEVEL = logging.DEBUG

# Environment variable names
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FILE_PATH = "LOG_FILE_PATH"

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Global logger registry to avoid duplicate handlers
_loggers: Dict[str, logging.Logger] = {}


def resolve_level(level: Optional[Union[int, str]], default: int) -> int:
    """
    Convert a level name or number to a logging level.

    Args:
        level: Level as int, name ("debug", "INFO") or numeric string
        default: Level used when ``level`` is empty or unknown

    Returns:
        int: Logging level
    """
    if level is None or level == "":
        return default
    if isinstance(level, int):
        return level
    if level.upper() in LOG_LEVELS:
        return LOG_LEVELS[level.upper()]
    try:
        return int(level)
    except ValueError:
        return default


class LoggerConfig:
    """Configuration class for logger settings."""

    def __init__(
        self,
        name: str = "spark_client",
        console_level: Optional[Union[int, str]] = None,
        file_level: Optional[Union[int, str]] = None,
        log_file: Optional[str] = None,
        rotating: bool = True,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        daily_rotation: bool = False,
        format_string: Optional[str] = None,
        json_logs: bool = False,
        propagate: bool = True,
    ):
        """
        Initialize logger configuration.

        Args:
            name: Logger name
            console_level: Console logging level (int or string)
            file_level: File logging level (int or string)
            log_file: Path to log file (None to use LOG_FILE_PATH, console only if unset)
            rotating: Whether to use rotating file handler
            max_bytes: Maximum file size for rotating handler
            backup_count: Number of backup files to keep
            daily_rotation: Whether to rotate logs daily instead of by size
            format_string: Custom log format string
            json_logs: Whether to format logs as JSON
            propagate: Whether to propagate to parent loggers
        """
        self.name = name

        env_level = resolve_level(os.environ.get(ENV_LOG_LEVEL), -1)
        if env_level < 0:
            env_level = None

        if console_level is not None:
            self.console_level = resolve_level(console_level, DEFAULT_CONSOLE_LEVEL)
        elif env_level is not None:
            self.console_level = env_level
        else:
            self.console_level = DEFAULT_CONSOLE_LEVEL

        if file_level is not None:
            self.file_level = resolve_level(file_level, DEFAULT_FILE_LEVEL)
        elif env_level is not None:
            self.file_level = env_level
        else:
            self.file_level = DEFAULT_FILE_LEVEL

        self.log_file = log_file or os.environ.get(ENV_LOG_FILE_PATH) or None

        self.rotating = rotating
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.daily_rotation = daily_rotation

        if format_string:
            self.format_string = format_string
        else:
            self.format_string = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"

        self.json_logs = json_logs
        self.propagate = propagate


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """

    def __init__(
        self,
        fmt_dict: Optional[Dict[str, Any]] = None,
        time_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        """
        Initialize JSON formatter.

        Args:
            fmt_dict: Mapping of output keys to LogRecord attribute names
            time_format: Format string for timestamps
        """
        super().__init__()
        self.fmt_dict = fmt_dict or {
            "timestamp": "asctime",
            "level": "levelname",
            "name": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message",
        }
        self.time_format = time_format

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string representation of the log record
        """
        record.message = record.getMessage()
        record.asctime = self.formatTime(record, self.time_format)

        log_record = {}
        for key, value in self.fmt_dict.items():
            if hasattr(record, value):
                log_record[key] = getattr(record, value)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logger(config: Optional[LoggerConfig] = None) -> logging.Logger:
    """
    Configure a logger with console and optional file handlers.

    Args:
        config: Logger configuration (or None for default)

    Returns:
        Configured logger
    """
    if config is None:
        config = LoggerConfig()

    if config.name in _loggers:
        return _loggers[config.name]

    logger = logging.getLogger(config.name)
    logger.setLevel(min(config.console_level, config.file_level))
    logger.propagate = config.propagate

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if config.json_logs:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(config.format_string)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(config.console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file:
        os.makedirs(os.path.dirname(os.path.abspath(config.log_file)), exist_ok=True)

        if config.daily_rotation:
            file_handler: logging.Handler = TimedRotatingFileHandler(
                config.log_file,
                when="midnight",
                backupCount=config.backup_count,
                encoding="utf-8"
            )
        elif config.rotating:
            file_handler = RotatingFileHandler(
                config.log_file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8"
            )
        else:
            file_handler = logging.FileHandler(config.log_file, encoding="utf-8")

        file_handler.setLevel(config.file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _loggers[config.name] = logger

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a library logger by name.

    Library modules never attach handlers themselves; records propagate to
    whatever the application (or ``configure_logging``) has set up.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name in _loggers:
        return _loggers[name]
    return logging.getLogger(name)


def configure_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[str] = None,
    json_logs: bool = False,
    rotation: str = "size",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Configure the root logger for command-line use.

    Args:
        level: Logging level (int or string)
        log_file: Path to log file
        json_logs: Whether to format logs as JSON
        rotation: File rotation mode: "size", "daily" or "none"
        max_bytes: Maximum file size when rotating by size
        backup_count: Number of rotated files to keep

    Returns:
        Configured root logger
    """
    _loggers.pop("", None)
    config = LoggerConfig(
        name="",  # Root logger
        console_level=level,
        file_level=level,
        log_file=log_file,
        rotating=rotation != "none",
        max_bytes=max_bytes,
        backup_count=backup_count,
        daily_rotation=rotation == "daily",
        json_logs=json_logs,
    )
    return configure_logger(config)


def log_integration_event(integration: str, event_type: str, message: str, level: int = logging.INFO) -> None:
    """
    Log an integration event.

    Args:
        integration: Integration name
        event_type: Type of event (initialize, fetch, create, submit, error...)
        message: Event description
        level: Logging level
    """
    logger = get_logger("spark_client.integration")
    logger.log(level, f"[{integration}] [{event_type}] {message}")


def mask_value(value: str) -> str:
    """Mask all but the first and last character of a secret."""
    if len(value) > 6:
        return value[0] + "*" * (len(value) - 2) + value[-1]
    return "*" * len(value)


def log_sensitive(logger: logging.Logger, level: int, message: str, **sensitive_data) -> None:
    """
    Log a message while masking sensitive data.

    Args:
        logger: Logger to use
        level: Logging level
        message: Message to log
        sensitive_data: Keys and values to mask in the message
    """
    masked_message = message
    for key, value in sensitive_data.items():
        if value and isinstance(value, str):
            masked_message = masked_message.replace(value, mask_value(value))

    logger.log(level, masked_message)
