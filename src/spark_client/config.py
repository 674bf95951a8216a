#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for the Spark API client.

This module loads configuration from environment variables (and a local ``.env``
file) and provides sensible defaults. It also validates configuration values.
A configuration object is passed explicitly to each client instance.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.spark.re/v2/"
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100
DEFAULT_TIMEOUT = 30  # seconds

# Log file rotation modes
LOG_ROTATIONS = ("size", "daily", "none")

# Log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class AppConfig:
    """Spark client configuration."""

    # Spark API
    spark_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("SPARK_API_KEY")
    )
    spark_base_url: str = field(
        default_factory=lambda: os.getenv("SPARK_BASE_URL", DEFAULT_BASE_URL)
    )
    per_page: int = field(
        default_factory=lambda: int(os.getenv("SPARK_PER_PAGE", str(DEFAULT_PER_PAGE)))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("SPARK_REQUEST_TIMEOUT", str(DEFAULT_TIMEOUT)))
    )

    # Behaviour
    strict_fetch: bool = field(
        default_factory=lambda: _env_flag("SPARK_STRICT_FETCH", "false")
    )
    sanitize_contacts: bool = field(
        default_factory=lambda: _env_flag("SPARK_SANITIZE_CONTACTS", "true")
    )

    # Proxy configuration
    use_proxies: bool = field(
        default_factory=lambda: _env_flag("USE_PROXIES", "false")
    )
    proxy_url: Optional[str] = field(default_factory=lambda: os.getenv("PROXY_URL"))

    # Logging
    log_level: int = field(
        default_factory=lambda: LOG_LEVELS.get(
            os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
        )
    )
    log_file_path: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["LOG_FILE_PATH"]) if os.getenv("LOG_FILE_PATH") else None
    )
    json_logs: bool = field(
        default_factory=lambda: _env_flag("JSON_LOGS", "false")
    )
    log_rotation: str = field(
        default_factory=lambda: os.getenv("LOG_ROTATION", "size").lower()
    )
    log_max_bytes: int = field(
        default_factory=lambda: int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    )
    log_backup_count: int = field(
        default_factory=lambda: int(os.getenv("LOG_BACKUP_COUNT", "5"))
    )

    def base_url(self) -> str:
        """
        API base URL, always ending with a slash.

        Returns:
            str: Base URL that resource paths are appended to
        """
        return self.spark_base_url.rstrip("/") + "/"

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid
        """
        errors = []

        if not self.spark_api_key:
            errors.append("SPARK_API_KEY is required")

        if not self.spark_base_url.startswith(("http://", "https://")):
            errors.append(f"SPARK_BASE_URL must be an http(s) URL: {self.spark_base_url}")

        if not 1 <= self.per_page <= MAX_PER_PAGE:
            errors.append(f"SPARK_PER_PAGE must be between 1 and {MAX_PER_PAGE}")

        if self.request_timeout <= 0:
            errors.append("SPARK_REQUEST_TIMEOUT must be positive")

        if self.use_proxies and not self.proxy_url:
            errors.append("PROXY_URL is required when USE_PROXIES is true")

        if self.log_file_path is not None and not self.log_file_path.parent.exists():
            errors.append(f"Log file path parent does not exist: {self.log_file_path.parent}")

        if self.log_rotation not in LOG_ROTATIONS:
            errors.append(f"LOG_ROTATION must be one of: {', '.join(LOG_ROTATIONS)}")

        if self.log_max_bytes <= 0:
            errors.append("LOG_MAX_BYTES must be positive")

        if self.log_backup_count < 0:
            errors.append("LOG_BACKUP_COUNT must not be negative")

        return errors
