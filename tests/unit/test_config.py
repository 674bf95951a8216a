#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the configuration module.
"""

import logging
from pathlib import Path

from spark_client.config import AppConfig, DEFAULT_BASE_URL


class TestAppConfig:
    """Tests for the AppConfig class."""

    def test_load_from_env(self, mock_env_vars, tmp_path):
        """Test that config loads values from environment variables."""
        config = AppConfig()

        assert config.spark_api_key == "env_api_key"
        assert config.spark_base_url == "https://sandbox.spark.re/v2"
        assert config.per_page == 50
        assert config.request_timeout == 12.5
        assert config.strict_fetch is True
        assert config.sanitize_contacts is False
        assert config.log_level == logging.DEBUG
        assert config.log_file_path == tmp_path / "spark.log"

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is configured."""
        for name in ("SPARK_API_KEY", "SPARK_BASE_URL", "SPARK_PER_PAGE",
                     "SPARK_STRICT_FETCH", "SPARK_SANITIZE_CONTACTS", "LOG_FILE_PATH"):
            monkeypatch.delenv(name, raising=False)

        config = AppConfig()

        assert config.spark_api_key is None
        assert config.spark_base_url == DEFAULT_BASE_URL
        assert config.per_page == 100
        assert config.strict_fetch is False
        assert config.sanitize_contacts is True
        assert config.log_file_path is None

    def test_base_url_always_has_trailing_slash(self, mock_env_vars):
        config = AppConfig()
        assert config.base_url() == "https://sandbox.spark.re/v2/"

        config.spark_base_url = "https://api.spark.re/v2/"
        assert config.base_url() == "https://api.spark.re/v2/"

    def test_validate_valid_config(self, spark_config):
        """Test validation with valid configuration."""
        assert spark_config.validate() == []

    def test_validate_invalid_config(self, spark_config):
        """Test validation with invalid configuration."""
        spark_config.spark_api_key = None
        spark_config.spark_base_url = "ftp://api.spark.re"
        spark_config.per_page = 500
        spark_config.request_timeout = 0
        spark_config.use_proxies = True
        spark_config.proxy_url = None
        spark_config.log_file_path = Path("/non/existent/path/spark.log")

        errors = spark_config.validate()

        assert any("SPARK_API_KEY is required" in error for error in errors)
        assert any("SPARK_BASE_URL must be an http(s) URL" in error for error in errors)
        assert any("SPARK_PER_PAGE must be between 1 and 100" in error for error in errors)
        assert any("SPARK_REQUEST_TIMEOUT must be positive" in error for error in errors)
        assert any("PROXY_URL is required" in error for error in errors)
        assert any("Log file path parent does not exist" in error for error in errors)

    def test_log_rotation_from_env(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("LOG_ROTATION", "Daily")
        monkeypatch.setenv("LOG_MAX_BYTES", "4096")
        monkeypatch.setenv("LOG_BACKUP_COUNT", "3")

        config = AppConfig()

        assert config.log_rotation == "daily"
        assert config.log_max_bytes == 4096
        assert config.log_backup_count == 3

    def test_validate_log_rotation(self, spark_config):
        spark_config.log_rotation = "hourly"
        spark_config.log_max_bytes = 0
        spark_config.log_backup_count = -1

        errors = spark_config.validate()

        assert any("LOG_ROTATION must be one of: size, daily, none" in error for error in errors)
        assert any("LOG_MAX_BYTES must be positive" in error for error in errors)
        assert any("LOG_BACKUP_COUNT must not be negative" in error for error in errors)
