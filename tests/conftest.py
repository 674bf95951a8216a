#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest configuration file for the Spark client test suite.
"""

import os
import sys
import pytest
from pathlib import Path
from typing import Any, Callable, Dict, List
from unittest.mock import MagicMock

# Add the src directory to Python path for accessing spark_client
project_root = Path(__file__).parent.parent
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from spark_client.api.transport import PostResponse, SparkTransport
from spark_client.config import AppConfig


# Define pytest markers
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring a live Spark API key"
    )


@pytest.fixture(scope="function")
def spark_config() -> AppConfig:
    """Valid configuration that never touches the environment's API key."""
    return AppConfig(
        spark_api_key="test_api_key_123",
        spark_base_url="https://api.spark.re/v2/",
        per_page=100,
        request_timeout=5,
        strict_fetch=False,
        sanitize_contacts=True,
        use_proxies=False,
        proxy_url=None,
        log_file_path=None,
        log_rotation="size",
    )


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch, tmp_path: Path):
    """
    Set up environment variables for testing.

    Args:
        monkeypatch: Pytest monkeypatch fixture
        tmp_path: Temporary directory for the log file
    """
    monkeypatch.setenv("SPARK_API_KEY", "env_api_key")
    monkeypatch.setenv("SPARK_BASE_URL", "https://sandbox.spark.re/v2")
    monkeypatch.setenv("SPARK_PER_PAGE", "50")
    monkeypatch.setenv("SPARK_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("SPARK_STRICT_FETCH", "true")
    monkeypatch.setenv("SPARK_SANITIZE_CONTACTS", "false")
    monkeypatch.setenv("USE_PROXIES", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "spark.log"))


@pytest.fixture
def fake_transport() -> Callable[..., MagicMock]:
    """
    Build a mocked SparkTransport serving canned pages.

    ``pages`` maps a resource path to the list of pages it returns (a trailing
    empty page is implied) or to an exception raised on every call. Calls
    without a page number return the first page.
    """
    def build(pages: Dict[str, Any], post_responses: List[PostResponse] = None) -> MagicMock:
        transport = MagicMock(spec=SparkTransport)

        def get(resource, page=None, params=None):
            served = pages.get(resource, [])
            if isinstance(served, Exception):
                raise served
            index = (page or 1) - 1
            return served[index] if index < len(served) else []

        transport.get.side_effect = get
        if post_responses is not None:
            transport.post.side_effect = list(post_responses)
        return transport

    return build
