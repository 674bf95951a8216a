"""HTTP transport for the Spark API v2.

This module owns the ``requests`` session, the authorization header, and the
exception taxonomy shared by the rest of the client. Every call is a single,
synchronous round trip; nothing here retries.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..config import AppConfig
from ..utils.logger import get_logger, log_sensitive

logger = get_logger(__name__)


class SparkAPIError(Exception):
    """Base exception for Spark API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SparkConfigurationError(SparkAPIError):
    """Exception raised when the client configuration is invalid."""
    pass


class SparkTransportError(SparkAPIError):
    """Exception raised when the request never produced an HTTP response."""
    pass


class SparkHTTPError(SparkAPIError):
    """Exception raised when the API answers with an error status."""
    pass


class SparkResponseError(SparkAPIError):
    """Exception raised when the response body has an unexpected shape."""
    pass


def extract_error_message(data: Any, status_code: Optional[int] = None) -> str:
    """Pull a human-readable error message out of a Spark error body.

    Args:
        data: Decoded response body (any shape)
        status_code: HTTP status code used for the fallback message

    Returns:
        Error message
    """
    if isinstance(data, dict):
        for key in ("error_message", "message"):
            if data.get(key):
                return str(data[key])
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(error) for error in errors)
        if isinstance(errors, dict) and errors:
            return "; ".join(f"{key} {value}" for key, value in errors.items())
        if isinstance(errors, str) and errors:
            return errors
    return f"Spark API returned HTTP {status_code}"


@dataclass
class PostResponse:
    """Status code and decoded body of a POST call."""

    status_code: int
    data: Any = None
    error: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.status_code == 201

    @property
    def error_message(self) -> str:
        if self.error:
            return self.error
        return extract_error_message(self.data, self.status_code)


class SparkTransport:
    """Low-level GET/POST access to the Spark API.

    Args:
        config: Client configuration (API key, base URL, page size, timeout)
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self.base_url = config.base_url()
        self.per_page = config.per_page
        self.timeout = config.request_timeout
        self.session = requests.Session()
        self._configure_session()

    def _configure_session(self) -> None:
        """Configure the requests session with headers and proxies."""
        self.session.headers.update({
            "Authorization": f'Token token="{self.config.spark_api_key}"',
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "spark-crm-client",
        })

        if self.config.use_proxies and self.config.proxy_url:
            self.session.proxies = {
                "http": self.config.proxy_url,
                "https": self.config.proxy_url
            }

        log_sensitive(
            logger, logging.DEBUG,
            f"Spark session configured for {self.base_url} with key {self.config.spark_api_key}",
            api_key=self.config.spark_api_key,
        )

    def url(self, resource: str) -> str:
        return self.base_url + resource.lstrip("/")

    def get(self, resource: str, page: Optional[int] = None,
            params: Optional[Dict[str, Any]] = None) -> Any:
        """Issue a GET for a resource path.

        ``per_page`` is always sent; ``page`` only when given. A query string
        already present in ``resource`` is kept and the parameters are appended.

        Args:
            resource: Resource path relative to the base URL
            page: 1-based page number, or None for an unpaged request
            params: Extra query parameters (URL-encoded by requests)

        Returns:
            Decoded JSON body, or None when the body is empty

        Raises:
            SparkTransportError: If the request fails before a response arrives
            SparkHTTPError: If the API answers with status >= 400
            SparkResponseError: If the body is not valid JSON
        """
        query: Dict[str, Any] = dict(params or {})
        query["per_page"] = self.per_page
        if page:
            query["page"] = page

        url = self.url(resource)
        logger.debug(f"GET {url} params={query}")

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request error fetching {resource}: {e}")
            raise SparkTransportError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            try:
                data = self._decode(response, resource)
            except SparkResponseError:
                data = None
            message = extract_error_message(data, response.status_code)
            logger.error(f"Spark API error on {resource} ({response.status_code}): {message}")
            raise SparkHTTPError(message, status_code=response.status_code)

        return self._decode(response, resource)

    def post(self, resource: str, body: Dict[str, Any]) -> PostResponse:
        """Issue a POST with a JSON body.

        Transport failures do not raise: they come back as a response with
        status code 0 so callers only ever inspect the status code.

        Args:
            resource: Resource path relative to the base URL
            body: JSON-serialisable request body

        Returns:
            PostResponse with status code and decoded body
        """
        url = self.url(resource)
        logger.debug(f"POST {url} keys={list(body)}")

        try:
            encoded = json.dumps(body)
        except (TypeError, ValueError) as e:
            logger.error(f"Could not encode request body for {resource}: {e}")
            return PostResponse(status_code=0, data=None, error=f"Could not encode request body: {e}")

        try:
            response = self.session.post(url, data=encoded, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request error posting to {resource}: {e}")
            return PostResponse(status_code=0, data=None, error=f"Request failed: {e}")

        try:
            data = self._decode(response, resource)
        except SparkResponseError as e:
            return PostResponse(status_code=response.status_code, data=None, error=e.message)

        return PostResponse(status_code=response.status_code, data=data)

    def _decode(self, response: requests.Response, resource: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"JSON decode error from {resource}: {e}")
            raise SparkResponseError(
                f"Invalid JSON response: {e}", status_code=response.status_code
            ) from e

    def close(self) -> None:
        self.session.close()
