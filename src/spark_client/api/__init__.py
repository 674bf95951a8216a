"""
Spark API access: HTTP transport, pagination and the client façade.
"""

from .client import BrokerageError, SparkClient, SparkFetchError
from .pagination import FetchResult, fetch_all_pages, key_by_id
from .transport import (
    PostResponse,
    SparkAPIError,
    SparkConfigurationError,
    SparkHTTPError,
    SparkResponseError,
    SparkTransport,
    SparkTransportError,
)

__all__ = [
    "BrokerageError",
    "FetchResult",
    "PostResponse",
    "SparkAPIError",
    "SparkClient",
    "SparkConfigurationError",
    "SparkFetchError",
    "SparkHTTPError",
    "SparkResponseError",
    "SparkTransport",
    "SparkTransportError",
    "fetch_all_pages",
    "key_by_id",
]
