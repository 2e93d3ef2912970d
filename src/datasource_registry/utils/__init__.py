"""Utility functions and helpers."""

from datasource_registry.utils.http_client import (
    ConnectionError,
    HTTPClient,
    HTTPClientConfig,
    HTTPClientError,
    HTTPResponse,
    HTTPStatusError,
    TimeoutError,
)

__all__ = [
    "ConnectionError",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "HTTPResponse",
    "HTTPStatusError",
    "TimeoutError",
]
