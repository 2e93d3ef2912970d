"""Async HTTP transport for talking to the data-source registry.

This module provides the default transport used by the registry client.
It uses aiohttp for async operations with connection pooling, timeouts
and JSON request bodies. Non-2xx responses are returned as-is; callers
that want them treated as failures call ``HTTPResponse.raise_for_status()``.

Example usage:
    async with HTTPClient() as client:
        response = await client.get("http://localhost:8400/proxy/v1/metadata/datasource")
        response.raise_for_status()
        data = response.json()

    # Or with custom configuration
    config = HTTPClientConfig(timeout=60, user_agent="MyApp/1.0")
    async with HTTPClient(config) as client:
        await client.delete(url)
"""

from __future__ import annotations

import asyncio
import json as jsonlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import aiohttp

if TYPE_CHECKING:
    from collections.abc import Mapping

    from datasource_registry.config.settings import RegistrySettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HTTPClientConfig:
    """Configuration for the HTTP client.

    Attributes:
        timeout: Socket read timeout in seconds
        connect_timeout: Connection timeout in seconds
        total_timeout: Total operation timeout in seconds
        user_agent: User-Agent header value
        max_connections: Maximum number of connections in the pool
        verify_ssl: Whether to verify SSL certificates
    """

    timeout: float = 30.0
    connect_timeout: float = 10.0
    total_timeout: float = 120.0
    user_agent: str = "Datasource-Registry-Client/1.0"
    max_connections: int = 10
    verify_ssl: bool = True

    @property
    def default_headers(self) -> dict[str, str]:
        """Get default headers for all requests."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: RegistrySettings) -> HTTPClientConfig:
        """Build a client configuration from registry settings."""
        return cls(
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            total_timeout=settings.total_timeout,
            user_agent=settings.user_agent,
            max_connections=settings.max_connections,
            verify_ssl=settings.verify_ssl,
        )


@dataclass
class HTTPResponse:
    """Wrapper for HTTP response data.

    Attributes:
        status: HTTP status code
        headers: Response headers
        content: Raw response content as bytes
        url: Final URL after redirects
        method: HTTP method of the originating request
    """

    status: int
    headers: dict[str, str]
    content: bytes
    url: str
    method: str = "GET"

    @classmethod
    async def from_aiohttp_response(
        cls, response: aiohttp.ClientResponse, method: str = "GET"
    ) -> HTTPResponse:
        """Create HTTPResponse from aiohttp response.

        Args:
            response: The aiohttp ClientResponse object
            method: HTTP method of the request

        Returns:
            HTTPResponse with all data extracted
        """
        content = await response.read()
        return cls(
            status=response.status,
            headers=dict(response.headers),
            content=content,
            url=str(response.url),
            method=method,
        )

    def json(self) -> Any:
        """Parse response content as JSON.

        An empty body decodes to None.

        Raises:
            ValueError: If content is not valid JSON
        """
        if not self.content:
            return None
        try:
            return jsonlib.loads(self.content.decode("utf-8"))
        except (jsonlib.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"Invalid JSON response: {e}") from e

    def text(self, encoding: str = "utf-8") -> str:
        """Get response content as text."""
        return self.content.decode(encoding, errors="replace")

    @property
    def is_success(self) -> bool:
        """Check if response indicates success (2xx status)."""
        return 200 <= self.status < 300

    @property
    def is_client_error(self) -> bool:
        """Check if response indicates client error (4xx status)."""
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        """Check if response indicates server error (5xx status)."""
        return 500 <= self.status < 600

    def raise_for_status(self) -> None:
        """Raise HTTPStatusError unless the response is a 2xx.

        Raises:
            HTTPStatusError: For any non-2xx status
        """
        if self.is_success:
            return
        raise HTTPStatusError(
            f"{self.method} {self.url} returned HTTP {self.status}",
            url=self.url,
            status=self.status,
            response=self,
        )


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause


class ConnectionError(HTTPClientError):
    """Raised when connection to server fails."""

    pass


class TimeoutError(HTTPClientError):
    """Raised when request times out."""

    pass


class HTTPStatusError(HTTPClientError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status: int,
        response: HTTPResponse | None = None,
    ) -> None:
        super().__init__(message, url=url)
        self.status = status
        self.response = response

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


class HTTPClient:
    """Async HTTP client with connection pooling.

    Should be used as an async context manager to ensure the underlying
    session is released.

    Example:
        async with HTTPClient() as client:
            response = await client.post(url, json={"name": "warehouse"})
            response.raise_for_status()
    """

    def __init__(self, config: HTTPClientConfig | None = None) -> None:
        """Initialize the HTTP client.

        Args:
            config: Optional configuration. Uses defaults if not provided.
        """
        self.config = config or HTTPClientConfig()
        self._session: aiohttp.ClientSession | None = None
        self._connector: aiohttp.TCPConnector | None = None

    async def __aenter__(self) -> HTTPClient:
        """Enter async context and create session."""
        await self._create_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Exit async context and cleanup resources."""
        await self.close()

    async def _create_session(self) -> None:
        """Create the aiohttp session with connection pooling."""
        if self._session is not None:
            return

        self._connector = aiohttp.TCPConnector(
            limit=self.config.max_connections,
            ssl=self.config.verify_ssl,
        )

        timeout = aiohttp.ClientTimeout(
            total=self.config.total_timeout,
            connect=self.config.connect_timeout,
            sock_read=self.config.timeout,
        )

        self._session = aiohttp.ClientSession(
            connector=self._connector,
            timeout=timeout,
            headers=self.config.default_headers,
        )

        logger.debug(
            "Created HTTP session with pool size %d", self.config.max_connections
        )

    async def close(self) -> None:
        """Close the session and release resources."""
        if self._session is not None:
            await self._session.close()
            self._session = None
            self._connector = None
            logger.debug("Closed HTTP session")

    @property
    def is_open(self) -> bool:
        """Check if the session is open."""
        return self._session is not None and not self._session.closed

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            await self._create_session()
        if self._session is None:
            raise RuntimeError("HTTP session not initialized")
        return self._session

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HTTPResponse:
        """Perform a GET request.

        Args:
            url: The URL to request
            headers: Additional headers to send
            params: Query parameters to append to URL
            timeout: Override default timeout for this request

        Raises:
            ConnectionError: If connection fails
            TimeoutError: If request times out
            HTTPClientError: For other HTTP errors
        """
        return await self._request(
            "GET", url, headers=headers, params=params, timeout=timeout
        )

    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> HTTPResponse:
        """Perform a POST request with an optional JSON body.

        Args:
            url: The URL to request
            headers: Additional headers to send
            params: Query parameters to append to URL
            json: JSON data to send in body (will be serialized)
            timeout: Override default timeout for this request

        Raises:
            ConnectionError: If connection fails
            TimeoutError: If request times out
            HTTPClientError: For other HTTP errors
        """
        return await self._request(
            "POST", url, headers=headers, params=params, json=json, timeout=timeout
        )

    async def delete(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> HTTPResponse:
        """Perform a DELETE request.

        Raises:
            ConnectionError: If connection fails
            TimeoutError: If request times out
            HTTPClientError: For other HTTP errors
        """
        return await self._request("DELETE", url, headers=headers, timeout=timeout)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> HTTPResponse:
        session = await self._ensure_session()

        kwargs: dict[str, Any] = {}
        if headers:
            kwargs["headers"] = dict(headers)
        if params:
            kwargs["params"] = dict(params)
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        logger.debug("HTTP %s %s", method, url)

        try:
            async with session.request(method, url, **kwargs) as response:
                http_response = await HTTPResponse.from_aiohttp_response(
                    response, method=method
                )
                logger.debug("HTTP %s %s -> %d", method, url, http_response.status)
                return http_response

        except aiohttp.ClientConnectorError as e:
            logger.warning("Connection error for %s: %s", url, e)
            raise ConnectionError(
                f"Failed to connect to {url}", url=url, cause=e
            ) from e

        except aiohttp.ServerTimeoutError as e:
            logger.warning("Timeout for %s: %s", url, e)
            raise TimeoutError(f"Request timed out for {url}", url=url, cause=e) from e

        except asyncio.TimeoutError as e:
            # Raised when the total or per-request timeout elapses.
            logger.warning("Total timeout exceeded for %s", url)
            raise TimeoutError(f"Request timed out for {url}", url=url, cause=e) from e

        except aiohttp.ClientError as e:
            logger.warning("HTTP error for %s: %s", url, e)
            raise HTTPClientError(f"HTTP error for {url}: {e}", url=url, cause=e) from e
