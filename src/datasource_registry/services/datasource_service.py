"""Client for the remote data-source registry.

Every registry operation is a single HTTP call through an injected
transport; the helpers for correlating ids with records are pure functions
of their arguments. The client keeps no state between calls, so one
instance can be shared freely across concurrent tasks.

Transport failures (connection errors, timeouts, non-2xx statuses) are
propagated to the caller untouched. Nothing here retries or caches.

Example usage:
    async with open_registry_client() as registry:
        datasource = registry.new_jdbc_datasource()
        datasource.name = "warehouse"
        datasource.database_connection_url = "jdbc:postgresql://db:5432/dw"
        saved = await registry.save(datasource)

        user_sources = await registry.find_all()
        in_use = registry.filter_array_by_ids(saved.id, user_sources)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable
from urllib.parse import quote

from datasource_registry.config.endpoints import RegistryEndpoints
from datasource_registry.config.settings import get_settings
from datasource_registry.models.datasource import (
    USER_TYPE,
    Datasource,
    JdbcDatasource,
    parse_datasource,
    parse_datasources,
)
from datasource_registry.utils.http_client import HTTPClient, HTTPClientConfig

if TYPE_CHECKING:
    from datasource_registry.config.endpoints import EndpointResolver
    from datasource_registry.config.settings import RegistrySettings

logger = logging.getLogger(__name__)


@runtime_checkable
class TransportResponse(Protocol):
    """Response surface the registry client relies on."""

    def raise_for_status(self) -> None: ...

    def json(self) -> Any: ...


@runtime_checkable
class DatasourceTransport(Protocol):
    """Async HTTP transport supporting GET, POST and DELETE.

    ``HTTPClient`` satisfies this protocol; tests and embedding
    applications may supply their own.
    """

    async def get(
        self, url: str, *, params: Mapping[str, str] | None = None
    ) -> TransportResponse: ...

    async def post(self, url: str, *, json: Any = None) -> TransportResponse: ...

    async def delete(self, url: str) -> TransportResponse: ...


class DatasourceRegistryClient:
    """Typed façade over the data-source registry REST API.

    Args:
        transport: HTTP transport used for every remote call
        endpoints: Resolves the data-source collection URL
    """

    def __init__(
        self, transport: DatasourceTransport, endpoints: EndpointResolver
    ) -> None:
        self._transport = transport
        self._endpoints = endpoints

    def _item_url(self, datasource_id: str) -> str:
        # Escape everything, "/" included, so the id stays one path segment.
        return f"{self._endpoints.datasources_url}/{quote(datasource_id, safe='')}"

    async def delete_by_id(self, datasource_id: str) -> None:
        """Delete the data source with the given registry id.

        Raises:
            HTTPStatusError: If the registry rejects the request (e.g. 404)
            HTTPClientError: For transport failures
        """
        response = await self._transport.delete(self._item_url(datasource_id))
        response.raise_for_status()
        logger.info("Deleted data source %s", datasource_id)

    async def find_all(self) -> list[Datasource]:
        """Fetch every user data source known to the registry.

        Returns:
            Data sources in registry order

        Raises:
            HTTPStatusError: If the registry answers with a non-2xx status
            HTTPClientError: For transport failures
        """
        response = await self._transport.get(
            self._endpoints.datasources_url, params={"type": USER_TYPE}
        )
        response.raise_for_status()
        datasources = parse_datasources(response.json())
        logger.debug("Fetched %d user data sources", len(datasources))
        return datasources

    async def find_by_id(self, datasource_id: str) -> Datasource:
        """Fetch one data source by registry id.

        Raises:
            HTTPStatusError: If the registry answers with a non-2xx status,
                including 404 for an unknown id
            HTTPClientError: For transport failures
        """
        response = await self._transport.get(self._item_url(datasource_id))
        response.raise_for_status()
        return parse_datasource(response.json())

    @staticmethod
    def get_ids(
        datasources: Datasource | Sequence[Datasource],
    ) -> list[str | None]:
        """Get the ids of one or many data sources.

        Order and duplicates follow the input; unsaved records yield None.
        """
        if isinstance(datasources, Datasource):
            datasources = [datasources]
        return [datasource.id for datasource in datasources]

    @staticmethod
    def filter_array_by_ids(
        ids: str | Sequence[str], array: Sequence[Datasource]
    ) -> list[Datasource]:
        """Keep the data sources whose id is in ``ids``.

        Args:
            ids: A single id or a sequence of ids
            array: Data sources to filter

        Returns:
            Matching data sources in the order of ``array``
        """
        wanted = {ids} if isinstance(ids, str) else set(ids)
        return [datasource for datasource in array if datasource.id in wanted]

    @staticmethod
    def new_jdbc_datasource() -> JdbcDatasource:
        """Create an unsaved JDBC data source with every field blank."""
        return JdbcDatasource()

    async def save(self, datasource: Datasource) -> Datasource:
        """Create or update a data source.

        The registry creates a new record when ``datasource.id`` is None and
        updates the existing one otherwise. Saving the same unsaved record
        twice creates two records.

        Returns:
            The record as stored by the registry, including any assigned id

        Raises:
            HTTPStatusError: If the registry rejects the record
            HTTPClientError: For transport failures
        """
        response = await self._transport.post(
            self._endpoints.datasources_url, json=datasource.to_dict()
        )
        response.raise_for_status()
        saved = parse_datasource(response.json())
        logger.info(
            "%s data source %s (%s)",
            "Created" if datasource.is_new else "Updated",
            saved.id,
            saved.kind.value,
        )
        return saved


@asynccontextmanager
async def open_registry_client(
    settings: RegistrySettings | None = None,
) -> AsyncIterator[DatasourceRegistryClient]:
    """Open an HTTP-backed registry client configured from settings.

    The underlying HTTP session is closed when the context exits.

    Example:
        async with open_registry_client() as registry:
            datasources = await registry.find_all()
    """
    settings = settings or get_settings()
    async with HTTPClient(HTTPClientConfig.from_settings(settings)) as http:
        yield DatasourceRegistryClient(http, RegistryEndpoints.from_settings(settings))
