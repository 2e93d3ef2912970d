"""Shared pytest fixtures for data-source registry tests.

Fixtures are organized into categories:
- Sample registry payloads (JDBC and user data sources)
- Transport fixtures (mock transport, canned responses)

Usage:
    # In any test file, fixtures are automatically available:
    async def test_example(registry_client, mock_transport, make_response, jdbc_payload):
        mock_transport.get.return_value = make_response(jdbc_payload)
        datasource = await registry_client.find_by_id("ds-1")
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from datasource_registry.config.endpoints import RegistryEndpoints
from datasource_registry.services.datasource_service import DatasourceRegistryClient
from datasource_registry.utils.http_client import HTTPResponse

BASE_URL = "http://registry.test"
DATASOURCES_URL = f"{BASE_URL}/proxy/v1/metadata/datasource"


def json_response(payload: Any, status: int = 200, method: str = "GET") -> HTTPResponse:
    """Build an HTTPResponse carrying a JSON body."""
    content = b"" if payload is None else json.dumps(payload).encode()
    return HTTPResponse(
        status=status,
        headers={"Content-Type": "application/json"},
        content=content,
        url=DATASOURCES_URL,
        method=method,
    )


# =============================================================================
# Sample Registry Payloads
# =============================================================================


@pytest.fixture
def jdbc_payload() -> dict[str, Any]:
    """A JDBC data source as returned by the registry."""
    return {
        "@type": "JdbcDatasource",
        "id": "4d2f3a5c-0e1b-4a57-9f0c-1d1b7c3b2a10",
        "name": "warehouse",
        "description": "Reporting warehouse",
        "type": "PostgreSQL",
        "sourceForFeeds": [
            {"id": "feed-1", "systemName": "orders_ingest"},
            {"id": "feed-2", "systemName": "customers_ingest"},
        ],
        "databaseConnectionUrl": "jdbc:postgresql://db.internal:5432/warehouse",
        "databaseDriverClassName": "org.postgresql.Driver",
        "databaseDriverLocation": "/opt/drivers/postgresql.jar,file:///opt/drivers/extra.jar",
        "databaseUser": "etl",
        "password": "s3cret",
    }


@pytest.fixture
def user_payload() -> dict[str, Any]:
    """A user data source with no connection fields."""
    return {
        "@type": "UserDatasource",
        "id": "8b7e6f11-2c44-4d0e-b1a1-3f7c9e2d5a42",
        "name": "landing zone",
        "description": "Files dropped by partners",
        "type": "S3",
        "sourceForFeeds": [],
    }


# =============================================================================
# Transport Fixtures
# =============================================================================


@pytest.fixture
def make_response() -> Callable[..., HTTPResponse]:
    """Factory fixture building JSON HTTPResponse objects.

    Usage:
        def test_example(make_response):
            response = make_response({"id": "a"}, status=201)
    """
    return json_response


@pytest.fixture
def endpoints() -> RegistryEndpoints:
    """Endpoints pointing at a fake registry host."""
    return RegistryEndpoints(base_url=BASE_URL)


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Async mock transport with get/post/delete.

    Each method answers with an empty 200 response unless a test
    overrides ``return_value`` or ``side_effect``.
    """
    transport = AsyncMock()
    transport.get.return_value = json_response([])
    transport.post.return_value = json_response({}, method="POST")
    transport.delete.return_value = json_response(None, method="DELETE")
    return transport


@pytest.fixture
def registry_client(
    mock_transport: AsyncMock, endpoints: RegistryEndpoints
) -> DatasourceRegistryClient:
    """Registry client wired to the mock transport."""
    return DatasourceRegistryClient(mock_transport, endpoints)
