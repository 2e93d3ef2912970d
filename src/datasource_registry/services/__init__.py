"""Services for working with the data-source registry."""

from datasource_registry.services.datasource_service import (
    DatasourceRegistryClient,
    DatasourceTransport,
    TransportResponse,
    open_registry_client,
)

__all__ = [
    "DatasourceRegistryClient",
    "DatasourceTransport",
    "TransportResponse",
    "open_registry_client",
]
