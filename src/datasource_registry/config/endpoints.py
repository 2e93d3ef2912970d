"""Endpoint resolution for the data-source registry.

The registry client never builds base URLs itself; it asks an
``EndpointResolver`` for the collection URL and appends identifiers to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datasource_registry.config.settings import RegistrySettings


@runtime_checkable
class EndpointResolver(Protocol):
    """Anything that can tell the client where the registry lives."""

    @property
    def datasources_url(self) -> str:
        """Absolute URL of the data-source collection, without trailing slash."""
        ...


@dataclass(frozen=True, slots=True)
class RegistryEndpoints:
    """Static endpoint resolver built from a base URL and a path.

    Attributes:
        base_url: Scheme and host of the pipeline server
        datasources_path: Path of the data-source collection
    """

    base_url: str
    datasources_path: str = "/proxy/v1/metadata/datasource"

    @property
    def datasources_url(self) -> str:
        path = self.datasources_path.strip("/")
        return f"{self.base_url.rstrip('/')}/{path}"

    @classmethod
    def from_settings(cls, settings: RegistrySettings) -> RegistryEndpoints:
        return cls(base_url=settings.base_url, datasources_path=settings.datasources_path)
