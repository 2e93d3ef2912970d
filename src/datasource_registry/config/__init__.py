"""Configuration management."""

from datasource_registry.config.endpoints import EndpointResolver, RegistryEndpoints
from datasource_registry.config.settings import RegistrySettings, get_settings

__all__ = [
    "EndpointResolver",
    "RegistryEndpoints",
    "RegistrySettings",
    "get_settings",
]
