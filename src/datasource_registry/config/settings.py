"""Registry client configuration using pydantic-settings.

Loads configuration from environment variables with sensible defaults.
A ``.env`` file at the project root is loaded first if present.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_env_path = Path(__file__).resolve().parents[3] / ".env"
if _env_path.exists():
    load_dotenv(_env_path)
    logger.debug("Loaded environment from %s", _env_path)


class RegistrySettings(BaseSettings):
    """Configuration for talking to the data-source registry.

    All settings can be overridden via environment variables.
    The prefix DATASOURCE_REGISTRY_ is used for all settings.

    Example:
        export DATASOURCE_REGISTRY_BASE_URL=https://pipeline.example.com
        export DATASOURCE_REGISTRY_TIMEOUT=60
    """

    model_config = SettingsConfigDict(
        env_prefix="DATASOURCE_REGISTRY_",
        case_sensitive=False,
    )

    # Endpoint
    base_url: str = "http://localhost:8400"
    datasources_path: str = "/proxy/v1/metadata/datasource"

    # Transport
    timeout: float = 30.0
    connect_timeout: float = 10.0
    total_timeout: float = 120.0
    max_connections: int = 10
    verify_ssl: bool = True
    user_agent: str = "Datasource-Registry-Client/1.0"

    @model_validator(mode="after")
    def _check_timeouts(self) -> RegistrySettings:
        if self.total_timeout < self.timeout:
            raise ValueError(
                f"total_timeout ({self.total_timeout}) must not be shorter "
                f"than timeout ({self.timeout})"
            )
        return self


@lru_cache
def get_settings() -> RegistrySettings:
    """Get cached settings instance."""
    return RegistrySettings()
