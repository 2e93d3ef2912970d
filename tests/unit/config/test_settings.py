"""Tests for registry configuration and endpoint resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from datasource_registry.config.endpoints import EndpointResolver, RegistryEndpoints
from datasource_registry.config.settings import RegistrySettings


class TestRegistrySettings:
    """Tests for RegistrySettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        from datasource_registry.config.settings import get_settings

        get_settings.cache_clear()

        settings = get_settings()

        assert settings.base_url == "http://localhost:8400"
        assert settings.datasources_path == "/proxy/v1/metadata/datasource"
        assert settings.timeout == 30.0
        assert settings.connect_timeout == 10.0
        assert settings.total_timeout == 120.0
        assert settings.max_connections == 10
        assert settings.verify_ssl is True

        # Cleanup
        get_settings.cache_clear()

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variable overrides."""
        from datasource_registry.config.settings import get_settings

        get_settings.cache_clear()

        monkeypatch.setenv("DATASOURCE_REGISTRY_BASE_URL", "https://pipeline.example.com")
        monkeypatch.setenv("DATASOURCE_REGISTRY_TIMEOUT", "60")
        monkeypatch.setenv("DATASOURCE_REGISTRY_VERIFY_SSL", "false")

        settings = get_settings()

        assert settings.base_url == "https://pipeline.example.com"
        assert settings.timeout == 60.0
        assert settings.verify_ssl is False

        # Cleanup
        get_settings.cache_clear()

    def test_total_timeout_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATASOURCE_REGISTRY_TIMEOUT", "300")
        monkeypatch.setenv("DATASOURCE_REGISTRY_TOTAL_TIMEOUT", "600")

        settings = RegistrySettings()

        assert settings.timeout == 300.0
        assert settings.total_timeout == 600.0

    def test_total_timeout_shorter_than_read_timeout(self) -> None:
        with pytest.raises(ValidationError, match="total_timeout"):
            RegistrySettings(timeout=200.0, total_timeout=120.0)

    def test_settings_are_cached(self) -> None:
        from datasource_registry.config.settings import get_settings

        get_settings.cache_clear()

        assert get_settings() is get_settings()

        get_settings.cache_clear()


class TestRegistryEndpoints:
    """Tests for RegistryEndpoints."""

    def test_default_path(self) -> None:
        endpoints = RegistryEndpoints(base_url="http://localhost:8400")

        assert endpoints.datasources_url == (
            "http://localhost:8400/proxy/v1/metadata/datasource"
        )

    @pytest.mark.parametrize(
        ("base_url", "path"),
        [
            ("http://host", "/api/ds"),
            ("http://host/", "/api/ds"),
            ("http://host/", "api/ds/"),
        ],
    )
    def test_slashes_normalized(self, base_url: str, path: str) -> None:
        endpoints = RegistryEndpoints(base_url=base_url, datasources_path=path)

        assert endpoints.datasources_url == "http://host/api/ds"

    def test_from_settings(self) -> None:
        settings = RegistrySettings(
            base_url="https://pipeline.example.com", datasources_path="/v2/sources"
        )

        endpoints = RegistryEndpoints.from_settings(settings)

        assert endpoints.datasources_url == "https://pipeline.example.com/v2/sources"

    def test_is_endpoint_resolver(self) -> None:
        assert isinstance(RegistryEndpoints(base_url="http://host"), EndpointResolver)
