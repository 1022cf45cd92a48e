"""
Unit test fixtures and helpers.

Provides lightweight fixtures for unit testing that do NOT require
network access or installed transport plugins.
"""

from pathlib import Path

import pytest

from ferry.config import get_settings
from ferry.services.platforms import PlatformRegistry


@pytest.fixture
def registry() -> PlatformRegistry:
    """Provide an empty, isolated platform registry."""
    return PlatformRegistry()


@pytest.fixture
def linux_registry(registry: PlatformRegistry) -> PlatformRegistry:
    """Provide a registry with ubuntu -> linux -> unix."""
    registry.family("unix")
    registry.family("linux").in_family("unix")
    registry.name("ubuntu").in_family("linux")
    return registry


@pytest.fixture
def key_file(tmp_path: Path) -> str:
    """Provide the path of an existing (fake) private key file."""
    path = tmp_path / "id_ed25519"
    path.write_text("not-a-real-key\n")  # pragma: allowlist secret
    return str(path)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure every test reads settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
