"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Upstream traffic is served by fakes; nothing here reaches the real API.
"""

from typing import Any, Dict, Optional

import pytest
from pydantic_settings import SettingsConfigDict

from mockup_mcp.config.settings import Settings
from mockup_mcp.mcp_server.handlers import ToolRouter
from mockup_mcp.mcp_server.server import MockupMCPServer
from tests.utils.mocks import FakeClientFactory


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    api_key: Optional[str] = None
    tracking_enabled: bool = False
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=None)


@pytest.fixture
def test_settings() -> TestSettings:
    """Settings without a fallback API key."""
    return TestSettings()


@pytest.fixture
def keyed_settings() -> TestSettings:
    """Settings with a process-wide fallback API key."""
    return TestSettings(api_key="fallback-key")


@pytest.fixture
def fake_factory() -> FakeClientFactory:
    """Upstream client factory that records requests instead of sending them."""
    return FakeClientFactory()


@pytest.fixture
def router(fake_factory: FakeClientFactory) -> ToolRouter:
    """Router with no fallback key."""
    return ToolRouter(fake_factory)


@pytest.fixture
def keyed_router(fake_factory: FakeClientFactory) -> ToolRouter:
    """Router with a fallback key."""
    return ToolRouter(fake_factory, fallback_api_key="fallback-key")


@pytest.fixture
def mcp_server(keyed_router: ToolRouter, keyed_settings: TestSettings) -> MockupMCPServer:
    """MCP server over the keyed router."""
    return MockupMCPServer(keyed_router, keyed_settings)


@pytest.fixture
def sample_smart_objects() -> list:
    return [
        {
            "uuid": "so-1",
            "asset": {"url": "https://example.com/design.png", "fit": "contain"},
        }
    ]


@pytest.fixture
def render_arguments(sample_smart_objects: list) -> Dict[str, Any]:
    return {"mockup_uuid": "mockup-1", "smart_objects": sample_smart_objects}


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on file paths."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        if "http" in path:
            item.add_marker(pytest.mark.api)
        if "mcp" in path:
            item.add_marker(pytest.mark.mcp)
