"""
Integration Tests for MCP Protocol
==================================

Drives the MCP server through a real client session over in-memory streams,
with the upstream API replaced by a fake.
"""

import pytest
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import CallToolResult

from mockup_mcp.mcp_server.server import MockupMCPServer, create_stdio_server, parse_args
from mockup_mcp.mcp_server.tools import TOOL_DEFINITIONS
from mockup_mcp.models.schemas import UpstreamResult
from tests.utils.helpers import error_payload, result_json


class TestMCPServerBasics:
    """Test basic MCP server functionality."""

    def test_server_initialization(self, mcp_server):
        assert mcp_server.server.name == "dynamic-mockups-mcp"
        assert mcp_server.router is not None

    @pytest.mark.asyncio
    async def test_get_tools(self, mcp_server):
        tools = await mcp_server.get_tools()
        assert [tool.name for tool in tools] == [d.name for d in TOOL_DEFINITIONS]
        assert all(tool.inputSchema["type"] == "object" for tool in tools)

    @pytest.mark.asyncio
    async def test_direct_call_uses_headers(self, mcp_server, fake_factory):
        result = await mcp_server.call_tool("get_catalogs", {}, headers={"x-api-key": "request-key"})
        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert fake_factory.last_call.credential.api_key == "request-key"

    @pytest.mark.asyncio
    async def test_direct_call_unknown_tool(self, mcp_server):
        result = await mcp_server.call_tool("make_coffee")
        assert error_payload(result)["kind"] == "unknown_tool"

    def test_headers_empty_outside_requests(self, mcp_server):
        assert mcp_server._request_headers() == {}


class TestMCPSession:
    """Full protocol round trips."""

    @pytest.mark.asyncio
    async def test_list_tools(self, mcp_server):
        async with create_connected_server_and_client_session(mcp_server.server) as client:
            listed = await client.list_tools()
        names = [tool.name for tool in listed.tools]
        assert len(names) == 12
        assert "create_batch_render" in names

    @pytest.mark.asyncio
    async def test_knowledge_tool(self, mcp_server, fake_factory):
        async with create_connected_server_and_client_session(mcp_server.server) as client:
            result = await client.call_tool("get_api_info", {"topic": "rate_limits"})
        assert result.isError is False
        assert result_json(result) == {"rate_limits": {"requests_per_minute": 300}}
        assert fake_factory.calls == []

    @pytest.mark.asyncio
    async def test_upstream_tool_uses_fallback_key(self, mcp_server, fake_factory):
        fake_factory.script(UpstreamResult(status_code=200, body={"data": {"uuid": "col-1"}}))
        async with create_connected_server_and_client_session(mcp_server.server) as client:
            result = await client.call_tool("create_collection", {"name": "Mugs"})

        assert result.isError is False
        assert result_json(result) == {"message": 'Collection "Mugs" created', "data": {"uuid": "col-1"}}
        assert fake_factory.last_call.credential.api_key == "fallback-key"
        assert fake_factory.last_call.request.json_body == {"name": "Mugs"}

    @pytest.mark.asyncio
    async def test_upstream_rejection_sets_error_flag(self, mcp_server, fake_factory):
        fake_factory.script(UpstreamResult(status_code=404, body={"message": "Mockup not found"}))
        async with create_connected_server_and_client_session(mcp_server.server) as client:
            result = await client.call_tool("get_mockup_by_uuid", {"uuid": "missing"})

        assert result.isError is True
        assert error_payload(result)["message"] == "Mockup not found"

    @pytest.mark.asyncio
    async def test_missing_key_over_protocol(self, router, test_settings, fake_factory):
        server = MockupMCPServer(router, test_settings)
        async with create_connected_server_and_client_session(server.server) as client:
            result = await client.call_tool("get_mockups", {})
        assert error_payload(result)["kind"] == "configuration_error"
        assert fake_factory.calls == []


class TestCommandLine:
    def test_defaults_to_stdio(self):
        args = parse_args([])
        assert args.http is False
        assert args.host is None
        assert args.port is None

    def test_http_options(self):
        args = parse_args(["--http", "--host", "127.0.0.1", "--port", "8080"])
        assert args.http is True
        assert args.host == "127.0.0.1"
        assert args.port == 8080

    def test_stdio_server_uses_stdio_tracking_mode(self, keyed_settings):
        server = create_stdio_server(keyed_settings)
        assert server.router.client_factory.transport_mode == "stdio"
        assert server.router.fallback_api_key == "fallback-key"
