"""
Integration Tests for the HTTP Transport
========================================

Exercises the FastAPI application. Most tests use fake per-session transports
so that session routing can be observed without a real MCP client; one runs a
full MCP exchange over the real streamable HTTP transport.
"""

import pytest
from fastapi.testclient import TestClient

from mockup_mcp.api.main import create_app
from mockup_mcp.api.sessions import Session, SessionRegistry, StreamableHTTPSessionBinding
from mockup_mcp.mcp_server.tools import TOOL_DEFINITIONS
from tests.utils.mocks import FakeSessionServer, FakeTransportFactory


@pytest.fixture
def transports():
    return FakeTransportFactory()


@pytest.fixture
def app(test_settings, router, transports):
    return create_app(
        test_settings,
        tool_router=router,
        server_factory=FakeSessionServer,
        transport_factory=transports,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def open_session(client, path="/mcp", headers=None):
    response = client.post(path, json={"jsonrpc": "2.0", "method": "initialize", "id": 1}, headers=headers or {})
    assert response.status_code == 200
    return response.headers["mcp-session-id"]


class TestPlainEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "server": "dynamic-mockups-mcp",
            "version": "1.0.0",
            "transport": "streamable-http",
            "active_sessions": 0,
        }

    def test_api_info(self, client):
        info = client.get("/api/info").json()
        assert info["server"] == "dynamic-mockups-mcp"
        assert info["api_key_configured"] is False
        assert [tool["name"] for tool in info["tools"]] == [d.name for d in TOOL_DEFINITIONS]
        assert info["endpoints"] == {"mcp": "/mcp", "health": "/health"}

    def test_api_info_reports_fallback_key(self, keyed_settings, keyed_router, transports):
        app = create_app(keyed_settings, tool_router=keyed_router, server_factory=FakeSessionServer, transport_factory=transports)
        with TestClient(app) as test_client:
            assert test_client.get("/api/info").json()["api_key_configured"] is True

    def test_legacy_sse_redirects(self, client):
        response = client.get("/sse", follow_redirects=False)
        assert response.status_code == 307
        assert response.headers["location"] == "/"

    def test_cors_preflight(self, client):
        response = client.options(
            "/mcp",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "x-api-key, mcp-session-id",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestSessionRouting:
    @pytest.mark.parametrize("path", ["/mcp", "/"])
    def test_delete_without_session_is_rejected(self, client, path):
        response = client.delete(path)
        assert response.status_code == 400
        assert response.json() == {
            "jsonrpc": "2.0",
            "error": {"code": -32000, "message": "Bad Request: No valid session found"},
            "id": None,
        }

    def test_delete_with_unknown_session_is_rejected(self, client, transports):
        response = client.delete("/mcp", headers={"mcp-session-id": "does-not-exist"})
        assert response.status_code == 400
        assert transports.transports == {}

    @pytest.mark.parametrize("path", ["/mcp", "/"])
    def test_post_creates_session(self, client, transports, path):
        session_id = open_session(client, path)
        assert list(transports.transports) == [session_id]
        assert client.get("/health").json()["active_sessions"] == 1

    def test_exposes_session_header_to_browsers(self, client):
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "method": "initialize", "id": 1},
            headers={"Origin": "https://app.example.com"},
        )
        assert "mcp-session-id" in response.headers["access-control-expose-headers"].lower()

    def test_known_session_is_reused(self, client, transports):
        session_id = open_session(client)
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "method": "tools/list", "id": 2},
            headers={"mcp-session-id": session_id},
        )
        assert response.status_code == 200
        assert response.json()["requests"] == 2
        assert len(transports.transports) == 1

    def test_request_headers_reach_transport(self, client, transports):
        session_id = open_session(client, headers={"x-api-key": "request-key"})
        method, headers = transports.transports[session_id].requests[0]
        assert method == "POST"
        assert headers["x-api-key"] == "request-key"

    def test_delete_closes_session(self, client, transports):
        session_id = open_session(client)
        response = client.delete("/mcp", headers={"mcp-session-id": session_id})
        assert response.status_code == 200
        assert transports.transports[session_id].is_terminated
        assert client.get("/health").json()["active_sessions"] == 0

        # The id is gone, so a second DELETE has no session to act on
        assert client.delete("/mcp", headers={"mcp-session-id": session_id}).status_code == 400

    def test_stale_session_id_starts_new_session(self, client, transports):
        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "method": "initialize", "id": 1},
            headers={"mcp-session-id": "stale-id"},
        )
        assert response.status_code == 200
        new_id = response.headers["mcp-session-id"]
        assert new_id != "stale-id"
        _, headers = transports.transports[new_id].requests[0]
        assert "mcp-session-id" not in headers

    def test_sessions_are_independent(self, client, transports):
        first = open_session(client)
        second = open_session(client)
        assert first != second
        assert client.get("/health").json()["active_sessions"] == 2

        client.delete("/mcp", headers={"mcp-session-id": first})
        assert client.get("/health").json()["active_sessions"] == 1
        assert not transports.transports[second].is_terminated


class TestRejectedSessions:
    def test_refused_opening_request_discards_session(self, test_settings, router):
        transports = FakeTransportFactory(status_code=400)
        app = create_app(test_settings, tool_router=router, server_factory=FakeSessionServer, transport_factory=transports)
        with TestClient(app) as test_client:
            response = test_client.get("/mcp")
            assert response.status_code == 400
            assert test_client.get("/health").json()["active_sessions"] == 0
        (transport,) = transports.transports.values()
        assert transport.is_terminated


class TestSessionRegistry:
    def test_register_get_remove(self):
        registry = SessionRegistry()
        session = Session(session_id="s-1", transport=object())
        registry.register(session)
        assert registry.get("s-1") is session
        assert len(registry) == 1
        assert registry.get(None) is None
        assert registry.remove("s-1") is session
        assert registry.remove("s-1") is None
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_sessions_need_running_binding(self, transports):
        binding = StreamableHTTPSessionBinding(FakeSessionServer, transport_factory=transports)
        with pytest.raises(RuntimeError, match="not running"):
            await binding._start_session()
        assert len(binding.registry) == 0
        assert transports.transports == {}


MCP_HEADERS = {
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
    "mcp-protocol-version": "2025-03-26",
}


class TestStreamableTransport:
    def test_request_credential_reaches_router(self, test_settings, router, fake_factory):
        settings = test_settings.model_copy(update={"json_response": True})
        app = create_app(settings, tool_router=router)

        with TestClient(app) as test_client:
            response = test_client.post(
                "/mcp",
                json={
                    "jsonrpc": "2.0",
                    "id": 1,
                    "method": "initialize",
                    "params": {
                        "protocolVersion": "2025-03-26",
                        "capabilities": {},
                        "clientInfo": {"name": "test-client", "version": "1.0"},
                    },
                },
                headers=MCP_HEADERS,
            )
            assert response.status_code == 200
            assert response.json()["result"]["serverInfo"]["name"] == "dynamic-mockups-mcp"
            headers = {**MCP_HEADERS, "mcp-session-id": response.headers["mcp-session-id"]}

            response = test_client.post(
                "/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"}, headers=headers
            )
            assert response.status_code == 202

            response = test_client.post(
                "/mcp",
                json={
                    "jsonrpc": "2.0",
                    "id": 2,
                    "method": "tools/call",
                    "params": {"name": "get_catalogs", "arguments": {}},
                },
                headers={**headers, "Authorization": "Bearer K1", "x-api-key": "K2"},
            )
            assert response.status_code == 200
            assert response.json()["result"]["isError"] is False

        assert [call.credential.api_key for call in fake_factory.calls] == ["K1"]
        assert fake_factory.last_call.credential.source == "authorization"
