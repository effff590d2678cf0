"""
HTTP Transport
==============

FastAPI application serving the Streamable HTTP MCP transport.

Endpoints:
- GET|POST|DELETE / and /mcp: MCP sessions
- GET /health: Liveness and active session count
- GET /api/info: Capability summary
- GET /sse: Redirect to the MCP endpoint
"""
