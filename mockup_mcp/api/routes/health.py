"""
Health Routes
=============

FastAPI routes for liveness and capability discovery.
"""

from fastapi import APIRouter, Request

from mockup_mcp.config.settings import Settings
from mockup_mcp.mcp_server.handlers import ToolRouter
from mockup_mcp.models.schemas import HealthStatus, ServerInfo, ToolSummary

router = APIRouter(tags=["Health"])

ENDPOINTS = {
    "mcp": "/mcp",
    "health": "/health",
}


def _settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request) -> HealthStatus:
    """Report liveness and the number of open MCP sessions."""
    settings = _settings(request)
    return HealthStatus(
        server=settings.app_name,
        version=settings.app_version,
        active_sessions=len(request.app.state.sessions),
    )


@router.get("/api/info", response_model=ServerInfo)
async def api_info(request: Request) -> ServerInfo:
    """Summarize the server: tools, endpoints and whether a fallback API key is set."""
    settings = _settings(request)
    tool_router: ToolRouter = request.app.state.tool_router
    return ServerInfo(
        server=settings.app_name,
        version=settings.app_version,
        api_key_configured=bool(settings.api_key),
        tools=[
            ToolSummary(name=definition.name, description=definition.description)
            for definition in tool_router.list_tools()
        ],
        endpoints=ENDPOINTS,
    )
