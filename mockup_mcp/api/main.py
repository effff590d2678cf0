"""
FastAPI Application
===================

HTTP application hosting the Streamable HTTP MCP transport at ``/`` and
``/mcp`` next to the plain health and info endpoints.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
import uvicorn

from mockup_mcp.api.routes.health import router as health_router
from mockup_mcp.api.sessions import (
    SessionRegistry,
    StreamableHTTPSessionBinding,
    default_transport_factory,
)
from mockup_mcp.config.logging import get_logger
from mockup_mcp.config.settings import Settings, get_settings
from mockup_mcp.mcp_server.handlers import ToolRouter, create_router
from mockup_mcp.mcp_server.server import MockupMCPServer
from mockup_mcp.models.schemas import ErrorResponse

logger = get_logger(__name__)

MCP_METHODS = ["GET", "POST", "DELETE"]

CORS_ALLOWED_HEADERS = [
    "Content-Type",
    "Accept",
    "Authorization",
    "x-api-key",
    "Mcp-Session-Id",
    "Last-Event-Id",
    "Mcp-Protocol-Version",
]


def create_app(
    settings: Optional[Settings] = None,
    tool_router: Optional[ToolRouter] = None,
    server_factory: Optional[Callable[[], Any]] = None,
    transport_factory: Callable[[str, bool], Any] = default_transport_factory,
) -> FastAPI:
    """
    Application factory for the HTTP transport.

    Args:
        settings: Application settings, defaults to the global instance
        tool_router: Router shared by every session
        server_factory: Builds one MCP server per session
        transport_factory: Builds one transport per session

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()
    tool_router = tool_router or create_router(settings, transport_mode="http")
    if server_factory is None:
        def server_factory() -> MockupMCPServer:
            return MockupMCPServer(tool_router, settings)

    sessions = SessionRegistry()
    binding = StreamableHTTPSessionBinding(
        server_factory,
        registry=sessions,
        json_response=settings.json_response,
        transport_factory=transport_factory,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info(
            "Starting HTTP transport",
            server=settings.app_name,
            version=settings.app_version,
            api_key_configured=bool(settings.api_key),
        )
        async with binding.run():
            try:
                yield
            finally:
                logger.info("Shutting down HTTP transport", open_sessions=len(sessions))
                if tool_router.tracker is not None:
                    await tool_router.tracker.aclose()

    app = FastAPI(
        title="Dynamic Mockups MCP Server",
        description="Model Context Protocol adapter for the Dynamic Mockups API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.sessions = sessions
    app.state.tool_router = tool_router
    app.state.session_binding = binding

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=MCP_METHODS + ["OPTIONS"],
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=["Mcp-Session-Id"],
    )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        error_response = ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            details={"exception": str(exc)} if settings.debug else None,
        )
        logger.error("Unhandled exception", path=request.url.path, exception=str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))

    app.include_router(health_router)

    @app.get("/sse", include_in_schema=False)
    async def legacy_sse() -> RedirectResponse:
        """Clients of the old SSE transport are sent to the unified endpoint."""
        return RedirectResponse(url="/", status_code=307)

    app.add_route("/mcp", binding, methods=MCP_METHODS, include_in_schema=False)
    app.add_route("/", binding, methods=MCP_METHODS, include_in_schema=False)

    return app


def run_development_server() -> None:
    """Run the HTTP transport with settings from the environment."""
    settings = get_settings()
    uvicorn.run(
        "mockup_mcp.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    run_development_server()
