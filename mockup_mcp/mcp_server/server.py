"""
MCP Server Implementation
=========================

Model Context Protocol server exposing the Dynamic Mockups API as tools.
Tool discovery and invocation are served by the low-level ``mcp`` server;
every call is delegated to the shared ``ToolRouter``.
"""

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from mockup_mcp.config.logging import get_logger
from mockup_mcp.config.settings import Settings, get_settings
from mockup_mcp.mcp_server.handlers import ToolRouter, create_router
from mockup_mcp.models.schemas import InvocationRequest

logger = get_logger(__name__)


class MockupMCPServer:
    """MCP server bound to one tool router."""

    def __init__(self, router: ToolRouter, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.router = router
        self.logger: Any = logger.bind(component="mcp_server")  # structlog.BoundLoggerBase
        self.server = Server(self.settings.app_name, version=self.settings.app_version)
        self._setup_tools()

    def _setup_tools(self) -> None:
        """Setup MCP tools."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            return [definition.to_mcp_tool() for definition in self.router.list_tools()]

        # Arguments go to the upstream as given; the API reports its own validation errors
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
            self.logger.info("Tool called", tool=name)
            request = InvocationRequest(
                tool_name=name,
                arguments=arguments or {},
                headers=self._request_headers(),
            )
            result = await self.router.invoke(request)
            return result.to_call_tool_result()

    def _request_headers(self) -> Dict[str, str]:
        """Headers of the HTTP request carrying the current message, empty for stdio."""
        try:
            request = self.server.request_context.request
        except LookupError:
            return {}

        headers = getattr(request, "headers", None)
        if headers is None:
            return {}
        return {str(name).lower(): str(value) for name, value in headers.items()}

    # Public API methods for MCP protocol testing
    async def get_tools(self) -> List[Tool]:
        """Get list of available MCP tools (public API)."""
        return [definition.to_mcp_tool() for definition in self.router.list_tools()]

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None
    ) -> CallToolResult:
        """Call a tool directly, bypassing the protocol machinery."""
        request = InvocationRequest(tool_name=name, arguments=arguments or {}, headers=headers or {})
        result = await self.router.invoke(request)
        return result.to_call_tool_result()

    async def run_streams(self, read_stream: Any, write_stream: Any, stateless: bool = False) -> None:
        """Serve one MCP session over a pair of message streams."""
        await self.server.run(
            read_stream,
            write_stream,
            self.server.create_initialization_options(),
            stateless=stateless,
        )

    async def run_stdio(self) -> None:
        """Serve a single MCP session over stdin/stdout."""
        async with stdio_server() as (read_stream, write_stream):
            self.logger.info(
                "MCP server starting with stdio transport",
                api_key_configured=bool(self.settings.api_key),
            )
            await self.run_streams(read_stream, write_stream)

        if self.router.tracker is not None:
            await self.router.tracker.aclose()


def create_stdio_server(settings: Optional[Settings] = None) -> MockupMCPServer:
    settings = settings or get_settings()
    return MockupMCPServer(create_router(settings, transport_mode="stdio"), settings)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mockup-mcp",
        description="Dynamic Mockups MCP server",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Serve the Streamable HTTP transport instead of stdio",
    )
    parser.add_argument("--host", default=None, help="HTTP bind address")
    parser.add_argument("--port", type=int, default=None, help="HTTP port")
    return parser.parse_args(argv)


def run_http(settings: Settings, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the HTTP transport under uvicorn."""
    import uvicorn

    from mockup_mcp.api.main import create_app

    host = host or settings.host
    port = port or settings.port
    logger.info(
        "MCP server starting with HTTP transport",
        host=host,
        port=port,
        api_key_configured=bool(settings.api_key),
    )
    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the MCP server."""
    args = parse_args(argv)

    try:
        settings = get_settings()
        if args.http or settings.transport == "http":
            run_http(settings, host=args.host, port=args.port)
        else:
            asyncio.run(create_stdio_server(settings).run_stdio())
    except KeyboardInterrupt:
        logger.info("MCP server stopped")
    except Exception as e:
        logger.error("Fatal error during startup", error=str(e), exc_info=True)
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
