"""
MCP Tool Router
===============

Dispatches tool invocations to their handlers. Every invocation yields exactly
one ``ToolResult``; no exception escapes ``ToolRouter.invoke``.
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from mockup_mcp.config.logging import get_logger
from mockup_mcp.config.settings import Settings
from mockup_mcp.core.client import UpstreamClientFactory
from mockup_mcp.core.credentials import resolve_credential
from mockup_mcp.core.normalizer import ResponseNormalizer
from mockup_mcp.core.projection import UpstreamOperation
from mockup_mcp.core.tracking import UsageTracker
from mockup_mcp.mcp_server.knowledge import (
    KnowledgeBase,
    api_knowledge,
    embed_editor_knowledge,
)
from mockup_mcp.mcp_server.tools import TOOL_DEFINITIONS, UPSTREAM_OPERATIONS
from mockup_mcp.models.schemas import Credential, InvocationRequest, ToolResult

logger = get_logger(__name__)

ToolHandler = Callable[[Dict[str, Any], Credential], Awaitable[ToolResult]]


class ToolRouter:
    """Routes tool invocations by name."""

    def __init__(
        self,
        client_factory: UpstreamClientFactory,
        fallback_api_key: Optional[str] = None,
        dashboard_url: str = "https://app.dynamicmockups.com/dashboard-api",
        tracker: Optional[UsageTracker] = None,
        operations: Optional[Mapping[str, UpstreamOperation]] = None,
    ) -> None:
        self.client_factory = client_factory
        self.fallback_api_key = fallback_api_key
        self.dashboard_url = dashboard_url
        self.tracker = tracker
        self.logger: Any = logger.bind(component="tool_router")  # structlog.BoundLoggerBase
        self._tool_handlers: Dict[str, ToolHandler] = {}

        self._register_knowledge_handler("get_api_info", api_knowledge)
        self._register_knowledge_handler("embed_mockup_editor", embed_editor_knowledge)
        for operation in (operations if operations is not None else UPSTREAM_OPERATIONS).values():
            self._register_upstream_handler(operation)

    def list_tools(self) -> list:
        """Tool definitions for every registered handler, in catalog order."""
        return [definition for definition in TOOL_DEFINITIONS if definition.name in self._tool_handlers]

    async def invoke(self, request: InvocationRequest) -> ToolResult:
        """
        Execute one tool invocation.

        Args:
            request: Tool name, arguments and transport headers

        Returns:
            Normalized tool result, never raises
        """
        name = request.tool_name
        arguments = dict(request.arguments or {})
        credential = resolve_credential(request.headers, self.fallback_api_key)

        handler = self._tool_handlers.get(name)
        if handler is None:
            self.logger.warning("Unknown tool requested", tool=name)
            self._track(name, credential, False, f"Unknown tool: {name}")
            return ResponseNormalizer.unknown_tool(name)

        self.logger.debug("Executing tool", tool=name, credential_source=credential.source)

        try:
            result = await handler(arguments, credential)
        except Exception as e:
            self.logger.error("Tool execution failed", tool=name, error=str(e))
            self._track(name, credential, False, str(e) or f"Error executing {name}")
            return ResponseNormalizer.from_exception(e, f"Error executing {name}")

        self._track(name, credential, not result.is_error, result.content if result.is_error else None)
        return result

    def _track(self, name: str, credential: Credential, success: bool, error: Optional[str]) -> None:
        if self.tracker is not None:
            self.tracker.notify(name, credential, success, error)

    def _register_knowledge_handler(self, name: str, knowledge: KnowledgeBase) -> None:
        async def handler(arguments: Dict[str, Any], credential: Credential) -> ToolResult:
            return ResponseNormalizer.ok(knowledge.lookup(arguments.get("topic")))

        self._tool_handlers[name] = handler

    def _register_upstream_handler(self, operation: UpstreamOperation) -> None:
        async def handler(arguments: Dict[str, Any], credential: Credential) -> ToolResult:
            return await self._call_upstream(operation, arguments, credential)

        self._tool_handlers[operation.name] = handler

    async def _call_upstream(
        self, operation: UpstreamOperation, arguments: Dict[str, Any], credential: Credential
    ) -> ToolResult:
        if not credential.is_present:
            return ResponseNormalizer.configuration_error(self.dashboard_url)

        try:
            request = operation.projection.build(arguments)
            client = self.client_factory.create(credential, operation.name)
            result = await client.send(request)
        except Exception as e:
            self.logger.warning(
                "Upstream call failed",
                tool=operation.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            return ResponseNormalizer.from_exception(e, operation.error_context)

        if result.is_error:
            self.logger.info("Upstream rejected request", tool=operation.name, status=result.status_code)
            return ResponseNormalizer.from_response(result)
        return ResponseNormalizer.from_response(result, operation.success_label(arguments))


def create_router(settings: Settings, transport_mode: str = "stdio") -> ToolRouter:
    """
    Build a router wired to the configured upstream.

    Args:
        settings: Application settings
        transport_mode: ``stdio`` or ``http``, reported in upstream tracking headers
    """
    client_factory = UpstreamClientFactory(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        transport_mode=transport_mode,
    )
    tracker = UsageTracker(
        client_factory,
        enabled=settings.tracking_enabled,
        timeout=settings.tracking_timeout,
    )
    return ToolRouter(
        client_factory,
        fallback_api_key=settings.api_key,
        dashboard_url=settings.dashboard_url,
        tracker=tracker,
    )
