"""
Response Normalization
======================

Maps upstream outcomes and failures onto the single ``ToolResult`` shape
consumed by the MCP protocol layer.

Error content is always ``{"error": {"message": ..., "kind": ..., ...}}`` so a
calling agent can decide whether to retry, change arguments or ask its user
for a credential.
"""

import json
from typing import Any, Dict, Optional

from mockup_mcp.core.client import (
    UpstreamConnectionError,
    UpstreamServerError,
    UpstreamTimeoutError,
)
from mockup_mcp.models.schemas import ErrorKind, ToolResult, UpstreamResult

API_KEY_SOLUTION = (
    "Provide your Dynamic Mockups API key. For HTTP transport, use the Authorization "
    "header (Bearer token) or the x-api-key header. For stdio transport, set the "
    "DYNAMIC_MOCKUPS_API_KEY environment variable."
)
TIMEOUT_SUGGESTION = "The API request took too long. Try again or use smaller batch sizes."
NETWORK_SUGGESTION = "Unable to reach the API. Check your internet connection or try again later."


def render_content(data: Any) -> str:
    """Render result content as text: strings pass through, everything else is indented JSON."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


class ResponseNormalizer:
    """Builds normalized tool results."""

    @staticmethod
    def ok(data: Any) -> ToolResult:
        return ToolResult(is_error=False, content=render_content(data))

    @staticmethod
    def error(message: str, kind: ErrorKind, **details: Any) -> ToolResult:
        payload: Dict[str, Any] = {"message": message, "kind": kind.value}
        payload.update(details)
        return ToolResult(is_error=True, content=render_content({"error": payload}))

    @classmethod
    def configuration_error(cls, get_key_at: str) -> ToolResult:
        return cls.error(
            "API key not configured",
            ErrorKind.CONFIGURATION_ERROR,
            solution=API_KEY_SOLUTION,
            get_key_at=get_key_at,
        )

    @classmethod
    def unknown_tool(cls, name: str) -> ToolResult:
        return cls.error(f"Unknown tool: {name}", ErrorKind.UNKNOWN_TOOL, tool=name)

    @classmethod
    def from_response(cls, result: UpstreamResult, success_message: Optional[str] = None) -> ToolResult:
        """
        Normalize an upstream response.

        Args:
            result: Upstream status and body
            success_message: Human-readable label merged into successful results

        Returns:
            Error result for statuses of 400 and above, success result otherwise
        """
        body = result.body

        if result.is_error:
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            if not isinstance(message, str) or not message:
                message = f"API error ({result.status_code})"
            return cls.error(
                message,
                ErrorKind.UPSTREAM_REJECTION,
                status=result.status_code,
                details=body,
            )

        if success_message:
            if isinstance(body, dict):
                return cls.ok({"message": success_message, **body})
            if body is None:
                return cls.ok({"message": success_message})
            return cls.ok({"message": success_message, "data": body})

        return cls.ok(body if body is not None else {})

    @classmethod
    def from_exception(cls, exc: BaseException, context: str = "Operation failed") -> ToolResult:
        """
        Normalize an exception raised while serving an invocation.

        Args:
            exc: The caught exception
            context: Label describing the failed operation

        Returns:
            Error result matching the failure kind
        """
        if isinstance(exc, UpstreamTimeoutError):
            return cls.error(
                "Request timeout",
                ErrorKind.TIMEOUT,
                context=context,
                suggestion=TIMEOUT_SUGGESTION,
            )

        if isinstance(exc, UpstreamServerError):
            return cls.error(
                "Network error",
                ErrorKind.UPSTREAM_UNAVAILABLE,
                context=context,
                suggestion=NETWORK_SUGGESTION,
                status=exc.status_code,
                details=exc.body,
            )

        if isinstance(exc, UpstreamConnectionError):
            return cls.error(
                "Network error",
                ErrorKind.UPSTREAM_UNAVAILABLE,
                context=context,
                suggestion=NETWORK_SUGGESTION,
            )

        return cls.error(context, ErrorKind.INTERNAL_ERROR, details=str(exc) or type(exc).__name__)
