"""
Test Helpers
============

Helper functions for common testing operations.
"""

import json
from typing import Any, Dict

from mcp.types import CallToolResult

from mockup_mcp.models.schemas import ToolResult


def result_text(result: Any) -> str:
    """Text content of a ToolResult or CallToolResult."""
    if isinstance(result, ToolResult):
        return result.content
    if isinstance(result, CallToolResult):
        assert len(result.content) == 1
        return result.content[0].text
    raise TypeError(f"Not a tool result: {type(result).__name__}")


def result_json(result: Any) -> Any:
    return json.loads(result_text(result))


def error_payload(result: Any) -> Dict[str, Any]:
    """The ``error`` object of a failed tool result."""
    is_error = result.is_error if isinstance(result, ToolResult) else result.isError
    assert is_error, f"Expected an error result, got: {result_text(result)}"
    payload = result_json(result)
    assert set(payload) == {"error"}
    return payload["error"]
