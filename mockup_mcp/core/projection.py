"""
Field Projection
================

Declarative mapping from tool arguments to upstream requests. Field names are
passed through unchanged; optional fields are sent only when supplied.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from mockup_mcp.models.schemas import HttpMethod, UpstreamRequest

QUERY = "query"
BODY = "body"


def _query_value(value: Any) -> Any:
    # aiohttp rejects booleans in query strings
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass(frozen=True)
class FieldProjection:
    """How one tool's arguments become an upstream request."""

    method: HttpMethod
    path: str
    location: str = QUERY
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    path_fields: Tuple[str, ...] = ()

    def project(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """Copy required fields that were supplied and optional fields that are not None."""
        payload: Dict[str, Any] = {}
        for name in self.required:
            if name in arguments:
                payload[name] = arguments[name]
        for name in self.optional:
            if arguments.get(name) is not None:
                payload[name] = arguments[name]
        return payload

    def render_path(self, arguments: Mapping[str, Any]) -> str:
        values = {}
        for name in self.path_fields:
            value = arguments.get(name)
            if value is None or value == "":
                raise ValueError(f"Missing required argument: {name}")
            values[name] = quote(str(value), safe="")
        return self.path.format(**values)

    def build(self, arguments: Mapping[str, Any]) -> UpstreamRequest:
        path = self.render_path(arguments)
        payload = self.project(arguments)

        if self.location == BODY:
            return UpstreamRequest(method=self.method, path=path, json_body=payload)

        params = {name: _query_value(value) for name, value in payload.items()}
        return UpstreamRequest(method=self.method, path=path, params=params or None)


@dataclass(frozen=True)
class UpstreamOperation:
    """A network-calling tool: projection plus result labels."""

    name: str
    projection: FieldProjection
    error_context: str
    success_message: Optional[Callable[[Mapping[str, Any]], str]] = field(default=None, compare=False)

    def success_label(self, arguments: Mapping[str, Any]) -> Optional[str]:
        if self.success_message is None:
            return None
        return self.success_message(arguments)
