"""
Pydantic Models and Schemas
===========================

Request-scoped data models flowing between the MCP protocol layer, the tool
router and the upstream API client. Nothing here is persisted.
"""

from typing import Optional, List, Dict, Any
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from mcp.types import CallToolResult, TextContent, Tool


# Enums
class ErrorKind(str, Enum):
    """Kinds of failure a tool invocation can report."""
    CONFIGURATION_ERROR = "configuration_error"
    UPSTREAM_REJECTION = "upstream_rejection"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL_ERROR = "internal_error"


class HttpMethod(str, Enum):
    """Upstream HTTP methods in use."""
    GET = "GET"
    POST = "POST"


# Tool Models
class ToolDefinition(BaseModel):
    """A named, schema-described callable operation."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str
    input_schema: Dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_mcp_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


class InvocationRequest(BaseModel):
    """One request to execute a named tool with arguments."""
    tool_name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Transport request headers, empty for stdio"
    )


class Credential(BaseModel):
    """Upstream API key resolved for a single invocation."""
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = Field(default=None, repr=False)
    source: Optional[str] = Field(
        default=None, description="Where the key came from: authorization, x-api-key or fallback"
    )

    @property
    def is_present(self) -> bool:
        return bool(self.api_key)


# Upstream Models
class UpstreamRequest(BaseModel):
    """Request sent to the upstream API, projected from tool arguments."""
    method: HttpMethod
    path: str
    params: Optional[Dict[str, Any]] = None
    json_body: Optional[Dict[str, Any]] = None


class UpstreamResult(BaseModel):
    """Status and decoded body returned by the upstream API."""
    status_code: int
    body: Any = None

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


# Result Models
class ToolResult(BaseModel):
    """Normalized outcome of a tool invocation."""
    is_error: bool = False
    content: str

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.content)],
            isError=self.is_error,
        )


# HTTP Endpoint Models
class HealthStatus(BaseModel):
    """Liveness report for the HTTP transport."""
    status: str = "ok"
    server: str
    version: str
    transport: str = "streamable-http"
    active_sessions: int = 0


class ToolSummary(BaseModel):
    """Name and description of one tool."""
    name: str
    description: str


class ServerInfo(BaseModel):
    """Human-readable capability summary."""
    server: str
    version: str
    api_key_configured: bool
    tools: List[ToolSummary]
    endpoints: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error body for the plain HTTP endpoints."""
    error: str
    error_code: str
    details: Optional[Dict[str, Any]] = None
