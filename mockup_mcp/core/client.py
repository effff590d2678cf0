"""
Upstream API Client
===================

aiohttp client for the Dynamic Mockups REST API.

Responses below 500 are returned to the caller with their status and body so
that rejections can be reported with upstream detail. Responses of 500 and
above, timeouts and connection failures raise ``UpstreamError`` subclasses.
"""

import asyncio
import json
from typing import Optional, Dict, Any

import aiohttp

from mockup_mcp.config.logging import get_logger
from mockup_mcp.models.schemas import Credential, UpstreamRequest, UpstreamResult

logger = get_logger(__name__)


class UpstreamError(Exception):
    """Exception raised when the upstream API cannot serve a request."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """The request exceeded the client deadline."""

    pass


class UpstreamConnectionError(UpstreamError):
    """The upstream host could not be resolved or refused the connection."""

    pass


class UpstreamServerError(UpstreamError):
    """The upstream answered with a 5xx status."""

    def __init__(self, status_code: int, body: Any = None):
        super().__init__(f"Upstream server error ({status_code})")
        self.status_code = status_code
        self.body = body


def _decode_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class UpstreamClient:
    """Request executor bound to one credential and one tool."""

    def __init__(self, base_url: str, headers: Dict[str, str], timeout: float):
        self.base_url = base_url.rstrip("/")
        self.headers = headers
        self.timeout = timeout
        self.logger: Any = logger.bind(
            component="upstream_client", tool=headers.get("x-mcp-tool")
        )  # structlog.BoundLoggerBase

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def send(self, request: UpstreamRequest) -> UpstreamResult:
        """
        Execute an upstream request.

        Args:
            request: Method, path and payload to send

        Returns:
            Upstream status and decoded body for statuses below 500

        Raises:
            UpstreamTimeoutError: If the deadline expires
            UpstreamConnectionError: If the host is unreachable
            UpstreamServerError: If the upstream answers 5xx
        """
        url = self.url_for(request.path)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(headers=self.headers, timeout=timeout) as session:
                async with session.request(
                    request.method.value,
                    url,
                    params=request.params,
                    json=request.json_body,
                ) as response:
                    body = _decode_body(await response.text())
                    status = response.status
        except asyncio.TimeoutError as e:
            self.logger.warning("Upstream request timed out", method=request.method.value, path=request.path)
            raise UpstreamTimeoutError(f"Request to {request.path} timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            self.logger.warning(
                "Upstream connection failed", method=request.method.value, path=request.path, error=str(e)
            )
            raise UpstreamConnectionError(str(e)) from e

        self.logger.debug(
            "Upstream response received", method=request.method.value, path=request.path, status=status
        )

        if status >= 500:
            raise UpstreamServerError(status, body)

        return UpstreamResult(status_code=status, body=body)


class UpstreamClientFactory:
    """Builds clients bound to a credential, a fixed base URL, timeout and headers."""

    def __init__(self, base_url: str, timeout: float = 60.0, transport_mode: str = "stdio"):
        self.base_url = base_url
        self.timeout = timeout
        self.transport_mode = transport_mode

    def build_headers(self, credential: Credential, tool_name: str) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            # Attempted even without a key so the upstream reports the auth failure
            "x-api-key": credential.api_key or "",
            "x-mcp-server": "true",
            "x-mcp-tool": tool_name,
            "x-mcp-transport-mode": self.transport_mode,
        }

    def create(
        self, credential: Credential, tool_name: str, timeout: Optional[float] = None
    ) -> UpstreamClient:
        return UpstreamClient(
            base_url=self.base_url,
            headers=self.build_headers(credential, tool_name),
            timeout=timeout if timeout is not None else self.timeout,
        )
