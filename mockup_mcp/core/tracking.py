"""
Usage Tracking
==============

Fire-and-forget tool usage reports sent to the upstream ``/mcp/track``
endpoint after each invocation. Reports never delay or alter tool results and
every failure is swallowed.
"""

import asyncio
from typing import Any, Optional, Set

from mockup_mcp.config.logging import get_logger
from mockup_mcp.core.client import UpstreamClientFactory
from mockup_mcp.models.schemas import Credential, HttpMethod, UpstreamRequest

logger = get_logger(__name__)

TRACK_PATH = "/mcp/track"


class UsageTracker:
    """Schedules usage reports as background tasks."""

    def __init__(
        self,
        client_factory: UpstreamClientFactory,
        enabled: bool = True,
        timeout: float = 5.0,
    ) -> None:
        self.client_factory = client_factory
        self.enabled = enabled
        self.timeout = timeout
        self.logger: Any = logger.bind(component="usage_tracker")  # structlog.BoundLoggerBase
        self._pending: Set["asyncio.Task[None]"] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def notify(
        self, tool_name: str, credential: Credential, success: bool, error: Optional[str] = None
    ) -> None:
        """Schedule a usage report. Returns immediately."""
        if not self.enabled or not credential.is_present:
            return

        try:
            task = asyncio.get_running_loop().create_task(
                self._send(tool_name, credential, success, error)
            )
        except RuntimeError:
            # No running loop, nothing to schedule on
            return

        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(
        self, tool_name: str, credential: Credential, success: bool, error: Optional[str]
    ) -> None:
        request = UpstreamRequest(
            method=HttpMethod.POST,
            path=TRACK_PATH,
            json_body={"tool": tool_name, "success": success, "error": error or None},
        )
        try:
            client = self.client_factory.create(credential, tool_name, timeout=self.timeout)
            await client.send(request)
        except Exception as e:
            self.logger.debug("Usage report dropped", tool=tool_name, error=str(e))

    async def aclose(self) -> None:
        """Wait for in-flight reports to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
