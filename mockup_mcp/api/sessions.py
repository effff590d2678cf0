"""
Streamable HTTP Sessions
========================

Session registry and the raw ASGI binding that routes MCP requests to
per-session transports.

Each session owns a fresh low-level MCP server and a fresh
``StreamableHTTPServerTransport``; all sessions share one tool router. Server
tasks run in an ``anyio`` task group held open by the application lifespan.
"""

import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp.server.streamable_http import MCP_SESSION_ID_HEADER, StreamableHTTPServerTransport
from starlette.responses import JSONResponse
from starlette.types import Message, Receive, Scope, Send

from mockup_mcp.config.logging import get_logger

logger = get_logger(__name__)

NO_VALID_SESSION_ERROR = {
    "jsonrpc": "2.0",
    "error": {"code": -32000, "message": "Bad Request: No valid session found"},
    "id": None,
}

SESSION_CREATING_METHODS = ("GET", "POST")


@dataclass
class Session:
    """One MCP conversation over HTTP."""

    session_id: str
    transport: Any
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SessionRegistry:
    """Map of session id to live session."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def register(self, session: Session) -> None:
        self._sessions[session.session_id] = session

    def remove(self, session_id: str) -> Optional[Session]:
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


def _session_header(scope: Scope) -> Optional[str]:
    name = MCP_SESSION_ID_HEADER.encode("latin-1")
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return None


def _without_session_header(scope: Scope) -> Scope:
    name = MCP_SESSION_ID_HEADER.encode("latin-1")
    headers: List[Tuple[bytes, bytes]] = [
        (key, value) for key, value in scope.get("headers", []) if key.lower() != name
    ]
    stripped = dict(scope)
    stripped["headers"] = headers
    return stripped


def default_transport_factory(session_id: str, json_response: bool) -> StreamableHTTPServerTransport:
    return StreamableHTTPServerTransport(
        mcp_session_id=session_id,
        is_json_response_enabled=json_response,
    )


class StreamableHTTPSessionBinding:
    """
    ASGI application serving the unified MCP endpoint.

    Requests carrying a known ``mcp-session-id`` go to that session's
    transport. GET and POST requests without a known session start a new
    one. Anything else is rejected with a JSON-RPC error.
    """

    def __init__(
        self,
        server_factory: Callable[[], Any],
        registry: Optional[SessionRegistry] = None,
        json_response: bool = False,
        transport_factory: Callable[[str, bool], Any] = default_transport_factory,
    ) -> None:
        self.server_factory = server_factory
        self.registry = registry if registry is not None else SessionRegistry()
        self.json_response = json_response
        self.transport_factory = transport_factory
        self.logger: Any = logger.bind(component="session_binding")  # structlog.BoundLoggerBase
        self._task_group: Optional[TaskGroup] = None

    @asynccontextmanager
    async def run(self) -> AsyncIterator[None]:
        """Hold the task group that owns session servers."""
        if self._task_group is not None:
            raise RuntimeError("Session binding is already running")

        async with anyio.create_task_group() as tg:
            self._task_group = tg
            self.logger.info("Session binding started")
            try:
                yield
            finally:
                tg.cancel_scope.cancel()
                self._task_group = None
                self.logger.info("Session binding stopped", open_sessions=len(self.registry))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if self._task_group is None:
            raise RuntimeError("Session binding is not running; enter run() first")

        method = scope.get("method", "GET").upper()
        session = self.registry.get(_session_header(scope))

        if session is not None:
            await session.transport.handle_request(scope, receive, send)
            if session.transport.is_terminated:
                self.registry.remove(session.session_id)
                self.logger.info("Session closed", session_id=session.session_id)
            return

        if method not in SESSION_CREATING_METHODS:
            response = JSONResponse(NO_VALID_SESSION_ERROR, status_code=400)
            await response(scope, receive, send)
            return

        session = await self._start_session()
        status: Dict[str, int] = {}

        async def send_and_record(message: Message) -> None:
            if message["type"] == "http.response.start":
                status.setdefault("code", message["status"])
            await send(message)

        await session.transport.handle_request(_without_session_header(scope), receive, send_and_record)

        # A session whose opening request was refused is never usable
        if status.get("code", 500) >= 400:
            self.registry.remove(session.session_id)
            await session.transport.terminate()
            self.logger.info(
                "Session discarded", session_id=session.session_id, status=status.get("code")
            )

    async def _start_session(self) -> Session:
        task_group = self._task_group
        if task_group is None:
            raise RuntimeError("Session binding is not running; enter run() first")

        session_id = uuid.uuid4().hex
        transport = self.transport_factory(session_id, self.json_response)
        session = Session(session_id=session_id, transport=transport)
        self.registry.register(session)
        server = self.server_factory()

        async def run_server(*, task_status: TaskStatus = anyio.TASK_STATUS_IGNORED) -> None:
            try:
                async with transport.connect() as (read_stream, write_stream):
                    task_status.started()
                    await server.run_streams(read_stream, write_stream)
            except Exception as e:
                self.logger.error("Session server crashed", session_id=session_id, error=str(e))
            finally:
                self.registry.remove(session_id)

        await task_group.start(run_server)
        self.logger.info("Session initialized", session_id=session_id, active_sessions=len(self.registry))
        return session
