"""
Test Mocks
==========

Fake implementations of the upstream client and the HTTP session transport.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple, Union

import anyio
from starlette.responses import JSONResponse
from starlette.types import Receive, Scope, Send

from mockup_mcp.models.schemas import Credential, UpstreamRequest, UpstreamResult

Outcome = Union[UpstreamResult, BaseException]


class RecordedCall:
    """One request seen by the fake upstream."""

    def __init__(
        self, credential: Credential, tool_name: str, request: UpstreamRequest, timeout: Optional[float]
    ):
        self.credential = credential
        self.tool_name = tool_name
        self.request = request
        self.timeout = timeout


class FakeClient:
    """Client that answers from its factory's script."""

    def __init__(self, factory: "FakeClientFactory", credential: Credential, tool_name: str, timeout: Optional[float]):
        self.factory = factory
        self.credential = credential
        self.tool_name = tool_name
        self.timeout = timeout

    async def send(self, request: UpstreamRequest) -> UpstreamResult:
        self.factory.calls.append(RecordedCall(self.credential, self.tool_name, request, self.timeout))
        outcome = self.factory.next_outcome(request)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClientFactory:
    """Spy standing in for ``UpstreamClientFactory``."""

    def __init__(self, default: Optional[Outcome] = None):
        self.calls: List[RecordedCall] = []
        self.default: Outcome = default or UpstreamResult(status_code=200, body={"success": True})
        self._scripted: List[Outcome] = []
        self._responder: Optional[Callable[[UpstreamRequest], Outcome]] = None

    def script(self, *outcomes: Outcome) -> None:
        """Queue outcomes returned to the next calls, in order."""
        self._scripted.extend(outcomes)

    def respond_with(self, responder: Callable[[UpstreamRequest], Outcome]) -> None:
        self._responder = responder

    def next_outcome(self, request: UpstreamRequest) -> Outcome:
        if self._scripted:
            return self._scripted.pop(0)
        if self._responder is not None:
            return self._responder(request)
        return self.default

    def create(self, credential: Credential, tool_name: str, timeout: Optional[float] = None) -> FakeClient:
        return FakeClient(self, credential, tool_name, timeout)

    @property
    def last_call(self) -> RecordedCall:
        assert self.calls, "No upstream calls recorded"
        return self.calls[-1]


class FakeStreamableTransport:
    """In-process stand-in for ``StreamableHTTPServerTransport``."""

    def __init__(self, session_id: str, json_response: bool, status_code: int = 200):
        self.mcp_session_id = session_id
        self.json_response = json_response
        self.status_code = status_code
        self.is_terminated = False
        self.requests: List[Tuple[str, Dict[str, str]]] = []
        self._closed = anyio.Event()

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[Tuple[Any, Any]]:
        yield self, self

    async def handle_request(self, scope: Scope, receive: Receive, send: Send) -> None:
        headers = {key.decode("latin-1"): value.decode("latin-1") for key, value in scope["headers"]}
        self.requests.append((scope["method"], headers))

        if scope["method"] == "DELETE":
            await self.terminate()

        response = JSONResponse(
            {"session": self.mcp_session_id, "requests": len(self.requests)},
            status_code=self.status_code,
            headers={"mcp-session-id": self.mcp_session_id},
        )
        await response(scope, receive, send)

    async def terminate(self) -> None:
        self.is_terminated = True
        self._closed.set()

    async def wait_closed(self) -> None:
        await self._closed.wait()


class FakeTransportFactory:
    """Builds fake transports and remembers them by session id."""

    def __init__(self, status_code: int = 200):
        self.status_code = status_code
        self.transports: Dict[str, FakeStreamableTransport] = {}

    def __call__(self, session_id: str, json_response: bool) -> FakeStreamableTransport:
        transport = FakeStreamableTransport(session_id, json_response, status_code=self.status_code)
        self.transports[session_id] = transport
        return transport


class FakeSessionServer:
    """Session server that idles until its transport closes."""

    def __init__(self) -> None:
        self.started = False

    async def run_streams(self, read_stream: Any, write_stream: Any) -> None:
        self.started = True
        await read_stream.wait_closed()
