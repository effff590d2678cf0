"""
Unit Tests for Usage Tracking
=============================
"""

import pytest

from mockup_mcp.core.client import UpstreamConnectionError
from mockup_mcp.core.tracking import TRACK_PATH, UsageTracker
from mockup_mcp.models.schemas import Credential, HttpMethod
from tests.utils.mocks import FakeClientFactory


@pytest.fixture
def tracker(fake_factory):
    return UsageTracker(fake_factory, enabled=True, timeout=5.0)


class TestUsageTracker:
    @pytest.mark.asyncio
    async def test_reports_usage(self, tracker, fake_factory):
        tracker.notify("create_render", Credential(api_key="k"), True)
        await tracker.aclose()

        call = fake_factory.last_call
        assert call.request.method == HttpMethod.POST
        assert call.request.path == TRACK_PATH
        assert call.request.json_body == {"tool": "create_render", "success": True, "error": None}
        assert call.timeout == 5.0
        assert call.credential.api_key == "k"

    @pytest.mark.asyncio
    async def test_reports_error_message(self, tracker, fake_factory):
        tracker.notify("make_coffee", Credential(api_key="k"), False, "Unknown tool: make_coffee")
        await tracker.aclose()
        assert fake_factory.last_call.request.json_body["error"] == "Unknown tool: make_coffee"

    @pytest.mark.asyncio
    async def test_skipped_without_credential(self, tracker, fake_factory):
        tracker.notify("get_catalogs", Credential(), True)
        assert tracker.pending == 0
        await tracker.aclose()
        assert fake_factory.calls == []

    @pytest.mark.asyncio
    async def test_skipped_when_disabled(self, fake_factory):
        tracker = UsageTracker(fake_factory, enabled=False)
        tracker.notify("get_catalogs", Credential(api_key="k"), True)
        await tracker.aclose()
        assert fake_factory.calls == []

    @pytest.mark.asyncio
    async def test_failures_are_swallowed(self, tracker, fake_factory):
        fake_factory.script(UpstreamConnectionError("refused"))
        tracker.notify("get_catalogs", Credential(api_key="k"), True)
        await tracker.aclose()
        assert len(fake_factory.calls) == 1
        assert tracker.pending == 0

    def test_notify_without_event_loop_is_a_no_op(self):
        factory = FakeClientFactory()
        tracker = UsageTracker(factory)
        tracker.notify("get_catalogs", Credential(api_key="k"), True)
        assert tracker.pending == 0
        assert factory.calls == []
