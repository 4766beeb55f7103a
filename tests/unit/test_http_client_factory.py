"""
Unit tests for the shared camera HTTP client.
"""
import httpx
import pytest
from facewatch.infrastructure import http_client_factory
from facewatch.infrastructure.http_client_factory import (
    FRAME_USER_AGENT,
    build_camera_http_client,
    close_shared_http_client,
    get_shared_http_client,
)


@pytest.fixture(autouse=True)
def no_shared_client(monkeypatch):
    monkeypatch.setattr(http_client_factory, "_shared_client", None)


class TestBuildCameraHttpClient:
    """Tests for build_camera_http_client"""

    @pytest.mark.asyncio
    async def test_timeouts_and_headers(self):
        seen = {}

        def handler(request):
            seen["user_agent"] = request.headers.get("user-agent")
            return httpx.Response(200)

        client = build_camera_http_client(5.0, transport=httpx.MockTransport(handler))
        try:
            assert client.timeout.read == 5.0
            assert client.timeout.connect == 2.0
            await client.get("http://camera.test/lobby")
        finally:
            await client.aclose()
        assert seen["user_agent"] == FRAME_USER_AGENT

    @pytest.mark.asyncio
    async def test_connect_timeout_never_exceeds_frame_timeout(self):
        client = build_camera_http_client(0.5)
        try:
            assert client.timeout.connect == 0.5
        finally:
            await client.aclose()


class TestSharedClient:
    """Tests for the process-wide client"""

    @pytest.mark.asyncio
    async def test_shared_client_uses_frame_timeout_setting(self, mock_env, monkeypatch):
        monkeypatch.setenv("FRAME_TIMEOUT_SECONDS", "3")
        client = get_shared_http_client()
        assert get_shared_http_client() is client
        assert client.timeout.read == 3.0

        await close_shared_http_client()
        assert client.is_closed
        assert get_shared_http_client() is not client
        await close_shared_http_client()

    @pytest.mark.asyncio
    async def test_close_without_client_is_noop(self):
        await close_shared_http_client()
