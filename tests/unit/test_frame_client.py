"""
Unit tests for FrameClient using httpx.MockTransport as the camera endpoint.
"""
import httpx
import pytest
from facewatch.infrastructure.external.frame_client import FrameClient, decode_image


def _client(handler):
    return FrameClient(timeout=1.0, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestFrameClient:
    """Tests for FrameClient.capture"""

    @pytest.mark.asyncio
    async def test_capture_decodes_jpeg(self, jpeg_bytes):
        seen = {}

        def handler(request):
            seen["user_agent"] = request.headers.get("user-agent")
            return httpx.Response(200, content=jpeg_bytes, headers={"content-type": "image/jpeg"})

        frame = await _client(handler).capture("http://camera.test/lobby")
        assert frame is not None
        assert (frame.width, frame.height) == (64, 64)
        assert seen["user_agent"] == "FaceRecognition/1.0"

    @pytest.mark.asyncio
    async def test_non_2xx_returns_none(self):
        frame = await _client(lambda request: httpx.Response(404)).capture("http://camera.test/x")
        assert frame is None

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        assert await _client(handler).capture("http://camera.test/slow") is None

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert await _client(handler).capture("http://camera.test/down") is None

    @pytest.mark.asyncio
    async def test_malformed_url_returns_none(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        assert await _client(handler).capture("http://[::1/x") is None
        assert calls == []

    @pytest.mark.asyncio
    async def test_undecodable_body_returns_none(self):
        frame = await _client(lambda request: httpx.Response(200, content=b"not an image")).capture(
            "http://camera.test/garbage"
        )
        assert frame is None


def test_decode_image_empty():
    assert decode_image(b"") is None
