"""
Pooled httpx client for camera frame polling.

Every monitored camera is polled once per interval, so a single
AsyncClient with keep-alive connections is shared by all FrameClients.
The connect timeout is kept short so an unreachable camera fails fast
inside its own frame timeout.
"""
import logging
from typing import Optional

import httpx

from ..core.config import get_settings

logger = logging.getLogger(__name__)

FRAME_USER_AGENT = "FaceRecognition/1.0"
CONNECT_TIMEOUT_SECONDS = 2.0
MAX_CAMERA_CONNECTIONS = 50

_shared_client: Optional[httpx.AsyncClient] = None


def build_camera_http_client(
    frame_timeout: float,
    max_connections: int = MAX_CAMERA_CONNECTIONS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """AsyncClient tuned for short still-frame requests to many cameras."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(frame_timeout, connect=min(CONNECT_TIMEOUT_SECONDS, frame_timeout)),
        limits=httpx.Limits(
            max_keepalive_connections=max_connections,
            max_connections=max_connections,
            keepalive_expiry=30.0,
        ),
        headers={"User-Agent": FRAME_USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


def get_shared_http_client() -> httpx.AsyncClient:
    """Return the process-wide camera client, creating it from settings on first use."""
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        timeout = get_settings().frame_timeout_seconds
        _shared_client = build_camera_http_client(timeout)
        logger.info("Created shared camera HTTP client (frame timeout %.1fs)", timeout)

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared camera client (application shutdown)."""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("Closed shared camera HTTP client")
