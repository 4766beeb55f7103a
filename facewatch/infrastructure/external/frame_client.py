# Standard library imports
import logging
from typing import Optional

# External package imports
import cv2
import httpx
import numpy as np

# Local application imports
from ...core.config import get_settings
from ...domain.models.face import Frame
from ..http_client_factory import FRAME_USER_AGENT, get_shared_http_client

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> Optional[Frame]:
    """
    Decode encoded image bytes (JPEG/PNG/...) into a BGR Frame.

    Returns None for empty or undecodable payloads.
    """
    if not data:
        return None
    buffer = np.frombuffer(data, dtype=np.uint8)
    pixels = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if pixels is None or pixels.size == 0:
        return None
    return Frame(pixels=pixels)


class FrameClient:
    """
    HTTP client that grabs a single still frame from a camera endpoint.

    Every failure (non-2xx status, timeout, transport error, malformed URL,
    undecodable body) is logged and reported as None; the monitor's next tick is the
    retry.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize frame client.

        Args:
            timeout: Request timeout in seconds. If None, reads FRAME_TIMEOUT_SECONDS.
            client: AsyncClient to use. If None, the shared pooled client is used.
        """
        self.timeout = timeout if timeout is not None else get_settings().frame_timeout_seconds
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_shared_http_client()

    async def capture(self, stream_url: str) -> Optional[Frame]:
        """
        Fetch and decode one frame.

        Args:
            stream_url: HTTP(S) URL that returns one encoded image

        Returns:
            Frame, or None if no frame could be obtained
        """
        try:
            response = await self.client.get(
                stream_url,
                headers={"User-Agent": FRAME_USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            logger.warning(f"Timeout while capturing frame from {stream_url}")
            return None
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"HTTP error capturing frame from {stream_url}: {e.response.status_code}"
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Error capturing frame from {stream_url}: {e}")
            return None
        except httpx.InvalidURL as e:
            logger.warning(f"Invalid frame URL {stream_url!r}: {e}")
            return None

        frame = decode_image(response.content)
        if frame is None:
            logger.warning(f"Could not decode frame from {stream_url}")
            return None
        return frame
