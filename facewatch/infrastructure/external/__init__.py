"""External service clients for communicating with external systems"""

from .frame_client import FrameClient, decode_image

__all__ = [
    "FrameClient",
    "decode_image",
]
