from .config import Settings, get_settings, reset_settings
from .exceptions import (
    FaceWatchError,
    NotFoundError,
    InvalidInputError,
    CapabilityUnavailableError,
    TransientIOError,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "FaceWatchError",
    "NotFoundError",
    "InvalidInputError",
    "CapabilityUnavailableError",
    "TransientIOError",
]
