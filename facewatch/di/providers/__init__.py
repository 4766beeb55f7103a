from .storage_provider import StorageProvider
from .recognition_provider import RecognitionProvider
from .camera_config_provider import CameraConfigProvider


__all__ = [
    "StorageProvider",
    "RecognitionProvider",
    "CameraConfigProvider",
]
