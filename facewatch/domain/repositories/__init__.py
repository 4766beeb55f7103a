from .gallery_repository import GalleryRepository
from .detection_log_repository import DetectionLogRepository

__all__ = ["GalleryRepository", "DetectionLogRepository"]
