from .face_recognition_service import FaceRecognitionService
from .monitor_scheduler import MonitorHandle, MonitorScheduler

__all__ = [
    "FaceRecognitionService",
    "MonitorHandle",
    "MonitorScheduler",
]
