"""Constants for domain model field names and recognition parameters"""

from .gallery_fields import GalleryFields
from .detection_log_fields import DetectionLogFields
from .recognition_constants import (
    UNKNOWN_IDENTITY,
    ALL_CAMERAS,
    MIN_THRESHOLD,
    MAX_THRESHOLD,
    DEFAULT_RECOGNITION_THRESHOLD,
    DEFAULT_DETECTION_CONFIDENCE,
    DEFAULT_NMS_THRESHOLD,
    DETECTOR_INPUT_SIZE,
    EMBEDDER_INPUT_SIZE,
    MIN_MONITOR_INTERVAL_MS,
    DEFAULT_MONITOR_INTERVAL_MS,
    SNAPSHOT_EXTENSION,
    ALLOWED_IMAGE_MIME,
    clamp_threshold,
)

__all__ = [
    "GalleryFields",
    "DetectionLogFields",
    "UNKNOWN_IDENTITY",
    "ALL_CAMERAS",
    "MIN_THRESHOLD",
    "MAX_THRESHOLD",
    "DEFAULT_RECOGNITION_THRESHOLD",
    "DEFAULT_DETECTION_CONFIDENCE",
    "DEFAULT_NMS_THRESHOLD",
    "DETECTOR_INPUT_SIZE",
    "EMBEDDER_INPUT_SIZE",
    "MIN_MONITOR_INTERVAL_MS",
    "DEFAULT_MONITOR_INTERVAL_MS",
    "SNAPSHOT_EXTENSION",
    "ALLOWED_IMAGE_MIME",
    "clamp_threshold",
]
