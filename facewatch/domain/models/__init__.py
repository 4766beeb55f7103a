from .gallery_entry import GalleryEntry, CURRENT_SCHEMA_VERSION
from .face import Frame, FaceBox, Identity
from .detection_log_entry import DetectionLogEntry
from .snapshot import SnapshotInfo

__all__ = [
    "GalleryEntry",
    "CURRENT_SCHEMA_VERSION",
    "Frame",
    "FaceBox",
    "Identity",
    "DetectionLogEntry",
    "SnapshotInfo",
]
