from .json_gallery_repository import JsonGalleryRepository, migrate_record
from .json_detection_log_repository import JsonDetectionLogRepository, safe_camera_name
from .snapshot_writer import SnapshotWriter, build_snapshot_filename, parse_snapshot_filename

__all__ = [
    "JsonGalleryRepository",
    "migrate_record",
    "JsonDetectionLogRepository",
    "safe_camera_name",
    "SnapshotWriter",
    "build_snapshot_filename",
    "parse_snapshot_filename",
]
