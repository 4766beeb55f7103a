from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.gallery_repository import GalleryRepository
from ...domain.repositories.detection_log_repository import DetectionLogRepository
from ...infrastructure.storage.json_gallery_repository import JsonGalleryRepository
from ...infrastructure.storage.json_detection_log_repository import JsonDetectionLogRepository
from ...infrastructure.storage.snapshot_writer import SnapshotWriter

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class StorageProvider:
    """Storage registration provider - wires domain interfaces to file-backed implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register gallery, detection log and snapshot storage.
        All of them are singletons: each owns the locks for its files.
        """
        settings = container.get(Settings)

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(
            GalleryRepository,
            JsonGalleryRepository(gallery_path=settings.gallery_path)
        )

        container.register_singleton(
            DetectionLogRepository,
            JsonDetectionLogRepository(logs_dir=settings.logs_dir)
        )

        container.register_singleton(
            SnapshotWriter,
            SnapshotWriter(snapshots_dir=settings.snapshots_dir)
        )
