from typing import TYPE_CHECKING
from ...core.config import Settings
from ...domain.repositories.gallery_repository import GalleryRepository
from ...domain.repositories.detection_log_repository import DetectionLogRepository
from ...application.services.face_recognition_service import FaceRecognitionService
from ...infrastructure.external.frame_client import FrameClient
from ...infrastructure.storage.snapshot_writer import SnapshotWriter
from ...processing.face import FaceDetector, FaceEmbedder, FaceMatcher
from ...processing.models.model_loader import ModelLoader

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RecognitionProvider:
    """Recognition provider - registers the model loader and the recognition service"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the face recognition pipeline.
        The service is a singleton: it owns the monitor scheduler and loaded models.
        """
        settings = container.get(Settings)

        # Check if already registered to avoid creating multiple instances
        try:
            container.get(FrameClient)
        except ValueError:
            container.register_singleton(
                FrameClient,
                FrameClient(timeout=settings.frame_timeout_seconds)
            )

        model_loader = ModelLoader(
            models_dir=settings.models_dir,
            detector_candidates=settings.detector_model_candidates,
            embedder_candidates=settings.embedder_model_candidates,
        )
        container.register_singleton(ModelLoader, model_loader)

        container.register_singleton(
            FaceRecognitionService,
            FaceRecognitionService(
                model_loader=model_loader,
                gallery_repository=container.get(GalleryRepository),
                log_repository=container.get(DetectionLogRepository),
                snapshot_writer=container.get(SnapshotWriter),
                frame_client=container.get(FrameClient),
                detector=FaceDetector(
                    confidence_threshold=settings.detection_confidence,
                    nms_threshold=settings.nms_threshold,
                ),
                embedder=FaceEmbedder(),
                matcher=FaceMatcher(threshold=settings.recognition_threshold),
                snapshot_base_url=settings.media_server_snapshot_base,
                default_interval_ms=settings.default_monitor_interval_ms,
                cycle_timeout_seconds=settings.cycle_timeout_seconds,
                enroll_without_embedder=settings.enroll_without_embedder,
                image_max_bytes=settings.image_max_mb * 1024 * 1024,
            )
        )
