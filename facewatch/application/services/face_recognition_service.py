"""
Face recognition service: the single entry point used by the API layer.

Owns the detector/embedder/matcher pipeline, the known-face gallery, the
detection log, snapshots and the per-camera monitor scheduler. One
instance lives in the DI container for the whole process; `initialize()`
(re)loads models and the gallery, `shutdown()` stops every monitor.
"""

# Standard library imports
import asyncio
import dataclasses
import logging
import re
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

# External package imports
import httpx

# Local application imports
from ...core.exceptions import CapabilityUnavailableError, InvalidInputError, NotFoundError
from ...domain.constants import DEFAULT_MONITOR_INTERVAL_MS, UNKNOWN_IDENTITY, GalleryFields
from ...domain.models.detection_log_entry import DetectionLogEntry
from ...domain.models.face import Frame
from ...domain.models.gallery_entry import GalleryEntry
from ...domain.repositories.detection_log_repository import DetectionLogRepository
from ...domain.repositories.gallery_repository import GalleryRepository
from ...infrastructure.external.frame_client import FrameClient, decode_image
from ...infrastructure.storage.snapshot_writer import SnapshotWriter
from ...processing.face.detector import FaceDetector
from ...processing.face.embedder import FaceEmbedder
from ...processing.face.matcher import FaceMatcher
from ...processing.models.model_loader import ModelLoader, ModelStatus
from ...utils.datetime_utils import now_iso, today_key
from .monitor_scheduler import MonitorScheduler

logger = logging.getLogger(__name__)

# Camera names end up as the first "_"-separated field of snapshot filenames
_CAMERA_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")


def validate_camera_name(camera: str) -> str:
    camera = (camera or "").strip()
    if not _CAMERA_NAME.match(camera):
        raise InvalidInputError(
            f"Invalid camera name: {camera!r}",
            user_message="Camera name may contain only letters, digits and '-'.",
        )
    return camera


def validate_stream_url(stream_url: str) -> str:
    """Frame endpoints must be absolute http(s) URLs."""
    try:
        url = httpx.URL(stream_url)
    except httpx.InvalidURL as e:
        raise InvalidInputError(
            f"Invalid stream URL {stream_url!r}: {e}",
            user_message="Stream URL is not a valid URL.",
        ) from e
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidInputError(
            f"Unsupported stream URL: {stream_url!r}",
            user_message="Stream URL must be an http:// or https:// address.",
        )
    return stream_url


class FaceRecognitionService:
    """Facade over the recognition pipeline, gallery, logs and monitoring."""

    def __init__(
        self,
        model_loader: ModelLoader,
        gallery_repository: GalleryRepository,
        log_repository: DetectionLogRepository,
        snapshot_writer: SnapshotWriter,
        frame_client: FrameClient,
        detector: FaceDetector,
        embedder: FaceEmbedder,
        matcher: FaceMatcher,
        snapshot_base_url: str = "http://localhost:8889",
        default_interval_ms: int = DEFAULT_MONITOR_INTERVAL_MS,
        cycle_timeout_seconds: Optional[float] = None,
        enroll_without_embedder: bool = False,
        image_max_bytes: int = 8 * 1024 * 1024,
    ) -> None:
        self.model_loader = model_loader
        self.gallery_repository = gallery_repository
        self.log_repository = log_repository
        self.snapshot_writer = snapshot_writer
        self.frame_client = frame_client
        self.detector = detector
        self.embedder = embedder
        self.matcher = matcher
        self.snapshot_base_url = snapshot_base_url.rstrip("/")
        self.default_interval_ms = default_interval_ms
        self.enroll_without_embedder = enroll_without_embedder
        self.image_max_bytes = image_max_bytes
        self.scheduler = MonitorScheduler(self.run_cycle, cycle_timeout_seconds)
        self._initialized = False
        self._model_status = ModelStatus(detector=None, embedder=None)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    async def initialize(self) -> Dict[str, Any]:
        """(Re)load models and the gallery. Missing models reduce capability only."""
        await asyncio.to_thread(self._load)
        return self.get_status()

    def _load(self) -> None:
        status = self.model_loader.initialize()
        self.detector.session = self.model_loader.detector.session if self.model_loader.detector else None
        self.embedder.session = self.model_loader.embedder.session if self.model_loader.embedder else None
        known = self.gallery_repository.load()
        self._model_status = status
        self._initialized = True

        if status.capability != "full":
            logger.warning("Face recognition running with reduced capability: %s", status.capability)
        logger.info(
            "Face recognition initialized (detector=%s, embedder=%s, known faces=%d)",
            status.detector,
            status.embedder,
            known,
        )

    async def shutdown(self) -> None:
        await self.scheduler.shutdown()
        logger.info("Face recognition service shut down")

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------
    def default_stream_url(self, camera: str) -> str:
        return f"{self.snapshot_base_url}/{camera}"

    def start_monitoring(
        self,
        camera: str,
        stream_url: Optional[str] = None,
        interval_ms: Optional[int] = None,
    ) -> Dict[str, Any]:
        camera = validate_camera_name(camera)
        url = validate_stream_url(stream_url or self.default_stream_url(camera))
        interval = interval_ms if interval_ms is not None else self.default_interval_ms
        if not self.detector.available:
            logger.warning("Monitoring %s without a face detector: no faces will be found", camera)
        handle = self.scheduler.start(camera, url, interval)
        return handle.to_dict()

    def stop_monitoring(self, camera: str) -> Dict[str, Any]:
        return self.scheduler.stop(camera).to_dict()

    def get_monitor_stats(self, camera: str) -> Dict[str, Any]:
        return self.scheduler.stats(camera)

    async def run_cycle(self, camera: str, stream_url: str) -> int:
        """One monitoring cycle: capture, then recognize in a worker thread."""
        frame = await self.frame_client.capture(stream_url)
        if frame is None:
            return 0
        return await asyncio.to_thread(self.process_frame, camera, frame)

    def process_frame(self, camera: str, frame: Frame) -> int:
        """
        Detect, embed, match, log every face and snapshot the recognized ones.

        Returns the number of faces detected.
        """
        faces = self.detector.detect(frame)
        if not faces:
            return 0

        entries = self.gallery_repository.embedded_entries()
        for index, box in enumerate(faces):
            embedding = None
            if self.embedder.available:
                region = self.embedder.crop(frame, box)
                if region is not None:
                    embedding = self.embedder.embed(region)
            identity = self.matcher.recognize(embedding, entries)

            self.log_repository.append(
                DetectionLogEntry(
                    timestamp=now_iso(),
                    camera=camera,
                    identity=identity.name,
                    confidence=identity.confidence,
                    bounding_box=box,
                    user_id=identity.user_id,
                )
            )
            if identity.is_known:
                self.snapshot_writer.save(camera, frame, box, identity, index)

        logger.debug("Processed %d face(s) for %s", len(faces), camera)
        return len(faces)

    # -------------------------------------------------------------------------
    # Gallery
    # -------------------------------------------------------------------------
    def _decode_upload(self, image_bytes: Optional[bytes]) -> Frame:
        if not image_bytes:
            raise InvalidInputError("Image is required", user_message="An image file is required.")
        if len(image_bytes) > self.image_max_bytes:
            raise InvalidInputError(
                f"Image is larger than {self.image_max_bytes} bytes",
                user_message="Image file is too large.",
            )
        frame = decode_image(image_bytes)
        if frame is None:
            raise InvalidInputError(
                "Image could not be decoded", user_message="File is not a supported image."
            )
        return frame

    def _embed_enrollment_image(self, frame: Frame) -> Optional[List[float]]:
        """Embedding of the largest detected face, or of the whole image when no face is found."""
        region = frame.pixels
        faces = self.detector.detect(frame) if self.detector.available else []
        if faces:
            largest = max(faces, key=lambda box: box.area)
            cropped = self.embedder.crop(frame, largest)
            if cropped is not None:
                region = cropped
        else:
            logger.info("No face detected in enrollment image; embedding the whole image")

        embedding = self.embedder.embed(region)
        if embedding is None:
            raise InvalidInputError(
                "Face embedding could not be computed",
                user_message="Could not compute a face embedding from this image.",
            )
        return embedding

    def _embedder_unavailable(self) -> CapabilityUnavailableError:
        return CapabilityUnavailableError(
            "Face embedder model is not loaded",
            capability="embedder",
            user_message="Face recognition model is not available.",
        )

    def _enroll(self, entry_id: Optional[str], profile: Dict[str, Any], image_bytes: bytes) -> GalleryEntry:
        name = (profile.get(GalleryFields.NAME) or "").strip()
        if not name:
            raise InvalidInputError("Name is required", user_message="Name is required.")
        if name.lower() == UNKNOWN_IDENTITY.lower():
            raise InvalidInputError(
                f"Reserved name: {name}",
                user_message=f"\"{UNKNOWN_IDENTITY}\" cannot be used as a name.",
            )
        frame = self._decode_upload(image_bytes)

        if self.embedder.available:
            embedding = self._embed_enrollment_image(frame)
        elif self.enroll_without_embedder:
            logger.warning("Enrolling %s without an embedding: embedder model not loaded", name)
            embedding = None
        else:
            raise self._embedder_unavailable()

        timestamp = now_iso()
        try:
            entry = GalleryEntry(
                id=entry_id or uuid.uuid4().hex,
                name=name,
                department=profile.get(GalleryFields.DEPARTMENT) or "",
                position=profile.get(GalleryFields.POSITION) or "",
                email=profile.get(GalleryFields.EMAIL) or "",
                phone=profile.get(GalleryFields.PHONE) or "",
                embedding=embedding,
                created_at=timestamp,
                updated_at=timestamp,
            )
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

        self.gallery_repository.add(entry)
        logger.info(f"Known face added: {entry.name} ({entry.id})")
        return entry

    async def add_known_face(
        self,
        profile: Dict[str, Any],
        image_bytes: bytes,
        entry_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        entry = await asyncio.to_thread(self._enroll, entry_id, profile, image_bytes)
        return {"id": entry.id, "name": entry.name, "embedded": entry.has_embedding}

    def _update(
        self, entry_id: str, changes: Dict[str, Any], image_bytes: Optional[bytes]
    ) -> GalleryEntry:
        current = self.gallery_repository.get(entry_id)
        if current is None:
            raise NotFoundError(f"Face not found: {entry_id}")

        updates = {
            field: value
            for field, value in changes.items()
            if field in GalleryFields.PROFILE_FIELDS and value is not None
        }
        embedding = None
        if image_bytes is not None:
            frame = self._decode_upload(image_bytes)
            if not self.embedder.available:
                raise self._embedder_unavailable()
            embedding = self._embed_enrollment_image(frame)
        updates["updated_at"] = now_iso()

        try:
            updated = dataclasses.replace(current, **updates)
            if embedding is not None:
                updated = updated.replace_embedding(embedding)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

        self.gallery_repository.update(updated)
        logger.info(f"Known face updated: {updated.name} ({updated.id})")
        return updated

    async def update_known_face(
        self,
        entry_id: str,
        changes: Dict[str, Any],
        image_bytes: Optional[bytes] = None,
    ) -> Dict[str, Any]:
        entry = await asyncio.to_thread(self._update, entry_id, changes, image_bytes)
        return entry.to_profile()

    def remove_known_face(self, entry_id: str) -> None:
        if not self.gallery_repository.remove(entry_id):
            raise NotFoundError(f"Face not found: {entry_id}")
        logger.info(f"Known face removed: {entry_id}")

    def list_known_faces(self) -> List[Dict[str, Any]]:
        return [entry.to_profile() for entry in self.gallery_repository.list()]

    def get_known_face(self, entry_id: str) -> Optional[Dict[str, Any]]:
        entry = self.gallery_repository.get(entry_id)
        return entry.to_profile() if entry else None

    # -------------------------------------------------------------------------
    # Logs and snapshots
    # -------------------------------------------------------------------------
    def get_logs(self, camera: str, date: Optional[str] = None) -> List[Dict[str, Any]]:
        entries = self.log_repository.get_logs(camera, date or today_key())
        return [entry.to_record() for entry in entries]

    def list_log_cameras(self, date: Optional[str] = None) -> List[str]:
        return self.log_repository.list_cameras(date or today_key())

    def list_snapshots(self) -> List[Dict[str, Any]]:
        return [info.to_dict() for info in self.snapshot_writer.list_snapshots()]

    def snapshot_path(self, filename: str) -> Path:
        return self.snapshot_writer.snapshot_path(filename)

    # -------------------------------------------------------------------------
    # Settings and status
    # -------------------------------------------------------------------------
    def set_recognition_threshold(self, value: float) -> float:
        self.matcher.threshold = value
        logger.info("Recognition threshold set to %.2f", self.matcher.threshold)
        return self.matcher.threshold

    def set_detection_confidence(self, value: float) -> float:
        self.detector.confidence_threshold = value
        logger.info("Detection confidence set to %.2f", self.detector.confidence_threshold)
        return self.detector.confidence_threshold

    def get_settings(self) -> Dict[str, Any]:
        return {
            "recognitionThreshold": self.matcher.threshold,
            "detectionConfidence": self.detector.confidence_threshold,
            "nmsThreshold": self.detector.nms_threshold,
            "defaultIntervalMs": self.default_interval_ms,
            "enrollWithoutEmbedder": self.enroll_without_embedder,
        }

    def get_status(self) -> Dict[str, Any]:
        return {
            "initialized": self._initialized,
            "activeMonitoring": self.scheduler.active_cameras(),
            "knownFacesCount": self.gallery_repository.count(),
            "models": self._model_status.to_dict(),
        }
