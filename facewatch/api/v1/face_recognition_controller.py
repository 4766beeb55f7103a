# Standard library imports
import logging
from typing import Any, Dict, List, Optional

# External package imports
from fastapi import APIRouter, Body, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

# Local application imports
from ...application.dto.face_dto import (
    AddKnownFaceResponse,
    DetectionLogResponse,
    KnownFaceResponse,
    LogCamerasResponse,
    MonitorResponse,
    RecognitionSettingsRequest,
    RecognitionSettingsResponse,
    RecognitionStatusResponse,
    SnapshotResponse,
    StartMonitoringRequest,
)
from ...application.services.face_recognition_service import FaceRecognitionService
from ...core.exceptions import FaceWatchError
from ...di.container import get_container
from ...domain.constants import ALLOWED_IMAGE_MIME
from .errors import to_http_exception

logger = logging.getLogger(__name__)
router = APIRouter(tags=["face-recognition"])


def _service() -> FaceRecognitionService:
    return get_container().get(FaceRecognitionService)


async def _read_image(image: Optional[UploadFile]) -> Optional[bytes]:
    if image is None:
        return None
    content_type = (image.content_type or "").strip().lower()
    if content_type and content_type != "application/octet-stream" and content_type not in ALLOWED_IMAGE_MIME:
        detail = f"Allowed image types: {', '.join(sorted(ALLOWED_IMAGE_MIME))}"
        logger.warning("face upload 400: %s", detail)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return await image.read()


# -----------------------------------------------------------------------------
# Lifecycle / status
# -----------------------------------------------------------------------------
@router.post("/initialize", response_model=RecognitionStatusResponse)
async def initialize() -> Dict[str, Any]:
    """(Re)load face models and the known-face gallery."""
    return await _service().initialize()


@router.get("/status", response_model=RecognitionStatusResponse)
async def get_status() -> Dict[str, Any]:
    return _service().get_status()


# -----------------------------------------------------------------------------
# Known faces
# -----------------------------------------------------------------------------
@router.get("/faces", response_model=List[KnownFaceResponse])
async def list_known_faces() -> List[Dict[str, Any]]:
    return _service().list_known_faces()


@router.post("/faces", response_model=AddKnownFaceResponse, status_code=status.HTTP_201_CREATED)
async def add_known_face(
    name: str = Form(..., min_length=1, max_length=200),
    image: UploadFile = File(...),
    department: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
) -> Dict[str, Any]:
    """
    Enroll a known face from one photo.

    The largest detected face is embedded; when no face is detected the
    whole image is used.
    """
    image_bytes = await _read_image(image)
    profile = {
        "name": name,
        "department": department,
        "position": position,
        "email": email,
        "phone": phone,
    }
    try:
        return await _service().add_known_face(profile, image_bytes)
    except FaceWatchError as exception:
        raise to_http_exception(exception)


@router.get("/faces/{face_id}", response_model=KnownFaceResponse)
async def get_known_face(face_id: str) -> Dict[str, Any]:
    face = _service().get_known_face(face_id)
    if face is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Face not found")
    return face


@router.put("/faces/{face_id}", response_model=KnownFaceResponse)
async def update_known_face(
    face_id: str,
    name: Optional[str] = Form(None),
    department: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
) -> Dict[str, Any]:
    """Update profile fields; a new image replaces the embedding."""
    image_bytes = await _read_image(image)
    changes = {
        "name": name,
        "department": department,
        "position": position,
        "email": email,
        "phone": phone,
    }
    try:
        return await _service().update_known_face(face_id, changes, image_bytes)
    except FaceWatchError as exception:
        raise to_http_exception(exception)


@router.delete("/faces/{face_id}")
async def remove_known_face(face_id: str) -> Dict[str, Any]:
    try:
        _service().remove_known_face(face_id)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {"success": True, "id": face_id}


# -----------------------------------------------------------------------------
# Monitoring
# -----------------------------------------------------------------------------
@router.post("/start/{camera}", response_model=MonitorResponse)
async def start_monitoring(
    camera: str,
    request: Optional[StartMonitoringRequest] = Body(default=None),
) -> Dict[str, Any]:
    """
    Start periodic recognition on a camera.

    Without a streamUrl the camera's media server snapshot endpoint is polled.
    """
    request = request or StartMonitoringRequest()
    try:
        return _service().start_monitoring(
            camera,
            stream_url=request.stream_url,
            interval_ms=request.interval_ms,
        )
    except FaceWatchError as exception:
        raise to_http_exception(exception)


@router.post("/stop/{camera}", response_model=MonitorResponse)
async def stop_monitoring(camera: str) -> Dict[str, Any]:
    try:
        return _service().stop_monitoring(camera)
    except FaceWatchError as exception:
        raise to_http_exception(exception)


@router.get("/monitors/{camera}", response_model=MonitorResponse)
async def get_monitor_stats(camera: str) -> Dict[str, Any]:
    try:
        return _service().get_monitor_stats(camera)
    except FaceWatchError as exception:
        raise to_http_exception(exception)


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@router.get("/settings", response_model=RecognitionSettingsResponse)
async def get_recognition_settings() -> Dict[str, Any]:
    return _service().get_settings()


@router.post("/settings", response_model=RecognitionSettingsResponse)
async def update_recognition_settings(request: RecognitionSettingsRequest) -> Dict[str, Any]:
    """Adjust thresholds at runtime. Values are clamped to [0.3, 0.9]."""
    service = _service()
    if request.recognition_threshold is not None:
        service.set_recognition_threshold(request.recognition_threshold)
    if request.detection_confidence is not None:
        service.set_detection_confidence(request.detection_confidence)
    return service.get_settings()


# -----------------------------------------------------------------------------
# Logs and snapshots
# -----------------------------------------------------------------------------
@router.get("/logs/{date}", response_model=LogCamerasResponse)
async def list_log_cameras(date: str) -> Dict[str, Any]:
    """Cameras that logged at least one detection on a YYYY-MM-DD UTC day."""
    try:
        cameras = _service().list_log_cameras(date)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {"date": date, "cameras": cameras}


@router.get("/logs/{camera}/{date}", response_model=DetectionLogResponse)
async def get_logs(camera: str, date: str) -> Dict[str, Any]:
    """Detections of one camera (or "all") on a YYYY-MM-DD UTC day, newest first for "all"."""
    try:
        logs = _service().get_logs(camera, date)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {"camera": camera, "date": date, "count": len(logs), "logs": logs}


@router.get("/snapshots", response_model=List[SnapshotResponse])
async def list_snapshots() -> List[Dict[str, Any]]:
    return _service().list_snapshots()


@router.get("/snapshots/{filename}")
async def get_snapshot(filename: str) -> FileResponse:
    try:
        path = _service().snapshot_path(filename)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return FileResponse(str(path), media_type="image/jpeg")
