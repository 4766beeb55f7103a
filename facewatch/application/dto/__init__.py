from .face_dto import (
    AddKnownFaceResponse,
    DetectionLogResponse,
    KnownFaceResponse,
    LogCamerasResponse,
    ModelStatusResponse,
    MonitorResponse,
    RecognitionSettingsRequest,
    RecognitionSettingsResponse,
    RecognitionStatusResponse,
    SnapshotResponse,
    StartMonitoringRequest,
)
from .camera_dto import CameraPathListResponse, CameraPathResponse, RtspCameraCreateRequest

__all__ = [
    "AddKnownFaceResponse",
    "DetectionLogResponse",
    "KnownFaceResponse",
    "LogCamerasResponse",
    "ModelStatusResponse",
    "MonitorResponse",
    "RecognitionSettingsRequest",
    "RecognitionSettingsResponse",
    "RecognitionStatusResponse",
    "SnapshotResponse",
    "StartMonitoringRequest",
    "CameraPathListResponse",
    "CameraPathResponse",
    "RtspCameraCreateRequest",
]
