from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class StartMonitoringRequest(BaseModel):
    """DTO for starting monitoring on one camera"""
    model_config = ConfigDict(populate_by_name=True)

    stream_url: Optional[str] = Field(default=None, alias="streamUrl")
    interval_ms: Optional[int] = Field(default=None, alias="intervalMs")


class RecognitionSettingsRequest(BaseModel):
    """DTO for runtime threshold changes (values are clamped to [0.3, 0.9])"""
    model_config = ConfigDict(populate_by_name=True)

    recognition_threshold: Optional[float] = Field(default=None, alias="recognitionThreshold")
    detection_confidence: Optional[float] = Field(default=None, alias="detectionConfidence")


class RecognitionSettingsResponse(BaseModel):
    """DTO for current recognition settings"""
    model_config = ConfigDict(populate_by_name=True)

    recognition_threshold: float = Field(alias="recognitionThreshold")
    detection_confidence: float = Field(alias="detectionConfidence")
    nms_threshold: float = Field(alias="nmsThreshold")
    default_interval_ms: int = Field(alias="defaultIntervalMs")
    enroll_without_embedder: bool = Field(alias="enrollWithoutEmbedder")


class ModelStatusResponse(BaseModel):
    """DTO for loaded model roles"""
    detector: Optional[str] = None
    embedder: Optional[str] = None
    capability: str


class RecognitionStatusResponse(BaseModel):
    """DTO for service status"""
    model_config = ConfigDict(populate_by_name=True)

    initialized: bool
    active_monitoring: List[str] = Field(default_factory=list, alias="activeMonitoring")
    known_faces_count: int = Field(alias="knownFacesCount")
    models: ModelStatusResponse


class KnownFaceResponse(BaseModel):
    """DTO for one known face profile (embedding is never exposed)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    department: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    embedded: bool


class AddKnownFaceResponse(BaseModel):
    """DTO for enrollment result"""
    id: str
    name: str
    embedded: bool


class MonitorResponse(BaseModel):
    """DTO for a monitor handle snapshot"""
    model_config = ConfigDict(populate_by_name=True)

    camera: str
    stream_url: str = Field(alias="streamUrl")
    interval_ms: int = Field(alias="intervalMs")
    started_at: str = Field(alias="startedAt")
    ticks: int = 0
    cycles_run: int = Field(default=0, alias="cyclesRun")
    cycles_failed: int = Field(default=0, alias="cyclesFailed")
    ticks_skipped: int = Field(default=0, alias="ticksSkipped")
    in_flight: bool = Field(default=False, alias="inFlight")
    last_error: Optional[str] = Field(default=None, alias="lastError")
    last_cycle_at: Optional[str] = Field(default=None, alias="lastCycleAt")


class DetectionLogResponse(BaseModel):
    """DTO for one day of detection logs"""
    camera: str
    date: str
    count: int
    logs: List[Dict[str, Any]] = Field(default_factory=list)


class LogCamerasResponse(BaseModel):
    """DTO for cameras that logged detections on one day"""
    date: str
    cameras: List[str] = Field(default_factory=list)


class SnapshotResponse(BaseModel):
    """DTO for one stored snapshot"""
    model_config = ConfigDict(populate_by_name=True)

    filename: str
    camera: str
    timestamp: Optional[str] = None
    name: str
    face_index: int = Field(alias="faceIndex")
