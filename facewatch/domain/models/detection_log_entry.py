# Standard library imports
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Local application imports
from ..constants import DetectionLogFields
from .face import FaceBox


@dataclass
class DetectionLogEntry:
    """
    One persisted face detection. Append-only: never mutated after it is logged.
    """
    timestamp: str
    camera: str
    identity: str
    confidence: float
    bounding_box: FaceBox
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.camera or not self.camera.strip():
            raise ValueError("Camera name is required")
        if not self.timestamp:
            raise ValueError("Timestamp is required")

    def to_record(self) -> Dict[str, Any]:
        record = {
            DetectionLogFields.TIMESTAMP: self.timestamp,
            DetectionLogFields.CAMERA: self.camera,
            DetectionLogFields.IDENTITY: self.identity,
            DetectionLogFields.CONFIDENCE: float(self.confidence),
            DetectionLogFields.BOUNDING_BOX: self.bounding_box.to_dict(),
        }
        if self.user_id:
            record[DetectionLogFields.USER_ID] = self.user_id
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "DetectionLogEntry":
        return cls(
            timestamp=str(record[DetectionLogFields.TIMESTAMP]),
            camera=str(record[DetectionLogFields.CAMERA]),
            identity=str(record.get(DetectionLogFields.IDENTITY, "")),
            confidence=float(record.get(DetectionLogFields.CONFIDENCE, 0.0)),
            bounding_box=FaceBox.from_dict(record.get(DetectionLogFields.BOUNDING_BOX) or {}),
            user_id=record.get(DetectionLogFields.USER_ID),
        )
