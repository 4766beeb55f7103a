# Standard library imports
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SnapshotInfo:
    """Metadata recovered from a snapshot filename ({camera}_{timestamp}_{name}_{index}.jpg)."""
    filename: str
    camera: str
    timestamp: Optional[str]
    name: str
    face_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "camera": self.camera,
            "timestamp": self.timestamp,
            "name": self.name,
            "faceIndex": self.face_index,
        }
