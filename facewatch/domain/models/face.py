# Standard library imports
from dataclasses import dataclass
from typing import Any, Dict, Optional

# External package imports
import numpy as np

# Local application imports
from ..constants import UNKNOWN_IDENTITY


@dataclass
class Frame:
    """
    One decoded still frame (BGR, HxWxC uint8) for a single monitoring cycle.

    Never persisted; only snapshots derived from it are written to disk.
    """
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels is None or self.pixels.ndim not in (2, 3) or self.pixels.size == 0:
            raise ValueError("Frame pixels must be a non-empty 2D or 3D array")

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])


@dataclass
class FaceBox:
    """Face bounding box in source-frame pixel coordinates."""
    x: float
    y: float
    width: float
    height: float
    confidence: float

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "width": float(self.width),
            "height": float(self.height),
            "confidence": float(self.confidence),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FaceBox":
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
            confidence=float(data.get("confidence", 0.0)),
        )


@dataclass(frozen=True)
class Identity:
    """Result of matching one embedding against the gallery."""
    name: str
    confidence: float
    user_id: Optional[str] = None

    @classmethod
    def unknown(cls) -> "Identity":
        return cls(name=UNKNOWN_IDENTITY, confidence=0.0)

    @property
    def is_known(self) -> bool:
        return self.name != UNKNOWN_IDENTITY
