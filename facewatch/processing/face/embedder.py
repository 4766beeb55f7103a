"""
Face Embedder
-------------

Turns a cropped face region into a fixed-length embedding with the
loaded recognition model (ArcFace style ONNX graph).

Model contract: input NCHW float32 RGB in [-1, 1] at 112x112; the first
output (or the one named "embedding") is the embedding vector.
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from facewatch.domain.constants import EMBEDDER_INPUT_SIZE
from facewatch.domain.models.face import FaceBox, Frame
from facewatch.processing.face.detector import to_rgb
from facewatch.processing.models.contracts import InferenceSession

logger = logging.getLogger(__name__)

EMBEDDING_OUTPUT_NAMES = ("embedding", "fc1", "output")


def prepare_embedder_input(region: np.ndarray, size: int = EMBEDDER_INPUT_SIZE) -> np.ndarray:
    """Resize to size x size, RGB, scale to [-1, 1], NCHW float32 with batch 1."""
    resized = cv2.resize(region, (size, size), interpolation=cv2.INTER_LINEAR)
    rgb = to_rgb(resized).astype(np.float32)
    normalized = rgb / 127.5 - 1.0
    return np.transpose(normalized, (2, 0, 1))[np.newaxis, ...]


def crop_face(frame: Frame, box: FaceBox) -> Optional[np.ndarray]:
    """
    Crop box out of frame, clipped to the frame bounds.

    Returns None if the clipped region is empty.
    """
    x1 = max(0, int(np.floor(box.x)))
    y1 = max(0, int(np.floor(box.y)))
    x2 = min(frame.width, int(np.ceil(box.x + box.width)))
    y2 = min(frame.height, int(np.ceil(box.y + box.height)))
    if x2 <= x1 or y2 <= y1:
        return None
    return frame.pixels[y1:y2, x1:x2]


class FaceEmbedder:
    """Embedder adapter. With no session loaded embed() returns None."""

    def __init__(
        self,
        session: Optional[InferenceSession] = None,
        input_size: int = EMBEDDER_INPUT_SIZE,
    ) -> None:
        self.session = session
        self.input_size = input_size

    @property
    def available(self) -> bool:
        return self.session is not None

    def embed(self, region: np.ndarray) -> Optional[List[float]]:
        """Compute the embedding of a face region (whole enrollment image or crop)."""
        if self.session is None or region is None or region.size == 0:
            return None

        try:
            tensor = prepare_embedder_input(region, self.input_size)
            input_name = self.session.get_inputs()[0].name
            output_names = [o.name for o in self.session.get_outputs()]
            outputs = self.session.run(None, {input_name: tensor})
        except Exception as e:
            logger.error(f"Error computing face embedding: {e}", exc_info=True)
            return None

        if not outputs:
            return None
        by_name = dict(zip(output_names, outputs))
        vector = next((by_name[n] for n in EMBEDDING_OUTPUT_NAMES if n in by_name), outputs[0])
        flat = np.asarray(vector, dtype=np.float32).reshape(-1)
        if flat.size == 0:
            return None
        return [float(v) for v in flat]

    def crop(self, frame: Frame, box: FaceBox) -> Optional[np.ndarray]:
        return crop_face(frame, box)
