"""
Face Detector
-------------

Runs the loaded detection model (SCRFD / RetinaFace style ONNX graph) on
one frame and returns face boxes in source-frame pixel coordinates.

Model contract: input NCHW float32 RGB in [0, 1] at 640x640; outputs a
box tensor (x1, y1, x2, y2 in model pixels) and a score tensor, named
"boxes"/"scores" or, failing that, the first two outputs.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from facewatch.domain.constants import (
    DEFAULT_DETECTION_CONFIDENCE,
    DEFAULT_NMS_THRESHOLD,
    DETECTOR_INPUT_SIZE,
    clamp_threshold,
)
from facewatch.domain.models.face import FaceBox, Frame
from facewatch.processing.models.contracts import InferenceSession

logger = logging.getLogger(__name__)

BOX_OUTPUT_NAMES = ("boxes", "output0")
SCORE_OUTPUT_NAMES = ("scores", "output1")


def to_rgb(pixels: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or grayscale image to RGB."""
    if pixels.ndim == 2:
        return cv2.cvtColor(pixels, cv2.COLOR_GRAY2RGB)
    if pixels.shape[2] == 4:
        return cv2.cvtColor(pixels, cv2.COLOR_BGRA2RGB)
    return cv2.cvtColor(pixels, cv2.COLOR_BGR2RGB)


def prepare_detector_input(pixels: np.ndarray, size: int = DETECTOR_INPUT_SIZE) -> np.ndarray:
    """Resize to size x size, RGB, scale to [0, 1], NCHW float32 with batch 1."""
    resized = cv2.resize(pixels, (size, size), interpolation=cv2.INTER_LINEAR)
    rgb = to_rgb(resized).astype(np.float32) / 255.0
    return np.transpose(rgb, (2, 0, 1))[np.newaxis, ...]


def non_max_suppression(
    boxes: np.ndarray, scores: np.ndarray, iou_threshold: float
) -> List[int]:
    """
    Greedy NMS over (x1, y1, x2, y2) boxes.

    Returns kept indices ordered by descending score.
    """
    if len(boxes) == 0:
        return []
    x1, y1, x2, y2 = boxes[:, 0], boxes[:, 1], boxes[:, 2], boxes[:, 3]
    areas = np.clip(x2 - x1, 0, None) * np.clip(y2 - y1, 0, None)
    order = np.argsort(-scores, kind="stable")
    keep: List[int] = []
    while order.size > 0:
        i = int(order[0])
        keep.append(i)
        rest = order[1:]
        xx1 = np.maximum(x1[i], x1[rest])
        yy1 = np.maximum(y1[i], y1[rest])
        xx2 = np.minimum(x2[i], x2[rest])
        yy2 = np.minimum(y2[i], y2[rest])
        inter = np.clip(xx2 - xx1, 0, None) * np.clip(yy2 - yy1, 0, None)
        union = areas[i] + areas[rest] - inter
        iou = np.where(union > 0, inter / np.maximum(union, 1e-9), 0.0)
        order = rest[iou <= iou_threshold]
    return keep


def _pick_outputs(
    names: Sequence[str], outputs: Sequence[np.ndarray]
) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
    by_name = dict(zip(names, outputs))
    boxes = next((by_name[n] for n in BOX_OUTPUT_NAMES if n in by_name), None)
    scores = next((by_name[n] for n in SCORE_OUTPUT_NAMES if n in by_name), None)
    if boxes is None or scores is None:
        if len(outputs) < 2:
            return None, None
        boxes, scores = outputs[0], outputs[1]
    return np.asarray(boxes, dtype=np.float32), np.asarray(scores, dtype=np.float32)


class FaceDetector:
    """
    Detector adapter. With no session loaded every call returns [].
    """

    def __init__(
        self,
        session: Optional[InferenceSession] = None,
        confidence_threshold: float = DEFAULT_DETECTION_CONFIDENCE,
        nms_threshold: float = DEFAULT_NMS_THRESHOLD,
        input_size: int = DETECTOR_INPUT_SIZE,
    ) -> None:
        self.session = session
        self._confidence_threshold = clamp_threshold(confidence_threshold)
        self.nms_threshold = nms_threshold
        self.input_size = input_size

    @property
    def available(self) -> bool:
        return self.session is not None

    @property
    def confidence_threshold(self) -> float:
        return self._confidence_threshold

    @confidence_threshold.setter
    def confidence_threshold(self, value: float) -> None:
        self._confidence_threshold = clamp_threshold(value)

    def detect(self, frame: Frame) -> List[FaceBox]:
        if self.session is None:
            return []

        try:
            tensor = prepare_detector_input(frame.pixels, self.input_size)
            input_name = self.session.get_inputs()[0].name
            output_names = [o.name for o in self.session.get_outputs()]
            outputs = self.session.run(None, {input_name: tensor})
        except Exception as e:
            logger.error(f"Error in face detection: {e}", exc_info=True)
            return []

        return self.decode(output_names, outputs, frame.width, frame.height)

    def decode(
        self,
        output_names: Sequence[str],
        outputs: Sequence[np.ndarray],
        frame_width: int,
        frame_height: int,
    ) -> List[FaceBox]:
        """
        Map raw model outputs to FaceBoxes in frame coordinates.

        Scales by frame size / model input size, drops boxes below the
        confidence threshold, applies NMS and clips to the frame.
        """
        boxes, scores = _pick_outputs(output_names, outputs)
        if boxes is None or scores is None:
            logger.warning("Detector outputs not recognised: %s", list(output_names))
            return []

        boxes = boxes.reshape(-1, boxes.shape[-1])[:, :4] if boxes.size else boxes.reshape(0, 4)
        scores = scores.reshape(-1)
        count = min(len(boxes), len(scores))
        boxes, scores = boxes[:count], scores[:count]

        keep_mask = scores >= self._confidence_threshold
        boxes, scores = boxes[keep_mask], scores[keep_mask]
        if len(boxes) == 0:
            return []

        scale_x = frame_width / float(self.input_size)
        scale_y = frame_height / float(self.input_size)
        scaled = boxes * np.array([scale_x, scale_y, scale_x, scale_y], dtype=np.float32)
        scaled[:, [0, 2]] = np.clip(scaled[:, [0, 2]], 0, frame_width)
        scaled[:, [1, 3]] = np.clip(scaled[:, [1, 3]], 0, frame_height)

        faces: List[FaceBox] = []
        for i in non_max_suppression(scaled, scores, self.nms_threshold):
            x1, y1, x2, y2 = (float(v) for v in scaled[i])
            if x2 - x1 <= 1 or y2 - y1 <= 1:
                continue
            faces.append(
                FaceBox(x=x1, y=y1, width=x2 - x1, height=y2 - y1, confidence=float(scores[i]))
            )
        return faces
