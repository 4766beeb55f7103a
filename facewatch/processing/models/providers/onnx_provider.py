"""
ONNX Runtime Provider
---------------------

Provider for ONNX face models (SCRFD / RetinaFace detectors, ArcFace
recognizers). Picks CUDA when onnxruntime exposes it, CPU otherwise.
"""

import logging
import os
from typing import List, Optional

from facewatch.processing.models.contracts import InferenceSession, Provider

try:
    import onnxruntime as ort  # type: ignore
    ORT_AVAILABLE = True
except Exception:  # noqa: BLE001
    ort = None  # type: ignore[assignment]
    ORT_AVAILABLE = False

logger = logging.getLogger(__name__)


def _select_providers() -> List[str]:
    available = ort.get_available_providers()
    if "CUDAExecutionProvider" in available:
        return ["CUDAExecutionProvider", "CPUExecutionProvider"]
    return ["CPUExecutionProvider"]


# ============================================================================
# ONNX SESSION PROVIDER
# ============================================================================

class OnnxSessionProvider(Provider):
    """Loads an .onnx file into an onnxruntime.InferenceSession."""

    def load(self, model_path: str) -> Optional[InferenceSession]:
        if not ORT_AVAILABLE:
            logger.warning("onnxruntime not installed; cannot load %s", model_path)
            return None

        if not os.path.isfile(model_path):
            logger.debug("Model file not found: %s", model_path)
            return None

        try:
            providers = _select_providers()
            session = ort.InferenceSession(model_path, providers=providers)
            logger.info("ONNX model loaded: %s (providers=%s)", model_path, providers)
            return session
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to load ONNX model %s: %s", model_path, exc)
            return None
