"""
Model contracts (protocols)
---------------------------

Defines what a loaded inference session and a provider look like. The
detector and embedder adapters only depend on these protocols, so tests
can hand them light fakes instead of real ONNX sessions.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Optional, Protocol, Sequence

# -----------------------------------------------------------------------------
# Third-party
# -----------------------------------------------------------------------------
import numpy as np

# -----------------------------------------------------------------------------
# Protocols
# -----------------------------------------------------------------------------


class TensorInfo(Protocol):
    """Name (and shape) of one model input or output."""

    name: str


class InferenceSession(Protocol):
    """What a loaded model looks like: onnxruntime.InferenceSession-compatible."""

    def get_inputs(self) -> Sequence[TensorInfo]:
        ...

    def get_outputs(self) -> Sequence[TensorInfo]:
        ...

    def run(self, output_names: Optional[List[str]], input_feed: Dict[str, np.ndarray]) -> List[Any]:
        """Run inference. Returns one array per requested output (all outputs when None)."""
        ...


class Provider(Protocol):
    """A provider loads one model file (e.g. OnnxSessionProvider loads det_10g.onnx)."""

    def load(self, model_path: str) -> Optional[InferenceSession]:
        """Load and return a session, or None if loading fails."""
        ...
