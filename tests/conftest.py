"""
Shared pytest fixtures for facewatch tests.
"""
import os
from types import SimpleNamespace
from unittest.mock import patch

import cv2
import numpy as np
import pytest

from facewatch.core.config import reset_settings
from facewatch.domain.models.face import Frame


class FakeSession:
    """Stands in for an onnxruntime.InferenceSession."""

    def __init__(self, outputs, output_names=("boxes", "scores"), input_name="input.1"):
        self.outputs = outputs
        self.output_names = list(output_names)
        self.input_name = input_name
        self.feeds = []

    def get_inputs(self):
        return [SimpleNamespace(name=self.input_name)]

    def get_outputs(self):
        return [SimpleNamespace(name=name) for name in self.output_names]

    def run(self, output_names, input_feed):
        self.feeds.append(input_feed)
        if callable(self.outputs):
            return self.outputs(input_feed)
        return [np.asarray(o, dtype=np.float32) for o in self.outputs]


@pytest.fixture
def fake_session():
    """Factory for fake inference sessions."""
    return FakeSession


@pytest.fixture
def mock_env(tmp_path):
    """Fixture to point all storage at a temporary data directory."""
    env_vars = {
        "DATA_DIR": str(tmp_path / "data"),
        "MODELS_DIR": str(tmp_path / "data" / "models"),
        "GALLERY_PATH": str(tmp_path / "data" / "known_faces.json"),
        "LOGS_DIR": str(tmp_path / "data" / "logs"),
        "SNAPSHOTS_DIR": str(tmp_path / "data" / "snapshots"),
        "MEDIAMTX_CONFIG_PATH": str(tmp_path / "mediamtx.yml"),
        "MEDIA_SERVER_SNAPSHOT_BASE": "http://media.test:8889",
        "MEDIA_SERVER_WHEP_BASE": "http://media.test:8889",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        reset_settings()
        yield env_vars
    reset_settings()


@pytest.fixture
def frame():
    """A 640x480 gray BGR frame."""
    return Frame(pixels=np.full((480, 640, 3), 128, dtype=np.uint8))


@pytest.fixture
def jpeg_bytes():
    """A small encoded JPEG image."""
    pixels = np.full((64, 64, 3), 200, dtype=np.uint8)
    cv2.rectangle(pixels, (16, 16), (48, 48), (40, 40, 40), -1)
    ok, encoded = cv2.imencode(".jpg", pixels)
    assert ok
    return encoded.tobytes()
