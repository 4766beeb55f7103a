"""
Unit tests for the face embedder adapter (fake inference sessions).
"""
import numpy as np
import pytest
from facewatch.domain.models.face import FaceBox
from facewatch.processing.face.embedder import FaceEmbedder


def _embedder(fake_session, vector, names=("fc1",)):
    session = fake_session([np.array([vector], dtype=np.float32)], names)
    return FaceEmbedder(session=session), session


class TestFaceEmbedder:
    """Tests for FaceEmbedder"""

    def test_no_session_returns_none(self, frame):
        assert FaceEmbedder().embed(frame.pixels) is None

    def test_input_tensor_layout(self, fake_session, frame):
        embedder, session = _embedder(fake_session, [0.1, 0.2, 0.3, 0.4])
        embedder.embed(frame.pixels)
        tensor = session.feeds[0]["input.1"]
        assert tensor.shape == (1, 3, 112, 112)
        assert tensor.dtype == np.float32
        assert -1.0 <= tensor.min() and tensor.max() <= 1.0

    def test_returns_flattened_first_output(self, fake_session, frame):
        embedder, _ = _embedder(fake_session, [0.1, 0.2, 0.3, 0.4], names=("whatever",))
        assert embedder.embed(frame.pixels) == pytest.approx([0.1, 0.2, 0.3, 0.4])

    def test_inference_error_returns_none(self, fake_session, frame):
        def explode(feed):
            raise RuntimeError("bad model")

        assert FaceEmbedder(session=fake_session(explode)).embed(frame.pixels) is None

    def test_empty_region_returns_none(self, fake_session):
        embedder, _ = _embedder(fake_session, [1.0])
        assert embedder.embed(np.zeros((0, 0, 3), dtype=np.uint8)) is None


class TestCrop:
    """Tests for FaceEmbedder.crop"""

    def test_crop_inside_frame(self, frame):
        region = FaceEmbedder().crop(frame, FaceBox(x=10, y=20, width=30, height=40, confidence=1))
        assert region.shape == (40, 30, 3)

    def test_crop_is_clamped(self, frame):
        region = FaceEmbedder().crop(frame, FaceBox(x=600, y=450, width=100, height=100, confidence=1))
        assert region.shape == (30, 40, 3)

    def test_crop_outside_frame_is_none(self, frame):
        assert FaceEmbedder().crop(frame, FaceBox(x=700, y=10, width=20, height=20, confidence=1)) is None
