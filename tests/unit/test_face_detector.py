"""
Unit tests for the face detector adapter (fake inference sessions).
"""
import numpy as np
import pytest
from facewatch.domain.models.face import Frame
from facewatch.processing.face.detector import FaceDetector, non_max_suppression


def _detector(fake_session, boxes, scores, names=("boxes", "scores"), **kwargs):
    session = fake_session([np.array(boxes, dtype=np.float32), np.array(scores, dtype=np.float32)], names)
    return FaceDetector(session=session, **kwargs), session


class TestFaceDetector:
    """Tests for FaceDetector.detect"""

    def test_no_session_returns_empty(self, frame):
        assert FaceDetector().detect(frame) == []
        assert not FaceDetector().available

    def test_input_tensor_layout(self, fake_session, frame):
        detector, session = _detector(fake_session, np.zeros((0, 4)), np.zeros((0,)))
        detector.detect(frame)
        tensor = session.feeds[0]["input.1"]
        assert tensor.shape == (1, 3, 640, 640)
        assert tensor.dtype == np.float32
        assert 0.0 <= tensor.min() and tensor.max() <= 1.0

    def test_boxes_scaled_to_frame(self, fake_session):
        frame = Frame(pixels=np.zeros((720, 1280, 3), dtype=np.uint8))
        detector, _ = _detector(fake_session, [[64, 64, 128, 128]], [0.9])
        faces = detector.detect(frame)
        assert len(faces) == 1
        face = faces[0]
        assert face.x == pytest.approx(128)
        assert face.y == pytest.approx(72)
        assert face.width == pytest.approx(128)
        assert face.height == pytest.approx(72)
        assert face.confidence == pytest.approx(0.9)

    def test_low_scores_dropped(self, fake_session, frame):
        detector, _ = _detector(
            fake_session, [[10, 10, 60, 60], [100, 100, 200, 200]], [0.45, 0.8]
        )
        faces = detector.detect(frame)
        assert [round(f.confidence, 2) for f in faces] == [0.8]

    def test_overlapping_boxes_suppressed(self, fake_session, frame):
        detector, _ = _detector(
            fake_session,
            [[100, 100, 200, 200], [105, 105, 205, 205], [400, 300, 480, 380]],
            [0.8, 0.95, 0.7],
        )
        faces = detector.detect(frame)
        assert len(faces) == 2
        assert faces[0].confidence == pytest.approx(0.95)

    def test_boxes_clipped_to_frame(self, fake_session):
        frame = Frame(pixels=np.zeros((640, 640, 3), dtype=np.uint8))
        detector, _ = _detector(fake_session, [[600, 600, 700, 700]], [0.9])
        face = detector.detect(frame)[0]
        assert face.x + face.width == pytest.approx(640)
        assert face.y + face.height == pytest.approx(640)

    def test_unnamed_outputs_fall_back_to_position(self, fake_session, frame):
        detector, _ = _detector(
            fake_session, [[[10, 10, 110, 110]]], [[0.9]], names=("out_a", "out_b")
        )
        assert len(detector.detect(frame)) == 1

    def test_inference_error_returns_empty(self, fake_session, frame):
        def explode(feed):
            raise RuntimeError("bad model")

        detector = FaceDetector(session=fake_session(explode))
        assert detector.detect(frame) == []

    @pytest.mark.parametrize("value, expected", [(0.05, 0.3), (0.99, 0.9), (0.55, 0.55)])
    def test_confidence_clamped(self, value, expected):
        detector = FaceDetector()
        detector.confidence_threshold = value
        assert detector.confidence_threshold == pytest.approx(expected)

    def test_raising_confidence_never_adds_faces(self, fake_session, frame):
        boxes = [[10, 10, 60, 60], [100, 100, 200, 200], [300, 300, 400, 400]]
        scores = [0.55, 0.65, 0.85]
        detector, _ = _detector(fake_session, boxes, scores)
        low = len(detector.detect(frame))
        detector.confidence_threshold = 0.7
        assert len(detector.detect(frame)) <= low


def test_non_max_suppression_keeps_best_first():
    boxes = np.array([[0, 0, 10, 10], [1, 1, 11, 11], [50, 50, 60, 60]], dtype=np.float32)
    scores = np.array([0.6, 0.9, 0.7], dtype=np.float32)
    assert non_max_suppression(boxes, scores, 0.4) == [1, 2]
