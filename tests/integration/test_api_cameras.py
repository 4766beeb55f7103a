"""
Integration tests for media server camera path endpoints.
Uses TestClient with a real MediaMtxConfigRepository on a temporary YAML file.
"""
from unittest.mock import MagicMock, patch

import pytest

pytestmark = pytest.mark.integration
from fastapi.testclient import TestClient

from facewatch.application.services.face_recognition_service import FaceRecognitionService
from facewatch.infrastructure.media_server.mediamtx_config_repository import MediaMtxConfigRepository


@pytest.fixture
def repository(tmp_path):
    config_path = tmp_path / "mediamtx.yml"
    config_path.write_text("paths:\n  lobby:\n    source: rtsp://10.0.0.5/stream\n", encoding="utf-8")
    return MediaMtxConfigRepository(config_path, "http://localhost:8889")


@pytest.fixture
def mock_container(repository):
    service = MagicMock(spec=FaceRecognitionService)
    service.initialize.return_value = {"models": {"capability": "none"}}
    container = MagicMock()
    container.get.side_effect = lambda cls: {
        MediaMtxConfigRepository: repository,
        FaceRecognitionService: service,
    }.get(cls, None)
    return container


@pytest.fixture
def client(mock_container):
    """Create test client with mocked container."""
    from facewatch.main import app

    with patch("facewatch.main.get_container", return_value=mock_container), patch(
        "facewatch.api.v1.camera_controller.get_container", return_value=mock_container
    ):
        with TestClient(app) as c:
            yield c


class TestCamerasAPI:
    """Tests for /api/cameras and /api/health"""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"

    def test_add_rtsp_camera(self, client):
        response = client.post(
            "/api/cameras/rtsp",
            json={"name": "Lobby", "rtspUrl": "rtsp://10.0.0.9/stream"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["pathName"] == "lobby1"
        assert data["whepUrl"] == "http://localhost:8889/lobby1/whep"

    def test_add_rtsp_camera_rejects_non_rtsp(self, client):
        response = client.post(
            "/api/cameras/rtsp",
            json={"name": "Lobby", "rtspUrl": "http://10.0.0.9/stream"},
        )
        assert response.status_code == 400

    def test_list_paths(self, client):
        response = client.get("/api/cameras/paths")
        assert response.status_code == 200
        assert response.json() == {
            "cameras": [
                {
                    "pathName": "lobby",
                    "source": "rtsp://10.0.0.5/stream",
                    "whepUrl": "http://localhost:8889/lobby/whep",
                }
            ]
        }

    def test_remove_camera(self, client):
        assert client.delete("/api/cameras/lobby").status_code == 200
        assert client.delete("/api/cameras/lobby").status_code == 404
