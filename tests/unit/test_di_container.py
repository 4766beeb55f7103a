"""
Unit tests for the dependency injection container.
"""
import pytest
from facewatch.application.services.face_recognition_service import FaceRecognitionService
from facewatch.core.config import Settings, get_settings
from facewatch.di.base_container import BaseContainer
from facewatch.di.container import DIContainer
from facewatch.domain.repositories.gallery_repository import GalleryRepository
from facewatch.infrastructure.media_server.mediamtx_config_repository import MediaMtxConfigRepository
from facewatch.infrastructure.storage.json_gallery_repository import JsonGalleryRepository


class TestBaseContainer:
    """Tests for BaseContainer"""

    def test_unregistered_raises_value_error(self):
        with pytest.raises(ValueError):
            BaseContainer().get(Settings)

    def test_singleton_and_factory(self):
        container = BaseContainer()
        instance = object()
        container.register_singleton("thing", instance)
        container.register_factory(list, lambda: [])
        assert container.get("thing") is instance
        assert container.get(list) is not container.get(list)
        assert container.is_registered(list)


class TestDIContainer:
    """Tests for DIContainer wiring"""

    def test_wires_service_from_settings(self, mock_env):
        container = DIContainer()
        service = container.get(FaceRecognitionService)

        assert container.get(FaceRecognitionService) is service
        assert isinstance(container.get(GalleryRepository), JsonGalleryRepository)
        assert service.gallery_repository is container.get(GalleryRepository)
        assert str(service.gallery_repository.gallery_path) == mock_env["GALLERY_PATH"]
        assert service.snapshot_base_url == "http://media.test:8889"
        assert service.matcher.threshold == pytest.approx(0.7)
        assert container.get(MediaMtxConfigRepository).whep_url("lobby") == (
            "http://media.test:8889/lobby/whep"
        )

    def test_settings_defaults(self, mock_env):
        settings = get_settings()
        assert settings.detector_model_candidates[0] == "det_10g.onnx"
        assert settings.embedder_model_candidates == [
            "w600k_r50.onnx",
            "1k3d68.onnx",
            "arcface_r50_v1.onnx",
        ]
        assert settings.default_monitor_interval_ms == 5000
        assert settings.enroll_without_embedder is False
