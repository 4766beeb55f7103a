# Standard library imports
import os
from pathlib import Path
from typing import Final, List, Optional


DEFAULT_DETECTOR_CANDIDATES = "det_10g.onnx,2d106det.onnx,scrfd_2.5g_bnkps.onnx"
DEFAULT_EMBEDDER_CANDIDATES = "w600k_r50.onnx,1k3d68.onnx,arcface_r50_v1.onnx"


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Storage Configuration
        self.data_dir: Final[str] = os.getenv("DATA_DIR", "data")
        self.models_dir: Final[str] = os.getenv(
            "MODELS_DIR", str(Path(self.data_dir) / "models")
        )
        self.gallery_path: Final[str] = os.getenv(
            "GALLERY_PATH", str(Path(self.data_dir) / "known_faces.json")
        )
        self.logs_dir: Final[str] = os.getenv("LOGS_DIR", str(Path(self.data_dir) / "logs"))
        self.snapshots_dir: Final[str] = os.getenv(
            "SNAPSHOTS_DIR", str(Path(self.data_dir) / "snapshots")
        )

        # Model Configuration (first candidate that loads wins)
        self.detector_model_candidates: Final[List[str]] = _split_list(
            os.getenv("DETECTOR_MODEL_CANDIDATES", DEFAULT_DETECTOR_CANDIDATES)
        )
        self.embedder_model_candidates: Final[List[str]] = _split_list(
            os.getenv("EMBEDDER_MODEL_CANDIDATES", DEFAULT_EMBEDDER_CANDIDATES)
        )

        # Recognition Configuration
        self.recognition_threshold: Final[float] = float(os.getenv("RECOGNITION_THRESHOLD", "0.7"))
        self.detection_confidence: Final[float] = float(os.getenv("DETECTION_CONFIDENCE", "0.5"))
        self.nms_threshold: Final[float] = float(os.getenv("NMS_THRESHOLD", "0.4"))
        self.enroll_without_embedder: Final[bool] = _env_flag("ENROLL_WITHOUT_EMBEDDER")
        self.image_max_mb: Final[int] = int(os.getenv("IMAGE_MAX_MB", "8"))

        # Monitoring Configuration
        self.frame_timeout_seconds: Final[float] = float(os.getenv("FRAME_TIMEOUT_SECONDS", "5"))
        self.default_monitor_interval_ms: Final[int] = int(
            os.getenv("DEFAULT_MONITOR_INTERVAL_MS", "5000")
        )
        self.cycle_timeout_seconds: Final[float] = float(os.getenv("CYCLE_TIMEOUT_SECONDS", "30"))

        # Media Server (MediaMTX) Configuration
        self.mediamtx_config_path: Final[str] = os.getenv(
            "MEDIAMTX_CONFIG_PATH", "media-server/mediamtx.yml"
        )
        self.media_server_whep_base: Final[str] = os.getenv(
            "MEDIA_SERVER_WHEP_BASE", "http://localhost:8889"
        ).rstrip("/")
        self.media_server_snapshot_base: Final[str] = os.getenv(
            "MEDIA_SERVER_SNAPSHOT_BASE", "http://localhost:8889"
        ).rstrip("/")

        # HTTP / Logging Configuration
        self.host: Final[str] = os.getenv("HOST", "0.0.0.0")
        self.port: Final[int] = int(os.getenv("PORT", "3001"))
        self.cors_allow_origins: Final[List[str]] = _split_list(
            os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173,http://localhost:3000")
        )
        self.log_level: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
