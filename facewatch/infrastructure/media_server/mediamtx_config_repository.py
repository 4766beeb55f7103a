"""
MediaMTX configuration repository.

Registers RTSP cameras as MediaMTX paths by editing the server's YAML
configuration. Each path is re-published by MediaMTX over WebRTC (WHEP)
and as still snapshots, which is what the face monitors poll.
"""

# Standard library imports
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Union

# External package imports
import yaml

# Local application imports
from ...core.exceptions import InvalidInputError, NotFoundError, TransientIOError

logger = logging.getLogger(__name__)

PATH_NAME_MAX_LENGTH = 20
DEFAULT_PATH_NAME = "camera"
RTSP_SCHEME = "rtsp://"


def generate_path_name(camera_name: str) -> str:
    """Lowercase alphanumerics of the camera name, truncated; "camera" when nothing is left."""
    base = re.sub(r"[^a-z0-9]", "", camera_name.lower())[:PATH_NAME_MAX_LENGTH]
    return base or DEFAULT_PATH_NAME


class MediaMtxConfigRepository:
    """Reads and rewrites the `paths` section of mediamtx.yml."""

    def __init__(self, config_path: Union[str, Path], whep_base_url: str) -> None:
        self.config_path = Path(config_path)
        self.whep_base_url = whep_base_url.rstrip("/")
        self._lock = threading.Lock()

    def whep_url(self, path_name: str) -> str:
        return f"{self.whep_base_url}/{path_name}/whep"

    def _read(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            logger.warning("MediaMTX config %s not found; starting from an empty config", self.config_path)
            return {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error reading MediaMTX config: {e}")
            raise TransientIOError(
                f"Could not read MediaMTX config: {e}",
                user_message="Failed to read media server configuration.",
            ) from e
        if not isinstance(config, dict):
            raise TransientIOError(
                "MediaMTX config is not a mapping",
                user_message="Media server configuration is malformed.",
                retryable=False,
            )
        return config

    def _write(self, config: Dict[str, Any]) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.config_path.name}.", suffix=".tmp", dir=str(self.config_path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    config, f, default_flow_style=False, sort_keys=False, allow_unicode=True, width=4096
                )
            os.replace(tmp_name, self.config_path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise TransientIOError(
                f"Could not write MediaMTX config: {e}",
                user_message="Failed to update media server configuration.",
            ) from e
        logger.info("MediaMTX config updated successfully")

    def add_rtsp_camera(self, name: str, rtsp_url: str) -> Dict[str, str]:
        """
        Add an RTSP source as a new MediaMTX path.

        Returns:
            {"pathName", "whepUrl"} of the created path
        """
        if not name or not name.strip() or not rtsp_url:
            raise InvalidInputError("Name and RTSP URL are required")
        if not rtsp_url.startswith(RTSP_SCHEME):
            raise InvalidInputError("URL must start with rtsp://")

        with self._lock:
            config = self._read()
            paths = config.get("paths")
            if not isinstance(paths, dict):
                paths = {}
                config["paths"] = paths

            base = generate_path_name(name)
            path_name = base
            counter = 1
            while path_name in paths:
                path_name = f"{base}{counter}"
                counter += 1

            paths[path_name] = {
                "source": rtsp_url,
                "sourceOnDemand": False,
                "rtspTransport": "tcp",
            }
            self._write(config)

        logger.info("RTSP camera added to MediaMTX: %s -> %s", path_name, rtsp_url)
        return {"pathName": path_name, "whepUrl": self.whep_url(path_name)}

    def remove_camera(self, path_name: str) -> None:
        with self._lock:
            config = self._read()
            paths = config.get("paths") or {}
            if path_name not in paths:
                raise NotFoundError(
                    f"Camera path not found: {path_name}",
                    user_message="Camera path not found in MediaMTX config",
                )
            del paths[path_name]
            self._write(config)
        logger.info("Camera path %s removed from MediaMTX", path_name)

    def list_cameras(self) -> List[Dict[str, Any]]:
        with self._lock:
            config = self._read()
        paths = config.get("paths") or {}
        return [
            {
                "pathName": path_name,
                "source": entry.get("source") if isinstance(entry, dict) else None,
                "whepUrl": self.whep_url(path_name),
            }
            for path_name, entry in paths.items()
        ]
