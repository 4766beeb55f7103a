# Standard library imports
import logging
from typing import Any, Dict

# External package imports
from fastapi import APIRouter

# Local application imports
from ...application.dto.camera_dto import CameraPathListResponse, RtspCameraCreateRequest
from ...core.exceptions import FaceWatchError
from ...di.container import get_container
from ...infrastructure.media_server.mediamtx_config_repository import MediaMtxConfigRepository
from .errors import to_http_exception

logger = logging.getLogger(__name__)
router = APIRouter(tags=["cameras"])


def _repository() -> MediaMtxConfigRepository:
    return get_container().get(MediaMtxConfigRepository)


@router.post("/cameras/rtsp")
async def add_rtsp_camera(request: RtspCameraCreateRequest) -> Dict[str, Any]:
    """
    Register an RTSP camera as a MediaMTX path.

    Returns:
        pathName and the WHEP URL the dashboard plays it from
    """
    try:
        created = _repository().add_rtsp_camera(request.name, request.rtsp_url)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {
        "success": True,
        **created,
        "message": "RTSP camera added to MediaMTX successfully",
    }


@router.delete("/cameras/{path_name}")
async def remove_camera(path_name: str) -> Dict[str, Any]:
    try:
        _repository().remove_camera(path_name)
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {
        "success": True,
        "message": f"Camera path '{path_name}' removed from MediaMTX successfully",
    }


@router.get("/cameras/paths", response_model=CameraPathListResponse)
async def list_camera_paths() -> Dict[str, Any]:
    try:
        cameras = _repository().list_cameras()
    except FaceWatchError as exception:
        raise to_http_exception(exception)
    return {"cameras": cameras}


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "OK", "message": "Camera management server is running"}
