from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class RtspCameraCreateRequest(BaseModel):
    """DTO for registering an RTSP camera with the media server"""
    name: str = Field(min_length=1, max_length=200)
    rtsp_url: str = Field(alias="rtspUrl")

    model_config = ConfigDict(populate_by_name=True)


class CameraPathResponse(BaseModel):
    """DTO for one media server path"""
    model_config = ConfigDict(populate_by_name=True)

    path_name: str = Field(alias="pathName")
    source: Optional[str] = None
    whep_url: str = Field(alias="whepUrl")


class CameraPathListResponse(BaseModel):
    """DTO for all media server paths"""
    cameras: List[CameraPathResponse] = Field(default_factory=list)
