from typing import TYPE_CHECKING
from ...core.config import Settings
from ...infrastructure.media_server.mediamtx_config_repository import MediaMtxConfigRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class CameraConfigProvider:
    """Camera path provider - registers the MediaMTX configuration repository"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = container.get(Settings)
        container.register_singleton(
            MediaMtxConfigRepository,
            MediaMtxConfigRepository(
                config_path=settings.mediamtx_config_path,
                whep_base_url=settings.media_server_whep_base,
            )
        )
