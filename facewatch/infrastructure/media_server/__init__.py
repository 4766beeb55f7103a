from .mediamtx_config_repository import MediaMtxConfigRepository, generate_path_name

__all__ = ["MediaMtxConfigRepository", "generate_path_name"]
