from .camera_controller import router as camera_router
from .face_recognition_controller import router as face_recognition_router


__all__ = ["camera_router", "face_recognition_router"]
