from .detector import FaceDetector, non_max_suppression
from .embedder import FaceEmbedder, crop_face
from .matcher import FaceMatcher, cosine_similarity

__all__ = [
    "FaceDetector",
    "FaceEmbedder",
    "FaceMatcher",
    "cosine_similarity",
    "crop_face",
    "non_max_suppression",
]
