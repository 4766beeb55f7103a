"""Gallery matching by cosine similarity."""

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from facewatch.domain.constants import DEFAULT_RECOGNITION_THRESHOLD, clamp_threshold
from facewatch.domain.models.face import Identity
from facewatch.domain.models.gallery_entry import GalleryEntry

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Returns 0.0 when either vector has zero norm or the lengths differ.
    """
    va = np.asarray(a, dtype=np.float64).reshape(-1)
    vb = np.asarray(b, dtype=np.float64).reshape(-1)
    if va.shape != vb.shape:
        return 0.0
    norm = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if norm == 0.0:
        return 0.0
    return float(np.dot(va, vb) / norm)


class FaceMatcher:
    """
    Picks the gallery entry most similar to an embedding.

    A match requires similarity strictly greater than the threshold. On a
    tie the entry seen first wins. Unembedded entries are ignored.
    """

    def __init__(self, threshold: float = DEFAULT_RECOGNITION_THRESHOLD) -> None:
        self._threshold = clamp_threshold(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._threshold = clamp_threshold(value)

    def recognize(
        self, embedding: Optional[Sequence[float]], entries: Iterable[GalleryEntry]
    ) -> Identity:
        if embedding is None:
            return Identity.unknown()

        best_entry: Optional[GalleryEntry] = None
        best_similarity = float("-inf")
        for entry in entries:
            if entry.embedding is None:
                continue
            similarity = cosine_similarity(embedding, entry.embedding)
            if similarity > best_similarity:
                best_similarity = similarity
                best_entry = entry

        if best_entry is None or best_similarity <= self._threshold:
            return Identity.unknown()

        logger.debug("Matched %s with similarity %.3f", best_entry.name, best_similarity)
        return Identity(name=best_entry.name, confidence=best_similarity, user_id=best_entry.id)
