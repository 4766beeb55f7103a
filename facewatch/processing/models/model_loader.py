"""
Model Loader
------------

Resolves and loads the face detector and the face embedder from the
models directory. Each role has an ordered list of candidate filenames;
the first file that exists and loads wins. A role with no loadable
candidate stays absent: the service keeps running with reduced
capability (detector-only, embedder-only, or neither).
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Type

from facewatch.processing.models.contracts import InferenceSession, Provider
from facewatch.processing.models.providers.onnx_provider import OnnxSessionProvider

logger = logging.getLogger(__name__)


# Provider per model file suffix
PROVIDERS_BY_SUFFIX: Dict[str, Type[Provider]] = {
    ".onnx": OnnxSessionProvider,
}


@dataclass
class LoadedModel:
    """A session plus the candidate filename it was loaded from."""
    filename: str
    path: str
    session: InferenceSession


@dataclass(frozen=True)
class ModelStatus:
    """Which roles are available after initialize()."""
    detector: Optional[str]
    embedder: Optional[str]

    @property
    def capability(self) -> str:
        if self.detector and self.embedder:
            return "full"
        if self.detector:
            return "detector-only"
        if self.embedder:
            return "embedder-only"
        return "none"

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "detector": self.detector,
            "embedder": self.embedder,
            "capability": self.capability,
        }


class ModelLoader:
    """
    Manages model loading and caching.

    Sessions are cached by absolute path, so a second initialize() after
    clear_cache() really reloads from disk.
    """

    def __init__(
        self,
        models_dir: str,
        detector_candidates: Sequence[str],
        embedder_candidates: Sequence[str],
    ) -> None:
        self.models_dir = models_dir
        self.detector_candidates: List[str] = list(detector_candidates)
        self.embedder_candidates: List[str] = list(embedder_candidates)
        self._cache: Dict[str, InferenceSession] = {}
        self.detector: Optional[LoadedModel] = None
        self.embedder: Optional[LoadedModel] = None

    def _provider_for(self, filename: str) -> Optional[Provider]:
        suffix = os.path.splitext(filename)[1].lower()
        provider_class = PROVIDERS_BY_SUFFIX.get(suffix)
        if provider_class is None:
            logger.warning("No model provider registered for %s", filename)
            return None
        return provider_class()

    def load_model(self, filename: str) -> Optional[InferenceSession]:
        """
        Load one model file from the models directory, using cache if available.

        Returns:
            Loaded session or None if the file is missing or fails to load
        """
        path = os.path.abspath(os.path.join(self.models_dir, filename))
        if path in self._cache:
            return self._cache[path]
        if not os.path.isfile(path):
            return None

        provider = self._provider_for(filename)
        if provider is None:
            return None

        session = provider.load(path)
        if session is not None:
            self._cache[path] = session
        return session

    def _load_first(self, role: str, candidates: Sequence[str]) -> Optional[LoadedModel]:
        for filename in candidates:
            session = self.load_model(filename)
            if session is not None:
                logger.info("Face %s model loaded: %s", role, filename)
                return LoadedModel(
                    filename=filename,
                    path=os.path.join(self.models_dir, filename),
                    session=session,
                )
        logger.warning(
            "No face %s model found in %s. Candidates: %s",
            role,
            self.models_dir,
            ", ".join(candidates),
        )
        return None

    def initialize(self) -> ModelStatus:
        """(Re)load both roles. Never raises for missing or broken model files."""
        self.clear_cache()
        self.detector = self._load_first("detection", self.detector_candidates)
        self.embedder = self._load_first("recognition", self.embedder_candidates)
        return self.status()

    def status(self) -> ModelStatus:
        return ModelStatus(
            detector=self.detector.filename if self.detector else None,
            embedder=self.embedder.filename if self.embedder else None,
        )

    def clear_cache(self) -> None:
        """Clear the session cache (useful for memory management and reloads)."""
        self._cache.clear()
