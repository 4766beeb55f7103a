"""
Models (load and run inference)
------------------------------

- ModelLoader: resolve detector/embedder models from candidate filenames.
- ModelStatus: which roles loaded.
- Providers: OnnxSessionProvider.
"""

# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
from .model_loader import LoadedModel, ModelLoader, ModelStatus

__all__ = ["LoadedModel", "ModelLoader", "ModelStatus"]
