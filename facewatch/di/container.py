# Standard library imports
from typing import Optional

# Local application imports
from ..core.config import Settings, get_settings
from .base_container import BaseContainer
from .providers import (
    CameraConfigProvider,
    RecognitionProvider,
    StorageProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Settings
    2. Storage (StorageProvider) - gallery, detection logs, snapshots
    3. Recognition (RecognitionProvider) - depends on storage
    4. Camera paths (CameraConfigProvider)
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.setup(settings or get_settings())

    def setup(self, settings: Settings) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: settings → storage → recognition service
        """
        # Step 1: Configuration (foundation)
        self.register_singleton(Settings, settings)

        # Step 2: File-backed storage
        StorageProvider.register(self)

        # Step 3: Recognition pipeline (depends on storage)
        RecognitionProvider.register(self)

        # Step 4: Media server camera paths
        CameraConfigProvider.register(self)


# Global container instance (singleton pattern)
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container so the next get_container() rebuilds it."""
    global _container
    _container = None
