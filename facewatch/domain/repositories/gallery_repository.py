from abc import ABC, abstractmethod
from typing import List, Optional
from ..models.gallery_entry import GalleryEntry


class GalleryRepository(ABC):
    """Repository interface - defines contract for known-face gallery access"""

    @abstractmethod
    def load(self) -> int:
        """(Re)load every entry from durable storage; returns the entry count"""
        pass

    @abstractmethod
    def add(self, entry: GalleryEntry) -> GalleryEntry:
        """Insert a new entry and persist the gallery"""
        pass

    @abstractmethod
    def update(self, entry: GalleryEntry) -> GalleryEntry:
        """Replace an existing entry and persist the gallery"""
        pass

    @abstractmethod
    def remove(self, entry_id: str) -> bool:
        """Delete an entry; returns False when it did not exist"""
        pass

    @abstractmethod
    def get(self, entry_id: str) -> Optional[GalleryEntry]:
        """Find entry by ID"""
        pass

    @abstractmethod
    def list(self) -> List[GalleryEntry]:
        """All entries in insertion order"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of entries"""
        pass

    def embedded_entries(self) -> List[GalleryEntry]:
        """Entries that take part in matching"""
        return [entry for entry in self.list() if entry.has_embedding]
