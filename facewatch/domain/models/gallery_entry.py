# Standard library imports
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

# Local application imports
from ..constants import UNKNOWN_IDENTITY, GalleryFields


CURRENT_SCHEMA_VERSION = 2


@dataclass
class GalleryEntry:
    """
    Pure domain model for a known identity in the face gallery.

    An entry without an embedding is "unembedded": it is listed like any
    other identity but never takes part in matching.
    """
    id: str
    name: str
    department: str = ""
    position: str = ""
    email: str = ""
    phone: str = ""
    embedding: Optional[List[float]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    schema_version: int = field(default=CURRENT_SCHEMA_VERSION)

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.id or not str(self.id).strip():
            raise ValueError("Gallery entry ID is required")
        if not self.name or len(self.name.strip()) < 1:
            raise ValueError("Name is required")
        if self.name.strip().lower() == UNKNOWN_IDENTITY.lower():
            raise ValueError(f"\"{UNKNOWN_IDENTITY}\" is reserved for unmatched faces")
        if self.embedding is not None:
            if len(self.embedding) == 0:
                raise ValueError("Embedding must not be empty")
            self.embedding = [float(x) for x in self.embedding]

    def replace_embedding(self, embedding: List[float], updated_at: Optional[str] = None) -> "GalleryEntry":
        """Copy of this entry with a new embedding; profile fields and created_at are kept."""
        return replace(self, embedding=list(embedding), updated_at=updated_at or self.updated_at)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def to_profile(self) -> Dict[str, Any]:
        """Public profile (no embedding), as returned by list/get operations."""
        return {
            GalleryFields.ID: self.id,
            GalleryFields.NAME: self.name,
            GalleryFields.DEPARTMENT: self.department,
            GalleryFields.POSITION: self.position,
            GalleryFields.EMAIL: self.email,
            GalleryFields.PHONE: self.phone,
            GalleryFields.CREATED_AT: self.created_at,
            GalleryFields.UPDATED_AT: self.updated_at,
            "embedded": self.has_embedding,
        }

    def to_record(self) -> Dict[str, Any]:
        """Canonical persisted record."""
        return {
            GalleryFields.ID: self.id,
            GalleryFields.NAME: self.name,
            GalleryFields.DEPARTMENT: self.department,
            GalleryFields.POSITION: self.position,
            GalleryFields.EMAIL: self.email,
            GalleryFields.PHONE: self.phone,
            GalleryFields.EMBEDDING: list(self.embedding) if self.embedding is not None else None,
            GalleryFields.CREATED_AT: self.created_at,
            GalleryFields.UPDATED_AT: self.updated_at,
            GalleryFields.SCHEMA_VERSION: self.schema_version,
        }

    @classmethod
    def from_record(cls, entry_id: str, record: Dict[str, Any]) -> "GalleryEntry":
        """Build an entry from a canonical persisted record keyed by entry_id."""
        embedding = record.get(GalleryFields.EMBEDDING)
        return cls(
            id=str(record.get(GalleryFields.ID) or entry_id),
            name=str(record.get(GalleryFields.NAME) or entry_id),
            department=str(record.get(GalleryFields.DEPARTMENT) or ""),
            position=str(record.get(GalleryFields.POSITION) or ""),
            email=str(record.get(GalleryFields.EMAIL) or ""),
            phone=str(record.get(GalleryFields.PHONE) or ""),
            embedding=list(embedding) if embedding is not None else None,
            created_at=record.get(GalleryFields.CREATED_AT),
            updated_at=record.get(GalleryFields.UPDATED_AT),
            schema_version=CURRENT_SCHEMA_VERSION,
        )
