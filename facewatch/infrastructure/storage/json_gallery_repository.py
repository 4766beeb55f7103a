# Standard library imports
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Local application imports
from ...core.exceptions import InvalidInputError, NotFoundError
from ...domain.models.gallery_entry import GalleryEntry
from ...domain.repositories.gallery_repository import GalleryRepository
from ...utils.datetime_utils import now_iso
from ...utils.json_files import read_json, write_json_atomic

logger = logging.getLogger(__name__)


def _is_numeric_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and all(
        isinstance(x, (int, float)) and not isinstance(x, bool) for x in value
    )


def migrate_record(key: str, value: Any) -> Optional[GalleryEntry]:
    """
    Turn one persisted gallery value into a canonical GalleryEntry.

    Two shapes are accepted:
    - current: object with profile fields and "embedding" (list or null)
    - legacy: bare numeric array keyed by the person's name

    Returns None for values that match neither shape.
    """
    if _is_numeric_list(value):
        timestamp = now_iso()
        return GalleryEntry(
            id=key,
            name=key,
            embedding=list(value),
            created_at=timestamp,
            updated_at=timestamp,
        )
    if isinstance(value, dict):
        embedding = value.get("embedding")
        if embedding is not None and not _is_numeric_list(embedding):
            return None
        return GalleryEntry.from_record(key, value)
    return None


class JsonGalleryRepository(GalleryRepository):
    """
    Gallery repository backed by one JSON file (object keyed by entry id).

    The full gallery lives in memory; every mutation rewrites the file
    atomically while holding the repository lock.
    """

    def __init__(self, gallery_path: Union[str, Path]) -> None:
        self.gallery_path = Path(gallery_path)
        self._entries: Dict[str, GalleryEntry] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Loading / saving
    # ------------------------------------------------------------------

    def load(self) -> int:
        with self._lock:
            self._entries = {}
            try:
                data = read_json(self.gallery_path, default={})
            except (OSError, ValueError) as e:
                logger.warning("Could not read gallery file %s: %s", self.gallery_path, e)
                return 0

            if not isinstance(data, dict):
                logger.warning(
                    "Gallery file %s is not a JSON object; ignoring its content", self.gallery_path
                )
                return 0

            migrated = 0
            for key, value in data.items():
                try:
                    entry = migrate_record(str(key), value)
                except (TypeError, ValueError) as e:
                    logger.warning("Skipping malformed gallery record %r: %s", key, e)
                    continue
                if entry is None:
                    logger.warning("Skipping unrecognised gallery record %r", key)
                    continue
                if not isinstance(value, dict):
                    migrated += 1
                self._entries[entry.id] = entry

            if migrated:
                logger.info("Migrated %d legacy gallery record(s) in memory", migrated)
            logger.info("Loaded %d known face(s) from %s", len(self._entries), self.gallery_path)
            return len(self._entries)

    def _save(self) -> None:
        data = {entry_id: entry.to_record() for entry_id, entry in self._entries.items()}
        write_json_atomic(self.gallery_path, data)
        logger.debug("Gallery saved (%d entries)", len(data))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, entry_id: str) -> Optional[GalleryEntry]:
        with self._lock:
            return self._entries.get(entry_id)

    def list(self) -> List[GalleryEntry]:
        with self._lock:
            return list(self._entries.values())

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def embedding_dimension(self, exclude_id: Optional[str] = None) -> Optional[int]:
        """Length shared by all stored embeddings, or None when nothing is embedded."""
        with self._lock:
            for entry in self._entries.values():
                if entry.id != exclude_id and entry.embedding is not None:
                    return len(entry.embedding)
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _check_dimension(self, entry: GalleryEntry) -> None:
        if entry.embedding is None:
            return
        expected = self.embedding_dimension(exclude_id=entry.id)
        if expected is not None and expected != len(entry.embedding):
            raise InvalidInputError(
                f"Embedding length {len(entry.embedding)} does not match gallery length {expected}",
                user_message="Face embedding is incompatible with the existing gallery.",
            )

    def add(self, entry: GalleryEntry) -> GalleryEntry:
        with self._lock:
            if entry.id in self._entries:
                raise InvalidInputError(f"Gallery entry already exists: {entry.id}")
            self._check_dimension(entry)
            self._entries[entry.id] = entry
            try:
                self._save()
            except OSError:
                del self._entries[entry.id]
                raise
            return entry

    def update(self, entry: GalleryEntry) -> GalleryEntry:
        with self._lock:
            previous = self._entries.get(entry.id)
            if previous is None:
                raise NotFoundError(f"Face not found: {entry.id}")
            self._check_dimension(entry)
            self._entries[entry.id] = entry
            try:
                self._save()
            except OSError:
                self._entries[entry.id] = previous
                raise
            return entry

    def remove(self, entry_id: str) -> bool:
        with self._lock:
            previous = self._entries.pop(entry_id, None)
            if previous is None:
                return False
            try:
                self._save()
            except OSError:
                self._entries[entry_id] = previous
                raise
            return True
