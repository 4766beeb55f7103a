"""Detection Log Storage

Stores face detections as JSON arrays, one file per camera per UTC day:

    {logs_dir}/{camera}_{YYYY-MM-DD}.json

Appends are read-modify-write under a per-file lock and the file is
replaced atomically, so two cameras logging at the same instant never
lose each other's records.
"""

import logging
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Union

from ...core.exceptions import InvalidInputError
from ...domain.constants import ALL_CAMERAS
from ...domain.models.detection_log_entry import DetectionLogEntry
from ...domain.repositories.detection_log_repository import DetectionLogRepository
from ...utils.datetime_utils import date_key, is_valid_date_key, parse_iso
from ...utils.json_files import read_json, write_json_atomic

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_\-]")


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def safe_camera_name(camera: str) -> str:
    """Camera name usable as a filename prefix."""
    return _UNSAFE_CHARS.sub("_", camera.strip()) or "camera"


def _require_date(date: str) -> None:
    if not is_valid_date_key(date):
        raise InvalidInputError(
            f"Invalid date: {date}", user_message="Date must be formatted as YYYY-MM-DD."
        )


def _sort_key(entry: DetectionLogEntry) -> datetime:
    return parse_iso(entry.timestamp) or _EPOCH


class JsonDetectionLogRepository(DetectionLogRepository):
    """File-backed, append-only detection log."""

    def __init__(self, logs_dir: Union[str, Path]) -> None:
        self.logs_dir = Path(logs_dir)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, path: Path) -> threading.Lock:
        key = str(path)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def log_path(self, camera: str, date: str) -> Path:
        return self.logs_dir / f"{safe_camera_name(camera)}_{date}.json"

    def _read_records(self, path: Path) -> List[dict]:
        try:
            data = read_json(path, default=[])
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable log file %s: %s", path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Skipping log file %s: expected a JSON array", path)
            return []
        return [record for record in data if isinstance(record, dict)]

    def append(self, entry: DetectionLogEntry) -> None:
        stamp = parse_iso(entry.timestamp)
        if stamp is None:
            raise InvalidInputError(f"Invalid detection timestamp: {entry.timestamp}")
        path = self.log_path(entry.camera, date_key(stamp))

        with self._lock_for(path):
            records = self._read_records(path)
            records.append(entry.to_record())
            write_json_atomic(path, records)

        logger.info(
            "Face detection logged: %s in %s (confidence: %.2f)",
            entry.identity,
            entry.camera,
            entry.confidence,
        )

    def _entries_from(self, path: Path) -> List[DetectionLogEntry]:
        entries: List[DetectionLogEntry] = []
        for record in self._read_records(path):
            try:
                entries.append(DetectionLogEntry.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed log record in %s: %s", path, e)
        return entries

    def get_logs(self, camera: str, date: str) -> List[DetectionLogEntry]:
        _require_date(date)

        if camera != ALL_CAMERAS:
            path = self.log_path(camera, date)
            with self._lock_for(path):
                return self._entries_from(path)

        if not self.logs_dir.is_dir():
            return []

        all_entries: List[DetectionLogEntry] = []
        for path in sorted(self.logs_dir.glob(f"*_{date}.json")):
            with self._lock_for(path):
                all_entries.extend(self._entries_from(path))

        # Newest first; unparsable timestamps sink to the end
        all_entries.sort(key=_sort_key, reverse=True)
        logger.debug("Loaded %d log record(s) across all cameras for %s", len(all_entries), date)
        return all_entries

    def list_cameras(self, date: str) -> List[str]:
        """Cameras with a log file for the day."""
        _require_date(date)
        if not self.logs_dir.is_dir():
            return []
        suffix = f"_{date}.json"
        return sorted(
            path.name[: -len(suffix)] for path in self.logs_dir.glob(f"*{suffix}")
        )
