"""
Snapshot Writer
---------------

Writes annotated frames for recognized faces and lists them back.

Filename contract: {camera}_{timestamp}_{identityName}_{faceIndex}.jpg
where timestamp is ISO-8601 UTC with ':' and '.' replaced by '-'.
Listing recovers the fields by splitting on underscores, so identity
names may contain underscores but camera names must not.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import cv2
import numpy as np

from ...core.exceptions import NotFoundError
from ...domain.constants import SNAPSHOT_EXTENSION
from ...domain.models.face import FaceBox, Frame, Identity
from ...domain.models.snapshot import SnapshotInfo
from ...utils.datetime_utils import filename_timestamp, parse_filename_timestamp

logger = logging.getLogger(__name__)

BOX_COLOR = (0, 255, 0)  # BGR green
BOX_THICKNESS = 2

# Path separators, reserved characters and control characters; "_" is kept
_UNSAFE_NAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def safe_identity_name(name: str) -> str:
    """Identity name usable as one filename segment."""
    cleaned = _UNSAFE_NAME_CHARS.sub("-", name).strip().lstrip(".")
    return cleaned or "face"


def build_snapshot_filename(
    camera: str, timestamp: str, identity_name: str, face_index: int
) -> str:
    return (
        f"{camera}_{timestamp}_{safe_identity_name(identity_name)}_{face_index}{SNAPSHOT_EXTENSION}"
    )


def parse_snapshot_filename(filename: str) -> Optional[SnapshotInfo]:
    """
    Recover camera, timestamp, identity and face index from a snapshot filename.

    Returns None when the name does not follow the naming contract.
    """
    path = Path(filename)
    if path.suffix.lower() != SNAPSHOT_EXTENSION:
        return None
    parts = path.stem.split("_")
    if len(parts) < 4:
        return None
    try:
        face_index = int(parts[-1])
    except ValueError:
        return None
    return SnapshotInfo(
        filename=path.name,
        camera=parts[0],
        timestamp=parse_filename_timestamp(parts[1]),
        name="_".join(parts[2:-1]),
        face_index=face_index,
    )


def draw_face_box(pixels: np.ndarray, box: FaceBox, label: Optional[str] = None) -> np.ndarray:
    """
    Draw a rectangle outline (and optional label) around box.

    Returns a new image; the input array is left unchanged.
    """
    out = pixels.copy()
    x1, y1 = int(round(box.x)), int(round(box.y))
    x2, y2 = int(round(box.x + box.width)), int(round(box.y + box.height))
    cv2.rectangle(out, (x1, y1), (x2, y2), BOX_COLOR, BOX_THICKNESS)
    if label:
        cv2.putText(
            out,
            label,
            (x1, max(y1 - 8, 12)),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.5,
            BOX_COLOR,
            1,
            cv2.LINE_AA,
        )
    return out


class SnapshotWriter:
    """Stores annotated snapshots in one directory."""

    def __init__(self, snapshots_dir: Union[str, Path]) -> None:
        self.snapshots_dir = Path(snapshots_dir)

    def save(
        self,
        camera: str,
        frame: Frame,
        box: FaceBox,
        identity: Identity,
        face_index: int,
    ) -> Optional[Path]:
        """
        Write an annotated copy of frame. Failures are logged and yield None.
        """
        filename = build_snapshot_filename(
            camera, filename_timestamp(), identity.name, face_index
        )
        path = self.snapshots_dir / filename
        try:
            self.snapshots_dir.mkdir(parents=True, exist_ok=True)
            label = f"{identity.name} {identity.confidence:.2f}"
            annotated = draw_face_box(frame.pixels, box, label)
            if not cv2.imwrite(str(path), annotated):
                logger.error("Failed to save snapshot %s: encoder returned False", path)
                return None
        except Exception as e:
            logger.error(f"Error saving snapshot {filename}: {e}", exc_info=True)
            return None

        logger.info(f"Snapshot saved: {filename}")
        return path

    def list_snapshots(self) -> List[SnapshotInfo]:
        """Snapshots parsed from their filenames, newest first."""
        if not self.snapshots_dir.is_dir():
            return []
        snapshots = []
        for path in self.snapshots_dir.iterdir():
            if not path.is_file():
                continue
            info = parse_snapshot_filename(path.name)
            if info is None:
                logger.debug("Ignoring file with unexpected name in snapshots: %s", path.name)
                continue
            snapshots.append(info)
        snapshots.sort(key=lambda s: (s.timestamp or "", s.filename), reverse=True)
        return snapshots

    def snapshot_path(self, filename: str) -> Path:
        """Resolve a snapshot file inside the snapshot directory."""
        base = self.snapshots_dir.resolve()
        candidate = (self.snapshots_dir / filename).resolve()
        if candidate.parent != base or not candidate.is_file():
            raise NotFoundError(f"Snapshot not found: {filename}")
        return candidate
