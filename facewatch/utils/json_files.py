"""JSON file helpers shared by the file-backed repositories.

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so readers never observe a half-written file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_json(path: PathLike, default: Any = None) -> Any:
    """
    Read a JSON document.

    Returns default when the file does not exist. Malformed JSON raises
    ValueError so callers can decide whether to skip or fail.
    """
    file_path = Path(path)
    if not file_path.exists():
        return default
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json_atomic(path: PathLike, data: Any) -> None:
    """Serialize data to path atomically (temp file + rename)."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=str(file_path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, file_path)
    except Exception:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
    logger.debug("Wrote %s", file_path)
