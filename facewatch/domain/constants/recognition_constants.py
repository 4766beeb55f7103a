"""
Shared constants for face recognition.

Used by the matcher, the monitoring scheduler, the storage repositories
and the API controllers. Single place for easier updates.
"""

# -----------------------------------------------------------------------------
# Identities
# -----------------------------------------------------------------------------
UNKNOWN_IDENTITY = "Unknown"
ALL_CAMERAS = "all"

# -----------------------------------------------------------------------------
# Thresholds (runtime setters clamp into [MIN_THRESHOLD, MAX_THRESHOLD])
# -----------------------------------------------------------------------------
MIN_THRESHOLD = 0.3
MAX_THRESHOLD = 0.9
DEFAULT_RECOGNITION_THRESHOLD = 0.7
DEFAULT_DETECTION_CONFIDENCE = 0.5
DEFAULT_NMS_THRESHOLD = 0.4

# -----------------------------------------------------------------------------
# Model input geometry
# -----------------------------------------------------------------------------
DETECTOR_INPUT_SIZE = 640
EMBEDDER_INPUT_SIZE = 112

# -----------------------------------------------------------------------------
# Monitoring
# -----------------------------------------------------------------------------
MIN_MONITOR_INTERVAL_MS = 100
DEFAULT_MONITOR_INTERVAL_MS = 5000

# -----------------------------------------------------------------------------
# Snapshots / uploads
# -----------------------------------------------------------------------------
SNAPSHOT_EXTENSION = ".jpg"
ALLOWED_IMAGE_MIME = frozenset({"image/jpeg", "image/png", "image/webp", "image/bmp"})


def clamp_threshold(value: float) -> float:
    """Clamp a threshold into [MIN_THRESHOLD, MAX_THRESHOLD]."""
    return max(MIN_THRESHOLD, min(MAX_THRESHOLD, float(value)))
