"""
Custom exception hierarchy for the face recognition backend.

Used by repositories, the recognition service and the monitor scheduler.
All errors inherit from FaceWatchError and carry a user-facing message
that API controllers return as the HTTP error detail.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class FaceWatchError(Exception):
    """Base exception for all FaceWatch errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message
        self.details = details or {}


# -----------------------------------------------------------------------------
# Lookup / validation
# -----------------------------------------------------------------------------


class NotFoundError(FaceWatchError):
    """Raised when a gallery entry, monitor, snapshot or camera path does not exist."""
    pass


class InvalidInputError(FaceWatchError):
    """Raised when enrollment data, image bytes, dates or intervals are invalid."""
    pass


# -----------------------------------------------------------------------------
# Capability / IO
# -----------------------------------------------------------------------------


class CapabilityUnavailableError(FaceWatchError):
    """Raised when an operation needs a detector or embedder model that is not loaded."""

    def __init__(self, message: str, capability: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.capability = capability


class TransientIOError(FaceWatchError):
    """Raised for recoverable IO failures (frame fetch, log or config file access)."""

    def __init__(self, message: str, retryable: bool = True, **kwargs):
        super().__init__(message, **kwargs)
        self.retryable = retryable
