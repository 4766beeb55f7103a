"""Translation of domain exceptions into HTTP errors."""

# Standard library imports
import logging

# External package imports
from fastapi import HTTPException, status

# Local application imports
from ...core.exceptions import (
    CapabilityUnavailableError,
    FaceWatchError,
    InvalidInputError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (CapabilityUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exception: FaceWatchError) -> HTTPException:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exception, error_type):
            logger.warning("%s %d: %s", exception.__class__.__name__, status_code, exception.message)
            return HTTPException(status_code=status_code, detail=exception.user_message)
    logger.error(f"Unhandled application error: {exception.message}", exc_info=exception)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=exception.user_message,
    )
