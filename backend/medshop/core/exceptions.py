"""
Domain exceptions and their HTTP translation.

The core raises the PharmacyError family. The HTTP layer converts them
with BusinessError so that internal details are logged, not returned.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class PharmacyError(Exception):
    """Base class for errors raised by the pharmacy core."""


class CorruptStateError(PharmacyError):
    """A persisted collection could not be parsed or validated."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        super().__init__(f"Collection '{key}' is corrupt: {reason}" if reason else f"Collection '{key}' is corrupt")


class RecordNotFoundError(PharmacyError):
    """Raised by strict-mode updates when no record matches the id."""

    def __init__(self, key: str, record_id: str):
        self.key = key
        self.record_id = record_id
        super().__init__(f"No record with id {record_id} in '{key}'")


class InvalidStatusTransitionError(PharmacyError):
    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move purchase order from '{current}' to '{requested}'")


class DuplicateUsernameError(PharmacyError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' is already taken")


class BusinessError:
    """HTTP exceptions with safe (non-leaky) messages."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        if reason:
            logger.warning(f"Not found: {resource} - {reason}")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """
        Generic 401 for all authentication failures.

        Same response for wrong password and unknown username.
        """
        logger.warning(f"Unauthorized access attempt: {reason}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed",
        )

    @staticmethod
    def forbidden(reason: str = "") -> HTTPException:
        """Generic 403 for role checks."""
        logger.warning(f"Forbidden access: {reason}")
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied",
        )

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def conflict(detail: str) -> HTTPException:
        logger.info(f"Conflict: {detail}")
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """Generic 500. Logs the actual error, hides it from the caller."""
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=original_error,
            )
        else:
            logger.error("Internal server error occurred")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred. Please try again later.",
        )

    @classmethod
    def from_domain(cls, error: PharmacyError) -> HTTPException:
        if isinstance(error, RecordNotFoundError):
            return cls.not_found("Record", str(error))
        if isinstance(error, InvalidStatusTransitionError):
            return cls.bad_request(str(error))
        if isinstance(error, DuplicateUsernameError):
            return cls.conflict(str(error))
        return cls.server_error(error)
