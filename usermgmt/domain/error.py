"""Domain layer errors.

Every domain error carries a stable machine-readable ``code`` and a
human-readable ``message``. The interface layer maps codes to HTTP status
codes; nothing below it knows about HTTP.
"""

from datetime import timedelta
from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes exposed to API clients."""

    NO_RECORD_FOUND = "NO_RECORD_FOUND"
    INSERTION_FAILED = "INSERTION_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"
    EMAIL_CONFLICT = "EMAIL_CONFLICT"
    VOTE_COOLDOWN = "VOTE_COOLDOWN"
    VALIDATION_FAILED = "VALIDATION_FAILED"


class DomainError(Exception):
    """Base domain error."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Domain validation error."""

    code = ErrorCode.VALIDATION_FAILED


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist or is soft-deleted."""

    code = ErrorCode.NO_RECORD_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InsertionFailedError(DomainError):
    """Raised when a write that creates data fails at storage."""

    code = ErrorCode.INSERTION_FAILED


class StorageError(DomainError):
    """Raised when a read, save or delete fails at storage."""

    code = ErrorCode.STORAGE_FAILED


class EmailConflictError(DomainError):
    """Raised when an email is already held by another live user."""

    code = ErrorCode.EMAIL_CONFLICT

    def __init__(self, email: str):
        self.email = email
        super().__init__("The email is already occupied by another user")


class VoteCooldownError(DomainError):
    """Raised when a user votes again before the cooldown window elapsed."""

    code = ErrorCode.VOTE_COOLDOWN

    def __init__(self, retry_after: timedelta):
        self.retry_after = retry_after
        seconds = max(int(retry_after.total_seconds()), 0)
        super().__init__(f"Vote cooldown active, retry in {seconds} seconds")
