"""Error taxonomy for user operations.

Every failure a caller can see is a ``UserServiceError`` carrying a fixed,
human-readable message. The API layer maps all of them to a 400 response.
"""

from __future__ import annotations

ERROR_METHOD_NOT_ALLOWED = "method not allowed"
USER_DELETED_MESSAGE = "User deleted successfully"


class UserServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    message: str = "user operation failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.message
        super().__init__(self.message)


# --- Input errors ---
class InvalidUserDataError(UserServiceError):
    message = "invalid user data"


class InvalidEmailError(UserServiceError):
    message = "invalid email"


# --- Business-rule errors ---
class UserAlreadyExistsError(UserServiceError):
    message = "user already exists"


class UserDoesNotExistError(UserServiceError):
    message = "user doesn't exist"


# --- Store errors ---
class StoreError(UserServiceError):
    """Failure talking to, or translating data for, the key-value store."""


class FetchRecordError(StoreError):
    message = "failed to fetch record from store"


class DecodeRecordError(StoreError):
    message = "failed to decode record"


class MarshalItemError(StoreError):
    message = "couldn't marshal the item"


class PutItemError(StoreError):
    message = "could not store put item"


class DeleteItemError(StoreError):
    message = "couldn't delete the item"


class ConditionFailedError(StoreError):
    """A conditional put was rejected by the store."""

    message = "conditional check failed"
