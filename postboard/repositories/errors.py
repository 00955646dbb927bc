"""Error taxonomy for the record store."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by the record store."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StoreError):
    """Raised when a lookup by key finds nothing."""


class AlreadyExists(StoreError):
    """Raised when a create would violate key uniqueness."""


class CorruptStore(StoreError):
    """Raised when the backing document exists but cannot be parsed."""


class StoreIOError(StoreError):
    """Raised when the backing file cannot be read or written."""


class InvalidRecord(StoreError):
    """Raised when a value handed to the store cannot be persisted as-is."""
