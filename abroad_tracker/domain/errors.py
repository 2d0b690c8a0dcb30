from __future__ import annotations


class TrackerError(Exception):
    """Base class for errors raised by the tracker core."""


class StorageReadFailure(TrackerError):
    """
    Persisted value could not be decoded.
    Stores recover from it locally by returning the caller's fallback.
    """

    def __init__(self, key: str, reason: str):
        super().__init__(f"cannot decode stored value for {key!r}: {reason}")
        self.key = key
        self.reason = reason


class SchemaError(TrackerError):
    """A persisted record does not match its schema and was rejected."""


class ValidationFailure(TrackerError):
    """Required input is missing or malformed; nothing was written."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field
