"""
Error classes for KV asset lookups and store operations.

Store failures are mapped from HTTP status codes and httpx exceptions so that
callers see one consistent taxonomy regardless of where a request failed.
"""
from __future__ import annotations

from typing import Any, List

MIN_EXPIRATION_TTL = 60


class KVAssetsError(Exception):
    """Base class for all kv-assets errors."""
    pass


class EmptyKeyError(KVAssetsError):
    """
    Request path normalized to an empty key.

    Raised for "" and "/". This is a caller error, never an index miss.
    """

    def __init__(self, message: str = "empty asset key"):
        super().__init__(message)


class DeserializeAssetsError(KVAssetsError):
    """
    Asset index blob could not be decoded.

    Raised when:
    - magic bytes or format version do not match
    - the compressed payload is corrupt
    - the decoded document fails validation
    """
    pass


class KVKeyNotFound(KVAssetsError):
    """
    Store returned a non-success status for a read.

    The store does not tell apart a missing key, an expired key and other
    non-2xx responses, so all of them land here with the status retained.
    """

    def __init__(self, key: str, status_code: int):
        super().__init__(f"KV key not found: {key} (HTTP {status_code})")
        self.key = key
        self.status_code = status_code


class KVHttpError(KVAssetsError):
    """
    Transport failure talking to the store.

    Raised when:
    - connection or timeout errors occur before a response arrives
    - a response body cannot be read or parsed
    """
    pass


class TTLTooShortError(KVAssetsError):
    """Expiration TTL below the store's minimum of 60 seconds."""

    def __init__(self, ttl: int):
        super().__init__(
            f"expiration_ttl must be at least {MIN_EXPIRATION_TTL} seconds, got {ttl}"
        )
        self.ttl = ttl


class KVWriteError(KVAssetsError):
    """Store acknowledged a write with success=false."""

    def __init__(self, key: str, errors: List[Any], messages: List[Any]):
        super().__init__(f"writing key {key}: errors:{errors!r} messages:{messages!r}")
        self.key = key
        self.errors = errors
        self.messages = messages


__all__ = [
    "MIN_EXPIRATION_TTL",
    "KVAssetsError",
    "EmptyKeyError",
    "DeserializeAssetsError",
    "KVKeyNotFound",
    "KVHttpError",
    "TTLTooShortError",
    "KVWriteError",
]
