"""
Static asset resolver backed by KV storage.

KVAssets turns a request path into a storage key through a precomputed index
and fetches the bytes from the store. The index blob is only decoded the first
time a lookup needs it, so requests that never touch static assets pay nothing.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional, Union

import httpx

from .errors import EmptyKeyError
from .index_codec import deserialize_index
from .models import AssetIndex, AssetMetadata
from .settings import Settings
from .storage.kv_client import KVStoreClient

__all__ = ["KVAssets", "normalize_path"]

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """
    Remove exactly one leading '/' from a request path.

    Raises:
        EmptyKeyError: If nothing is left
    """
    if path.startswith("/"):
        path = path[1:]
    if not path:
        raise EmptyKeyError()
    return path


class KVAssets:
    """
    Serves static assets out of KV storage.

    Safe to share between threads. The decoded index is stored once and never
    replaced; a failed decode leaves the resolver unloaded so the next lookup
    tries again.
    """

    def __init__(self, index: bytes, account_id: str, namespace_id: str, auth_token: str, *,
                 client: Optional[KVStoreClient] = None):
        """
        Initialize resolver. No I/O and no index decoding happen here.

        Args:
            index: Binary serialized index (see index_codec)
            account_id: Account owning the namespace
            namespace_id: KV namespace holding the assets
            auth_token: Bearer token for the storage API
            client: Store client to use instead of one built from the credentials.
                The caller keeps ownership; close() leaves it open.
        """
        self._index_blob = bytes(index)
        self.account_id = account_id
        self.namespace_id = namespace_id
        self._owns_client = client is None
        self._client = client or KVStoreClient(account_id, namespace_id, auth_token)
        self._index: Optional[AssetIndex] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, index: bytes, settings: Settings, *,
                      transport: Optional[httpx.BaseTransport] = None) -> KVAssets:
        """Build a resolver and its store client from settings."""
        client = KVStoreClient.from_settings(settings, transport=transport)
        assets = cls(
            index,
            settings.account_id,
            settings.namespace_id,
            settings.auth_token,
            client=client,
        )
        assets._owns_client = True
        return assets

    @property
    def client(self) -> KVStoreClient:
        return self._client

    @property
    def index_loaded(self) -> bool:
        return self._index is not None

    def ensure_index(self) -> AssetIndex:
        """
        Decode the index blob if that has not happened yet.

        Raises:
            DeserializeAssetsError: Blob is malformed; not remembered, so the
                next call decodes again
        """
        index = self._index
        if index is None:
            with self._lock:
                index = self._index
                if index is None:
                    index = deserialize_index(self._index_blob)
                    self._index = index
                    logger.debug(f"Asset index loaded ({len(index)} entries)")
        return index

    def lookup_key(self, path: str) -> Optional[AssetMetadata]:
        """
        Find path in the index without contacting the store.

        A single leading '/' is ignored, so "/a/b" and "a/b" are the same key.

        Returns:
            Metadata for the asset, or None if the index has no such path

        Raises:
            EmptyKeyError: Path is "" or "/"
            DeserializeAssetsError: Index blob cannot be decoded
        """
        key = normalize_path(path)
        return self.ensure_index().get(key)

    def get_asset(self, path: str) -> Optional[bytes]:
        """
        Look up path and fetch its bytes from the store.

        Returns None only when the index has no entry. If the index has one but
        the store does not, the store error propagates: the index is stale or
        the value expired.
        """
        md = self.lookup_key(path)
        if md is None:
            return None
        return self.get_kv_value(md.path)

    def get_kv_value(self, key: str) -> bytes:
        """
        Fetch a raw value from the store.

        Raises:
            KVKeyNotFound: Key deleted, expired, or other non-success status
            KVHttpError: Transport failure
        """
        return self._client.get_value(key)

    def put_kv_value(self, key: str, value: Union[bytes, str],
                     expiration_ttl: Optional[int] = None) -> None:
        """
        Store a value. expiration_ttl, in seconds, must be at least 60.

        Raises:
            TTLTooShortError: TTL below 60; no request is made
            KVHttpError: Transport failure or unparsable acknowledgment
            KVWriteError: Store rejected the write
        """
        self._client.put_value(key, value, expiration_ttl)

    def close(self):
        """Close the store client if this resolver created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
