"""
HTTP client for the KV storage REST API.

Reads and writes raw values in one namespace with Bearer token auth. Every
non-2xx read is reported as KVKeyNotFound because the API does not separate a
missing key from an expired one; transport problems become KVHttpError.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

import httpx
from pydantic import ValidationError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import MIN_EXPIRATION_TTL, KVHttpError, KVKeyNotFound, KVWriteError, TTLTooShortError
from ..models import WriteKVResponse
from ..settings import CLOUDFLARE_KV_ENDPOINT, Settings

__all__ = ["KVStoreClient"]

logger = logging.getLogger(__name__)


class KVStoreClient:
    """
    Raw value access for a single KV namespace.

    One httpx.Client is shared by all calls; it is safe to use from several
    threads. Each call is a single attempt unless retries are configured, and
    only transport failures are ever retried.
    """

    def __init__(self, account_id: str, namespace_id: str, auth_token: str, *,
                 base_url: str = CLOUDFLARE_KV_ENDPOINT, timeout_s: float = 30.0,
                 retries: int = 0, transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize store client. Performs no network I/O.

        Args:
            account_id: Account owning the namespace
            namespace_id: KV namespace identifier
            auth_token: Bearer token for the storage API
            base_url: Storage API base URL
            timeout_s: Timeout applied to connect, read, write and pool waits
            retries: Extra attempts for transport failures
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.account_id = account_id
        self.namespace_id = namespace_id
        self._auth_token = auth_token
        self.base_url = base_url.rstrip("/")
        self.retries = retries

        self.client = httpx.Client(
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
            headers={"User-Agent": "kv-assets/0.1.0"}
        )

    @classmethod
    def from_settings(cls, settings: Settings, *,
                      transport: Optional[httpx.BaseTransport] = None) -> KVStoreClient:
        """Build a client from validated settings."""
        return cls(
            settings.account_id,
            settings.namespace_id,
            settings.auth_token,
            base_url=settings.api_base,
            timeout_s=settings.http_timeout_s,
            retries=settings.http_retry,
            transport=transport,
        )

    def value_url(self, key: str) -> str:
        """URL of the value endpoint for key. The key is used as given."""
        return (
            f"{self.base_url}/accounts/{self.account_id}"
            f"/storage/kv/namespaces/{self.namespace_id}/values/{key}"
        )

    def get_value(self, key: str) -> bytes:
        """
        Fetch the raw value stored under key.

        If key came from an index lookup but the value is missing, the value
        was deleted, expired via TTL, or the index is out of date.

        Raises:
            KVKeyNotFound: Store answered with a non-success status
            KVHttpError: Request failed before a response was received
        """
        try:
            response = self._request("GET", self.value_url(key))
        except httpx.HTTPError as e:
            raise KVHttpError(f"Network error fetching key {key}: {e}") from e

        if not response.is_success:
            raise KVKeyNotFound(key, response.status_code)
        return response.content

    def put_value(self, key: str, value: Union[bytes, str],
                  expiration_ttl: Optional[int] = None) -> None:
        """
        Store value under key.

        Args:
            key: Storage key
            value: Request body
            expiration_ttl: Seconds until the store deletes the value (>= 60)

        Raises:
            TTLTooShortError: expiration_ttl below 60; nothing is sent
            KVHttpError: Transport failure or unparsable acknowledgment
            KVWriteError: Store rejected the write
        """
        params = None
        if expiration_ttl is not None:
            if expiration_ttl < MIN_EXPIRATION_TTL:
                raise TTLTooShortError(expiration_ttl)
            params = {"expiration_ttl": expiration_ttl}

        try:
            response = self._request("PUT", self.value_url(key), content=value, params=params)
        except httpx.HTTPError as e:
            raise KVHttpError(f"Network error writing key {key}: {e}") from e

        try:
            ack = WriteKVResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise KVHttpError(
                f"Unexpected write response for key {key} (HTTP {response.status_code}): {e}"
            ) from e

        if not ack.success:
            raise KVWriteError(key, ack.errors, ack.messages)

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one authenticated request, retrying transport errors if configured."""
        headers = {"Authorization": f"Bearer {self._auth_token}"}
        retrying = Retrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_exponential(multiplier=0.5, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                response = self.client.request(method, url, headers=headers, **kwargs)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
