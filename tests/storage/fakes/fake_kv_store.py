"""
Fake KV storage API for testing.

Serves the value endpoints of one namespace from memory through an
httpx.MockTransport, so the real KVStoreClient code path is exercised end to
end without network access.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

__all__ = ["FakeKVStore"]


class FakeKVStore:
    """
    In-memory KV namespace speaking the storage REST API.

    This is a test double; not for production use.
    """

    def __init__(self, account_id: str = "acct", namespace_id: str = "ns",
                 auth_token: str = "token") -> None:
        self.auth_token = auth_token
        self.prefix = f"/client/v4/accounts/{account_id}/storage/kv/namespaces/{namespace_id}/values/"
        self.values: Dict[str, bytes] = {}
        self.ttls: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

        # Failure injection
        self.connect_failures = 0
        self.get_status: Optional[int] = None
        self.write_errors: Optional[List[Any]] = None
        self.write_body: Optional[bytes] = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.connect_failures > 0:
            self.connect_failures -= 1
            raise httpx.ConnectError("connection refused", request=request)

        if request.headers.get("Authorization") != f"Bearer {self.auth_token}":
            return httpx.Response(401, json=_ack(False, errors=[{"code": 10000, "message": "Authentication error"}]))

        path = request.url.path
        if not path.startswith(self.prefix):
            return httpx.Response(404, json=_ack(False, errors=[{"code": 7003, "message": "No route"}]))
        key = path[len(self.prefix):]

        if request.method == "GET":
            return self._get(key)
        if request.method == "PUT":
            return self._put(key, request)
        return httpx.Response(405)

    def _get(self, key: str) -> httpx.Response:
        if self.get_status is not None:
            return httpx.Response(self.get_status, text="injected failure")
        if key not in self.values:
            return httpx.Response(404, json=_ack(False, errors=[{"code": 10009, "message": "get: 'key not found'"}]))
        return httpx.Response(200, content=self.values[key])

    def _put(self, key: str, request: httpx.Request) -> httpx.Response:
        if self.write_body is not None:
            return httpx.Response(502, content=self.write_body)
        if self.write_errors is not None:
            return httpx.Response(200, json=_ack(False, errors=self.write_errors, messages=["write rejected"]))

        self.values[key] = request.content
        ttl = request.url.params.get("expiration_ttl")
        if ttl is not None:
            self.ttls[key] = int(ttl)
        return httpx.Response(200, json=_ack(True))

    def expire(self, key: str) -> None:
        """Drop a value the way TTL expiry would (test utility)."""
        self.values.pop(key, None)
        self.ttls.pop(key, None)


def _ack(success: bool, errors: Optional[List[Any]] = None,
         messages: Optional[List[Any]] = None) -> Dict[str, Any]:
    return {"success": success, "errors": errors or [], "messages": messages or []}
