"""
CLI Context for managing application dependencies.

Holds the settings and lazily-created store objects for one CLI invocation.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from .assets import KVAssets
from .settings import Settings, create_settings_from_env
from .storage.kv_client import KVStoreClient


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    The transport is only set by tests, which pass an httpx.MockTransport.
    """
    settings: Settings
    transport: Optional[httpx.BaseTransport] = None
    _client: Optional[KVStoreClient] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        """Create CLI context from environment variables."""
        return cls(settings=create_settings_from_env())

    @property
    def client(self) -> KVStoreClient:
        """Store client, created on first access and reused afterwards."""
        if self._client is None:
            self._client = KVStoreClient.from_settings(self.settings, transport=self.transport)
        return self._client

    def assets(self, index_file: Path) -> KVAssets:
        """Resolver over the index stored in index_file, sharing this context's client."""
        return KVAssets(
            index_file.read_bytes(),
            self.settings.account_id,
            self.settings.namespace_id,
            self.settings.auth_token,
            client=self.client,
        )

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None
