"""
Settings and configuration for kv-assets.

Centralizes store credentials and HTTP tuning with fail-fast validation.
Settings are loaded from environment variables when a client is constructed.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

__all__ = ["CLOUDFLARE_KV_ENDPOINT", "Settings", "create_settings_from_env"]

CLOUDFLARE_KV_ENDPOINT = "https://api.cloudflare.com/client/v4"


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for the KV store client.

    Store Settings:
        account_id: Account identifier owning the namespace (required)
        namespace_id: KV namespace identifier (required)
        auth_token: Bearer token for the storage API (required)
        api_base: Base URL of the storage API

    HTTP Settings:
        http_timeout_s: HTTP request timeout in seconds
        http_retry: Extra attempts on transport failures (0=single attempt)
    """
    account_id: str
    namespace_id: str
    auth_token: str = field(repr=False)
    api_base: str = CLOUDFLARE_KV_ENDPOINT
    http_timeout_s: float = 30.0
    http_retry: int = 0

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.account_id:
            raise ValueError("account_id is required")
        if not self.namespace_id:
            raise ValueError("namespace_id is required")
        if not self.auth_token:
            raise ValueError("auth_token is required")

        # Identifiers are interpolated into URL paths
        for name in ("account_id", "namespace_id"):
            if "/" in getattr(self, name):
                raise ValueError(f"{name} must not contain '/'")

        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not self.api_base or not re.match(url_pattern, self.api_base):
            raise ValueError(f"Invalid api_base format: {self.api_base}")

        if self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")

        if self.http_retry < 0:
            raise ValueError(f"http_retry must be non-negative, got {self.http_retry}")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - KV_ASSETS_ACCOUNT_ID (required)
        - KV_ASSETS_NAMESPACE_ID (required)
        - KV_ASSETS_AUTH_TOKEN (required)
        - KV_ASSETS_API_BASE (default: Cloudflare v4 API)
        - KV_ASSETS_HTTP_TIMEOUT (default: 30.0)
        - KV_ASSETS_HTTP_RETRY (default: 0)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid or required values missing

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        return int(value) if value else default

    required = {}
    for name in ("ACCOUNT_ID", "NAMESPACE_ID", "AUTH_TOKEN"):
        env_key = f"KV_ASSETS_{name}"
        value = os.getenv(env_key)
        if not value:
            raise ValueError(f"{env_key} environment variable is required")
        required[name.lower()] = value

    return Settings(
        account_id=required["account_id"],
        namespace_id=required["namespace_id"],
        auth_token=required["auth_token"],
        api_base=os.getenv("KV_ASSETS_API_BASE") or CLOUDFLARE_KV_ENDPOINT,
        http_timeout_s=get_float("KV_ASSETS_HTTP_TIMEOUT", 30.0),
        http_retry=get_int("KV_ASSETS_HTTP_RETRY", 0),
    )
