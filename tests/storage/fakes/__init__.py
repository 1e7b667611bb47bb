"""Test doubles for the KV storage API."""
from .fake_kv_store import FakeKVStore

__all__ = ["FakeKVStore"]
