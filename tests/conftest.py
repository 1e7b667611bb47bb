"""Root pytest configuration for kv-assets tests."""
import pytest

from kv_assets.assets import KVAssets
from kv_assets.index_codec import serialize_index
from kv_assets.models import AssetMetadata
from kv_assets.settings import Settings
from kv_assets.storage.kv_client import KVStoreClient

from tests.storage.fakes import FakeKVStore


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically set up test environment variables."""
    monkeypatch.setenv("KV_ASSETS_ACCOUNT_ID", "acct")
    monkeypatch.setenv("KV_ASSETS_NAMESPACE_ID", "ns")
    monkeypatch.setenv("KV_ASSETS_AUTH_TOKEN", "token")
    for name in ("KV_ASSETS_API_BASE", "KV_ASSETS_HTTP_TIMEOUT", "KV_ASSETS_HTTP_RETRY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(account_id="acct", namespace_id="ns", auth_token="token")


@pytest.fixture
def md_ab():
    return AssetMetadata(path="a/b.txt", modified=10000, size=10)


@pytest.fixture
def md_b():
    return AssetMetadata(path="b", modified=20000, size=20)


@pytest.fixture
def md_c():
    return AssetMetadata(path="c.json", modified=30000, size=30)


@pytest.fixture
def sample_index(md_ab, md_b, md_c):
    """Small index with a nested path."""
    return {"a/b": md_ab, "b": md_b, "c.json": md_c}


@pytest.fixture
def index_blob(sample_index):
    return serialize_index(sample_index)


@pytest.fixture
def kv_store():
    """Fake KV namespace matching the settings fixture."""
    return FakeKVStore(account_id="acct", namespace_id="ns", auth_token="token")


@pytest.fixture
def client(settings, kv_store):
    """Store client wired to the fake namespace."""
    client = KVStoreClient.from_settings(settings, transport=kv_store.transport)
    yield client
    client.close()


@pytest.fixture
def assets(index_blob, client):
    """Resolver over sample_index backed by the fake namespace."""
    return KVAssets(index_blob, "acct", "ns", "token", client=client)
