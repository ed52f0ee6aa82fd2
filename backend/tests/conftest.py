"""
Archivist Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── clock: Controllable UTC clock for TTL tests
    ├── memory_cache: In-memory AssetCache
    ├── fake_store: Scriptable AssetStore double
    ├── cache_dir: Temporary directory for DiskAssetCache
    ├── sample_record: A complete AssetRecord (PNG bytes + metadata)
    └── test_client: HTTPX AsyncClient wired to the doubles above
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any archivist imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["ASSET_SCHEMA"] = ""  # SQLite has no schemas
os.environ["CACHE_DIR"] = tempfile.mkdtemp(prefix="archivist_test_")
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from archivist.schemas.asset import AssetRecord, CachedAsset  # noqa: E402
from archivist.services.cache_base import AssetCache  # noqa: E402
from archivist.services.store_base import AssetStore  # noqa: E402

# 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class Clock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class InMemoryAssetCache(AssetCache):
    """AssetCache kept in a dict; counts accesses."""

    def __init__(self):
        super().__init__()
        self.entries: Dict[int, CachedAsset] = {}
        self.get_count = 0
        self.put_count = 0

    async def get(self, asset_id: int) -> Optional[CachedAsset]:
        self.get_count += 1
        return self.entries.get(asset_id)

    async def put(self, asset: CachedAsset) -> None:
        self.put_count += 1
        self.entries[asset.id] = asset


class FakeAssetStore(AssetStore):
    """
    AssetStore returning canned records.

    Set `error` to make every fetch raise it; set `healthy` to drive /health.
    """

    def __init__(self):
        self.records: Dict[int, AssetRecord] = {}
        self.error: Optional[Exception] = None
        self.healthy = True
        self.fetch_count = 0

    async def fetch(self, asset_id: int) -> Optional[AssetRecord]:
        self.fetch_count += 1
        if self.error is not None:
            raise self.error
        return self.records.get(asset_id)

    async def health_check(self) -> bool:
        return self.healthy


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def memory_cache():
    return InMemoryAssetCache()


@pytest.fixture
def fake_store():
    return FakeAssetStore()


@pytest.fixture
def cache_dir(tmp_path):
    """
    Provides a temporary directory for DiskAssetCache tests.

    Uses pytest's tmp_path fixture (automatically cleaned up).
    """
    directory = tmp_path / "temp_cache"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_record():
    """A complete row: PNG content, filename, and all five metadata keys."""
    return AssetRecord(
        content=PNG_BYTES,
        filename="scan.png",
        metadata={
            "klassifikation1": "Rechnung",
            "klassifikation2": "Eingang",
            "datum_zuord_ok": "2024-01-15",
            "final_cnt_fk_inp_belege_all": 3,
            "final_cnt_fk_kon_person": 1,
        },
    )


@pytest_asyncio.fixture
async def test_client(memory_cache, fake_store):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to a fresh app whose cache and store
             are replaced by the in-memory doubles.
    How:     ASGITransport with raise_app_exceptions=False so the catch-all
             500 handler's response reaches the test instead of the exception.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from archivist.dependencies import get_asset_cache, get_asset_store
    from archivist.main import create_app

    app = create_app()
    app.dependency_overrides[get_asset_cache] = lambda: memory_cache
    app.dependency_overrides[get_asset_store] = lambda: fake_store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
