"""
Archivist Backend - Asset Service Unit Tests
==============================================

What:  Tests for AssetService (id validation, TTL, cache fallback).
How:   In-memory cache, fake store, and a hand-driven clock. No database.

What we test:
    ✅ Malformed ids rejected before the cache or store is touched
    ✅ Fresh cache hit never reaches the store
    ✅ Miss and expiry both fetch once and repopulate the cache
    ✅ Not found / invalid data leave the cache untouched
    ✅ Store errors propagate unchanged
    ✅ A corrupt or unwritable disk cache degrades to store reads
"""

from datetime import timedelta

import pytest

from archivist.exceptions import (
    DatabaseError,
    InvalidDataError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from archivist.schemas.asset import AssetRecord, CachedAsset
from archivist.services.asset_service import (
    CACHE_TTL_SECONDS,
    MAX_ASSET_ID,
    AssetService,
    parse_asset_id,
)
from archivist.services.disk_cache import DiskAssetCache


class TestParseAssetId:
    """Tests for URL id validation."""

    @pytest.mark.parametrize("raw, expected", [
        ("0", 0),
        ("7", 7),
        ("007", 7),
        (str(MAX_ASSET_ID), MAX_ASSET_ID),
    ])
    def test_accepts_non_negative_integers(self, raw, expected):
        assert parse_asset_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc", "-1", "1.5", "", " 7", "7 ", "1e3", "+7", "٣", "²",
    ])
    def test_rejects_malformed_ids(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_asset_id(raw)
        assert exc_info.value.field == "id"

    def test_rejects_ids_beyond_bigint(self):
        with pytest.raises(ValidationError, match="out of range"):
            parse_asset_id(str(MAX_ASSET_ID + 1))


class TestAssetServiceCaching:
    """Tests for the read-through cache behavior."""

    @pytest.fixture(autouse=True)
    def _service(self, memory_cache, fake_store, clock, sample_record):
        fake_store.records[7] = sample_record
        self.cache = memory_cache
        self.store = fake_store
        self.clock = clock
        self.service = AssetService(cache=memory_cache, store=fake_store, clock=clock)

    def _cached(self, asset_id=7, age_seconds=0, filename="cached.png"):
        return CachedAsset(
            id=asset_id,
            content=b"cached bytes",
            filename=filename,
            metadata={"klassifikation1": "Alt"},
            written_at=self.clock.now - timedelta(seconds=age_seconds),
        )

    @pytest.mark.asyncio
    async def test_fresh_hit_skips_store(self):
        self.cache.entries[7] = self._cached(age_seconds=10)

        asset = await self.service.get_asset("7")

        assert asset.filename == "cached.png"
        assert self.store.fetch_count == 0
        assert self.cache.put_count == 0
        assert self.cache.stats.hits == 1

    @pytest.mark.asyncio
    async def test_miss_fetches_and_populates(self, sample_record):
        asset = await self.service.get_asset("7")

        assert asset.content == sample_record.content
        assert asset.filename == "scan.png"
        assert asset.metadata == sample_record.metadata
        assert self.store.fetch_count == 1
        assert self.cache.entries[7].written_at == self.clock.now
        assert self.cache.stats.misses == 1

    @pytest.mark.asyncio
    async def test_second_request_within_ttl_is_served_from_cache(self):
        await self.service.get_asset("7")
        self.clock.advance(CACHE_TTL_SECONDS - 1)
        await self.service.get_asset("7")

        assert self.store.fetch_count == 1
        assert self.cache.stats.hits == 1

    @pytest.mark.asyncio
    async def test_entry_expires_at_exactly_ttl(self):
        self.cache.entries[7] = self._cached(age_seconds=CACHE_TTL_SECONDS)

        asset = await self.service.get_asset("7")

        assert asset.filename == "scan.png"
        assert self.store.fetch_count == 1
        assert self.cache.stats.stale == 1
        assert self.cache.entries[7].written_at == self.clock.now

    @pytest.mark.asyncio
    async def test_entry_from_the_future_is_stale(self):
        self.cache.entries[7] = self._cached(age_seconds=-60)

        await self.service.get_asset("7")

        assert self.store.fetch_count == 1

    @pytest.mark.asyncio
    async def test_leading_zeros_share_the_cache_entry(self):
        await self.service.get_asset("7")
        await self.service.get_asset("0007")

        assert self.store.fetch_count == 1

    @pytest.mark.asyncio
    async def test_custom_ttl(self, memory_cache, fake_store, clock):
        service = AssetService(cache=memory_cache, store=fake_store, ttl_seconds=60, clock=clock)
        self.cache.entries[7] = self._cached(age_seconds=61)

        await service.get_asset("7")

        assert fake_store.fetch_count == 1


class TestAssetServiceErrors:
    """Tests for the failure paths."""

    @pytest.fixture(autouse=True)
    def _service(self, memory_cache, fake_store, clock):
        self.cache = memory_cache
        self.store = fake_store
        self.service = AssetService(cache=memory_cache, store=fake_store, clock=clock)

    @pytest.mark.asyncio
    async def test_malformed_id_touches_nothing(self):
        with pytest.raises(ValidationError):
            await self.service.get_asset("abc")

        assert self.cache.get_count == 0
        assert self.store.fetch_count == 0

    @pytest.mark.asyncio
    async def test_missing_row_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_asset("404")

        assert exc_info.value.context["resource_id"] == "404"
        assert self.cache.entries == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("record", [
        AssetRecord(content=None, filename="scan.png"),
        AssetRecord(content=b"", filename="scan.png"),
        AssetRecord(content=b"data", filename=None),
        AssetRecord(content=b"data", filename=""),
    ])
    async def test_incomplete_row_raises_invalid_data(self, record):
        self.store.records[9] = record

        with pytest.raises(InvalidDataError):
            await self.service.get_asset("9")

        assert self.cache.entries == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        StoreUnavailableError(retry_after=30),
        DatabaseError(message="Image retrieval failed"),
    ])
    async def test_store_errors_propagate(self, error):
        self.store.error = error

        with pytest.raises(type(error)):
            await self.service.get_asset("7")

        assert self.cache.put_count == 0


class TestAssetServiceWithDiskCache:
    """Tests for cache failures degrading to store reads."""

    @pytest.mark.asyncio
    async def test_corrupt_entry_falls_back_to_store(self, cache_dir, fake_store, clock, sample_record):
        fake_store.records[7] = sample_record
        cache = DiskAssetCache(str(cache_dir))
        cache.path_for(7).write_bytes(b'{"id": 7, "content": "trunc')
        service = AssetService(cache=cache, store=fake_store, clock=clock)

        asset = await service.get_asset("7")

        assert asset.content == sample_record.content
        assert fake_store.fetch_count == 1
        assert cache.stats.read_errors == 1
        # Entry was rewritten and is readable again
        assert (await cache.get(7)).filename == "scan.png"

    @pytest.mark.asyncio
    async def test_unwritable_cache_still_serves(self, tmp_path, fake_store, clock, sample_record):
        fake_store.records[7] = sample_record
        blocker = tmp_path / "not_a_directory"
        blocker.write_text("occupied")
        cache = DiskAssetCache(str(blocker))
        service = AssetService(cache=cache, store=fake_store, clock=clock)

        first = await service.get_asset("7")
        second = await service.get_asset("7")

        assert first.content == second.content == sample_record.content
        assert fake_store.fetch_count == 2
        assert cache.stats.write_errors == 2
