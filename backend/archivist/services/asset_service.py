"""
Archivist Backend - Asset Service (Retrieval Orchestrator)
============================================================

What:  Turns an asset id from the URL into a CachedAsset, using the disk
       cache when it holds a fresh entry and the asset store otherwise.
How:   Composes an AssetCache and an AssetStore handed in by the caller.
Who:   Called by the asset route handlers (JSON and raw variants).
When:  Once per asset request.

Retrieval Flow:
    ┌──────────┐    ┌─────────────┐  fresh  ┌──────────────┐
    │ Validate │───▶│ Cache get() │────────▶│ Return entry │
    │    id    │    └─────────────┘         └──────────────┘
    └──────────┘          │ miss / stale
                          ▼
                   ┌─────────────┐    ┌─────────────┐    ┌──────────────┐
                   │ Store fetch │───▶│ Cache put() │───▶│ Return entry │
                   └─────────────┘    └─────────────┘    └──────────────┘

    Failure at each step:
    - Malformed id     → ValidationError (400), no cache or store access
    - No row           → NotFoundError (404)
    - Empty content    → InvalidDataError (404)
    - Store outage     → StoreUnavailableError (503), raised by the store
    - Cache problems   → never surface; the cache degrades to a miss
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from archivist.exceptions import InvalidDataError, NotFoundError, ValidationError
from archivist.schemas.asset import CachedAsset
from archivist.services.cache_base import AssetCache
from archivist.services.store_base import AssetStore

logger = logging.getLogger(__name__)

# Freshness window of a cache entry
CACHE_TTL_SECONDS = 3600

# ASCII digits only; str.isdigit() would also accept "²" or Arabic-Indic digits
_ASSET_ID_PATTERN = re.compile(r"[0-9]+")

# Upper bound of a PostgreSQL bigint primary key
MAX_ASSET_ID = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_asset_id(raw: str) -> int:
    """
    Validate an asset id taken from the URL.

    Raises:
        ValidationError: `raw` is not a non-negative integer within bigint range.
    """
    if raw is None or not _ASSET_ID_PATTERN.fullmatch(raw):
        raise ValidationError(
            message="Invalid asset ID. ID must be a positive integer",
            field="id",
            context={"value": raw},
        )
    asset_id = int(raw)
    if asset_id > MAX_ASSET_ID:
        raise ValidationError(
            message="Invalid asset ID. ID is out of range",
            field="id",
            context={"value": raw, "max": MAX_ASSET_ID},
        )
    return asset_id


class AssetService:
    """
    Read-through cache in front of the asset store.

    Both collaborators are injected; the service keeps no state of its own
    besides the TTL and the clock, so one instance per request is cheap.
    """

    def __init__(
        self,
        cache: AssetCache,
        store: AssetStore,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.cache = cache
        self.store = store
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or utcnow

    def is_fresh(self, asset: CachedAsset, now: datetime) -> bool:
        """
        An entry is usable while 0 <= age < TTL.

        A timestamp in the future (clock moved backwards) counts as stale.
        """
        age = now - asset.written_at
        return timedelta(0) <= age < self.ttl

    async def get_asset(self, raw_id: str) -> CachedAsset:
        """
        Resolve an asset id to its content, filename, and metadata.

        Args:
            raw_id: The id exactly as it appeared in the URL path.

        Returns:
            CachedAsset, either the fresh cache entry or a newly fetched one.

        Raises:
            ValidationError: Malformed id (→ 400)
            NotFoundError: No row with this id (→ 404)
            InvalidDataError: Row has no content or no filename (→ 404)
            StoreUnavailableError: Database unreachable (→ 503)
            DatabaseError: Query failed (→ 500)
        """
        asset_id = parse_asset_id(raw_id)

        # ── Step 1: Cache lookup ──────────────────────────────────────────
        cached = await self.cache.get(asset_id)
        if cached is not None:
            if self.is_fresh(cached, self._clock()):
                self.cache.stats.hits += 1
                logger.debug(
                    "Cache hit for asset %d",
                    asset_id,
                    extra={"asset_id": asset_id, "cache_event": "hit"},
                )
                return cached
            self.cache.stats.stale += 1
            logger.info(
                "Cache entry for asset %d expired (written %s), re-fetching",
                asset_id,
                cached.written_at.isoformat(),
                extra={"asset_id": asset_id, "cache_event": "stale"},
            )
        else:
            self.cache.stats.misses += 1
            logger.debug(
                "Cache miss for asset %d",
                asset_id,
                extra={"asset_id": asset_id, "cache_event": "miss"},
            )

        # ── Step 2: Store fetch ───────────────────────────────────────────
        record = await self.store.fetch(asset_id)
        if record is None:
            raise NotFoundError(resource="image", resource_id=str(asset_id))

        if not record.content or not record.filename:
            raise InvalidDataError(
                message="Invalid image data. File content or filename missing",
                context={
                    "asset_id": asset_id,
                    "has_content": bool(record.content),
                    "has_filename": bool(record.filename),
                },
            )

        # ── Step 3: Repopulate cache (best-effort) ────────────────────────
        asset = CachedAsset(
            id=asset_id,
            content=record.content,
            filename=record.filename,
            metadata=record.metadata,
            written_at=self._clock(),
        )
        await self.cache.put(asset)

        logger.info(
            "Fetched asset %d from store: %s (%d bytes)",
            asset_id,
            asset.filename,
            len(asset.content),
        )
        return asset
