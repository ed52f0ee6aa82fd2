"""
Archivist Backend - Disk Asset Cache
======================================

What:  File-system cache of CachedAsset records, surviving process restarts.
How:   One JSON file per asset id (`image_<id>.cache`) holding the URL-safe base64
       content, filename, metadata, and write timestamp. Writes go to a
       temporary file in the same directory and are renamed over the entry.
Who:   Created once by archivist.dependencies; used by AssetService.
When:  Read on every asset request, written after every store fetch.

Failure Policy:
    The cache is an optimization. Every read error degrades to "absent"
    and every write error is logged and dropped, so a broken cache
    directory costs a database round trip per request and nothing more.

Directory Structure:
    temp_cache/
    ├── image_17.cache
    ├── image_18.cache
    └── image_4711.cache
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from archivist.schemas.asset import CachedAsset
from archivist.services.cache_base import AssetCache

logger = logging.getLogger(__name__)


class DiskAssetCache(AssetCache):
    """
    Disk-backed AssetCache.

    Concurrency:
        Two requests missing on the same id may both write the entry; the
        last rename wins and both wrote the same store content. Readers
        never observe a half-written entry because of the rename.
    """

    FILE_PATTERN = "image_{asset_id}.cache"

    def __init__(self, cache_dir: str):
        super().__init__()
        self.cache_dir = Path(cache_dir).resolve()
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Not fatal: put() retries the mkdir and fails softly on its own
            logger.warning("Cache directory %s is not usable: %s", self.cache_dir, str(e))
        logger.info("DiskAssetCache initialized with cache_dir=%s", self.cache_dir)

    def path_for(self, asset_id: int) -> Path:
        """Deterministic cache file path for an asset id."""
        return self.cache_dir / self.FILE_PATTERN.format(asset_id=asset_id)

    async def get(self, asset_id: int) -> Optional[CachedAsset]:
        path = self.path_for(asset_id)

        try:
            async with aiofiles.open(path, "rb") as f:
                raw = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            self._record_read_error(asset_id, path, e)
            return None

        try:
            asset = CachedAsset.model_validate_json(raw)
        except ValueError as e:
            # Truncated file, invalid JSON, bad base64, missing fields
            self._record_read_error(asset_id, path, e)
            return None

        if asset.id != asset_id:
            self._record_read_error(
                asset_id, path, ValueError(f"entry belongs to asset {asset.id}")
            )
            return None

        return asset

    async def put(self, asset: CachedAsset) -> None:
        path = self.path_for(asset.id)
        tmp_path = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")

        try:
            payload = asset.model_dump_json().encode("utf-8")
            await aiofiles.os.makedirs(self.cache_dir, exist_ok=True)
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            self.stats.write_errors += 1
            logger.warning(
                "Cache write failed for asset %d at %s: %s",
                asset.id,
                path.name,
                str(e),
                extra={
                    "asset_id": asset.id,
                    "cache_event": "write_error",
                    "error_type": type(e).__name__,
                },
            )
            await self._discard(tmp_path)
            return

        logger.debug("Cached asset %d (%d bytes) at %s", asset.id, len(asset.content), path.name)

    def _record_read_error(self, asset_id: int, path: Path, error: Exception) -> None:
        self.stats.read_errors += 1
        logger.warning(
            "Ignoring unreadable cache entry %s: %s",
            path.name,
            str(error),
            extra={
                "asset_id": asset_id,
                "cache_event": "read_error",
                "error_type": type(error).__name__,
            },
        )

    async def _discard(self, path: Path) -> None:
        """Best-effort removal of a leftover temporary file."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug("Could not remove temporary cache file %s: %s", path.name, str(e))
