"""
Archivist Backend - Abstract Asset Cache Interface
====================================================

What:  Abstract base class for the cache that sits in front of the asset store.
How:   DiskAssetCache implements it on the local file system; tests use an
       in-memory implementation. AssetService receives one through FastAPI
       dependency injection and never touches a module-level cache.

Contract:
    - get() returns whatever is stored, fresh or not. Freshness is judged by
      AssetService against the TTL.
    - get() never raises. An unreadable entry is reported as absent.
    - put() never raises. A failed write is logged and counted.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from archivist.schemas.asset import CachedAsset


@dataclass
class CacheStats:
    """
    Counters since process start, reported by GET /health.

    hits / misses / stale are recorded by AssetService (it owns the TTL);
    read_errors / write_errors are recorded by the cache implementation.
    """
    hits: int = 0
    misses: int = 0
    stale: int = 0
    read_errors: int = 0
    write_errors: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class AssetCache(ABC):
    """Key-value store of CachedAsset records, keyed by asset id."""

    def __init__(self) -> None:
        self.stats = CacheStats()

    @abstractmethod
    async def get(self, asset_id: int) -> Optional[CachedAsset]:
        """
        Return the stored record for `asset_id`, or None.

        None covers both "never cached" and "entry exists but is unreadable".
        """
        ...

    @abstractmethod
    async def put(self, asset: CachedAsset) -> None:
        """Store `asset` under `asset.id`, replacing any previous entry."""
        ...
