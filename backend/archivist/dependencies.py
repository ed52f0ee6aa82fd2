"""
Archivist Backend - FastAPI Dependencies
==========================================

What:  Providers for the cache, the store, and the asset service.
How:   The cache and the store are built once per process (lru_cache) and
       handed to route handlers through Depends(). Tests replace them with
       doubles via `app.dependency_overrides[get_asset_cache] = ...`.
"""

from functools import lru_cache

from fastapi import Depends

from archivist.config import settings
from archivist.services.asset_service import AssetService
from archivist.services.asset_store import SqlAssetStore
from archivist.services.cache_base import AssetCache
from archivist.services.disk_cache import DiskAssetCache
from archivist.services.store_base import AssetStore


@lru_cache
def get_asset_cache() -> AssetCache:
    return DiskAssetCache(settings.cache_dir)


@lru_cache
def get_asset_store() -> AssetStore:
    return SqlAssetStore()


def get_asset_service(
    cache: AssetCache = Depends(get_asset_cache),
    store: AssetStore = Depends(get_asset_store),
) -> AssetService:
    return AssetService(cache=cache, store=store)
