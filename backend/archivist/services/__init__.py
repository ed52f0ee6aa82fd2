# Services package init
"""
Archivist Backend - Services Layer
====================================

Service Inventory:
    - AssetCache (abstract) / DiskAssetCache: per-asset cache files
    - AssetStore (abstract) / SqlAssetStore: point lookups in the image table
    - AssetService: validate id → cache → store fallback → repopulate
    - content_types: filename → Content-Type / Content-Disposition
"""
