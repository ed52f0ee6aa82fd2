"""
Archivist Backend - Abstract Asset Store Interface
====================================================

What:  Abstract base class for the relational table that owns asset content.
How:   SqlAssetStore implements it with async SQLAlchemy; tests substitute a
       counting fake to observe how often the store is hit.

Contract:
    - fetch() is a point lookup by primary key returning at most one row.
    - Rows are returned as-is, including NULL/empty content or filename.
    - Connectivity failures raise StoreUnavailableError; other database
      failures raise DatabaseError.
"""

from abc import ABC, abstractmethod
from typing import Optional

from archivist.schemas.asset import AssetRecord


class AssetStore(ABC):
    """Read-only access to stored assets."""

    @abstractmethod
    async def fetch(self, asset_id: int) -> Optional[AssetRecord]:
        """
        Fetch one asset row by primary key.

        Returns:
            AssetRecord, or None when no row matches.

        Raises:
            StoreUnavailableError: The database could not be reached.
            DatabaseError: The query failed for any other reason.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Lightweight connectivity probe used by GET /health."""
        ...
