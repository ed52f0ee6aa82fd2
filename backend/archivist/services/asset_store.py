"""
Archivist Backend - SQL Asset Store
=====================================

What:  AssetStore backed by the image table, via async SQLAlchemy.
How:   One session per lookup, a single SELECT by primary key, the row
       converted to an AssetRecord with JSON-safe metadata values.
Who:   Created once by archivist.dependencies; used by AssetService.

Query plan:
    SELECT "FILECONTENT", "FILENAME", "KLASSIFIKATION_1", ...
    FROM "COMPANY"."T_BILD_BILDER" WHERE "PK_BILD_BILDER" = :id
    → primary key index, at most one row

Error Translation:
    connection refused / dropped / timed out  → StoreUnavailableError (503)
    anything else raised by SQLAlchemy        → DatabaseError (500)
"""

import asyncio
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from archivist.config import settings
from archivist.database import async_session_factory
from archivist.exceptions import ArchivistError, DatabaseError, StoreUnavailableError
from archivist.models.image import METADATA_COLUMNS, Image
from archivist.schemas.asset import AssetRecord, MetadataValue
from archivist.services.store_base import AssetStore

logger = logging.getLogger(__name__)

# Exception types that mean "the database is not reachable right now"
_UNAVAILABLE_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    OSError,
    asyncio.TimeoutError,
)


def is_connectivity_error(error: BaseException) -> bool:
    """True when `error` signals an unreachable database rather than a bad query."""
    if isinstance(error, _UNAVAILABLE_ERRORS):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


def to_metadata_value(value: Any) -> MetadataValue:
    """Convert a column value into a JSON scalar for the cache and the API."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return str(value)


class SqlAssetStore(AssetStore):
    """Point lookups against the image table."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory or async_session_factory

    async def fetch(self, asset_id: int) -> Optional[AssetRecord]:
        query = select(
            Image.content,
            Image.filename,
            *[column.label(key) for key, column in METADATA_COLUMNS.items()],
        ).where(Image.id == asset_id)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                row = result.one_or_none()
        except Exception as e:
            translated = self._translate(e, asset_id)
            if translated is None:
                raise
            raise translated from e

        if row is None:
            return None

        mapping = row._mapping
        content = mapping["content"]
        return AssetRecord(
            # asyncpg hands back bytes; other drivers may return memoryview
            content=bytes(content) if content is not None else None,
            filename=mapping["filename"],
            metadata={key: to_metadata_value(mapping[key]) for key in METADATA_COLUMNS},
        )

    async def health_check(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Health check: asset database unreachable: %s", str(e))
            return False

    def _translate(self, error: Exception, asset_id: int) -> Optional[ArchivistError]:
        """Map a driver/SQLAlchemy failure to an application error; None means re-raise."""
        if is_connectivity_error(error):
            logger.error("Asset database unreachable while fetching %d: %s", asset_id, str(error))
            return StoreUnavailableError(
                retry_after=settings.store_retry_after,
                context={"asset_id": asset_id, "error": str(error)},
            )
        if isinstance(error, SQLAlchemyError):
            logger.error(
                "Database error fetching asset %d: %s", asset_id, str(error), exc_info=True
            )
            return DatabaseError(
                message="Image retrieval failed",
                context={"asset_id": asset_id, "error_type": type(error).__name__},
            )
        return None
