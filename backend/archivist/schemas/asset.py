"""
Archivist Backend - Pydantic Schemas
======================================

What:  Pydantic models for the cache record, store rows, and API responses.
How:   CachedAsset is both the in-memory record and the on-disk cache format
       (JSON, content as URL-safe base64). Response models define the JSON
       contract of the asset and health endpoints.
Who:   Used by the cache, the asset service, and route handlers.
"""

import base64
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

# JSON scalar carried in metadata
MetadataValue = Union[str, int, float, bool, None]


# ══════════════════════════════════════════════════════════════════════════
# Internal Records
# ══════════════════════════════════════════════════════════════════════════


class AssetRecord(BaseModel):
    """
    What:  One row as returned by the asset store.
    NULL columns stay None here; AssetService classifies such rows as
    InvalidData.
    """
    content: Optional[bytes] = None
    filename: Optional[str] = None
    metadata: Dict[str, MetadataValue] = Field(default_factory=dict)


class CachedAsset(BaseModel):
    """
    What:  The record held in the disk cache, one per asset id.
    When:  Created on a cache miss (or after expiry), read on every request
           within the TTL, superseded by the next successful re-fetch.

    Invariants:
        - Frozen: an entry is replaced wholesale, never patched.
        - written_at is timezone-aware UTC; freshness is judged by the caller.
    """
    model_config = ConfigDict(
        frozen=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    id: int = Field(ge=0, description="Primary key in the asset store")
    content: bytes = Field(description="Raw payload, byte-for-byte")
    filename: str = Field(description="Original filename")
    metadata: Dict[str, MetadataValue] = Field(default_factory=dict)
    written_at: AwareDatetime = Field(description="When this entry was populated (UTC)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AssetFile(BaseModel):
    """File part of the JSON envelope. `content` is base64 text."""
    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(description="Base64-encoded file content")
    filename: str = Field(description="Original filename")
    content_type: str = Field(alias="contentType", description="MIME type inferred from filename")


class AssetEnvelope(BaseModel):
    """
    What:  Response of GET /assets/{id}.

    Example:
        {
            "file": {"content": "iVBORw0KGgo...", "filename": "scan.png",
                     "contentType": "image/png"},
            "metadata": {"klassifikation1": "Rechnung", ...}
        }
    """
    file: AssetFile
    metadata: Dict[str, MetadataValue] = Field(default_factory=dict)

    @classmethod
    def from_asset(cls, asset: CachedAsset, content_type: str) -> "AssetEnvelope":
        return cls(
            file=AssetFile(
                content=base64.b64encode(asset.content).decode("ascii"),
                filename=asset.filename,
                content_type=content_type,
            ),
            metadata=dict(asset.metadata),
        )


class BufferPayload(BaseModel):
    """Node.js `Buffer.toJSON()` shape: {"type": "Buffer", "data": [137, 80, ...]}."""
    type: Literal["Buffer"] = "Buffer"
    data: List[int] = Field(description="File content as a list of byte values")


class LegacyAssetFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: BufferPayload
    filename: str
    content_type: str = Field(alias="contentType")


class LegacyAssetEnvelope(BaseModel):
    """
    What:  Response of the legacy GET /accounts/bild/1/1/{id} alias.
    Same as AssetEnvelope except `file.content`, which keeps the Buffer
    object existing viewers read from `file.content.data`.
    """
    file: LegacyAssetFile
    metadata: Dict[str, MetadataValue] = Field(default_factory=dict)

    @classmethod
    def from_asset(cls, asset: CachedAsset, content_type: str) -> "LegacyAssetEnvelope":
        return cls(
            file=LegacyAssetFile(
                content=BufferPayload(data=list(asset.content)),
                filename=asset.filename,
                content_type=content_type,
            ),
            metadata=dict(asset.metadata),
        )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Extra context, omitted in production
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Diagnostic context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class CacheStatsResponse(BaseModel):
    hits: int
    misses: int
    stale: int
    read_errors: int
    write_errors: int


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    cache: CacheStatsResponse = Field(description="Disk cache counters since startup")
    uptime_seconds: float = Field(description="Seconds since service started")
