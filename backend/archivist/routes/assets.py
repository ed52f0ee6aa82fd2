"""
Archivist Backend - Asset Route Handlers
==========================================

What:  Handles GET /assets/{id} (JSON envelope) and GET /assets/{id}/raw
       (byte stream), plus the legacy /accounts/bild/1/1/... aliases, whose
       JSON variant keeps the Node Buffer shape for `file.content`.
How:   Delegates retrieval to AssetService, then renders the CachedAsset
       with content-type negotiation from the filename.
Who:   Called by the document viewer (JSON) and by <img>/<embed> tags (raw).

Caching:
    Both variants send Cache-Control: public, max-age=3600. Assets never
    change once their id is assigned.
"""

import logging

from fastapi import APIRouter, Depends, Response

from archivist.dependencies import get_asset_service
from archivist.schemas.asset import AssetEnvelope, ErrorResponse, LegacyAssetEnvelope
from archivist.services.asset_service import AssetService
from archivist.services.content_types import (
    CACHE_CONTROL,
    content_disposition,
    content_type_for,
)

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/assets", tags=["Assets"])

ERROR_RESPONSES = {
    400: {"description": "Malformed asset id", "model": ErrorResponse},
    404: {"description": "Asset not found or data incomplete", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
    503: {"description": "Asset database unavailable", "model": ErrorResponse},
}


@router.get(
    "/{asset_id}",
    response_model=AssetEnvelope,
    responses={200: {"description": "Asset with metadata"}, **ERROR_RESPONSES},
    summary="Get an asset with its metadata",
    description=(
        "Returns the file content (base64), filename, inferred content type, "
        "and classification metadata of a stored image or document."
    ),
)
async def get_asset(
    asset_id: str,
    response: Response,
    service: AssetService = Depends(get_asset_service),
) -> AssetEnvelope:
    """
    Get an asset as a JSON envelope.

    Args:
        asset_id: Taken as a string and validated by AssetService, so a
                  non-numeric id yields our 400 instead of FastAPI's 422.
    """
    asset = await service.get_asset(asset_id)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return AssetEnvelope.from_asset(asset, content_type_for(asset.filename))


@router.get(
    "/{asset_id}/raw",
    response_class=Response,
    responses={
        200: {"description": "Raw file content", "content": {"application/octet-stream": {}}},
        **ERROR_RESPONSES,
    },
    summary="Get the raw bytes of an asset",
    description="Streams the stored file verbatim with Content-Type and Content-Disposition.",
)
async def get_asset_raw(
    asset_id: str,
    service: AssetService = Depends(get_asset_service),
) -> Response:
    asset = await service.get_asset(asset_id)
    return Response(
        content=asset.content,
        media_type=content_type_for(asset.filename),
        headers={
            "Content-Disposition": content_disposition(asset.filename),
            "Cache-Control": CACHE_CONTROL,
        },
    )


# ── Legacy Routes ─────────────────────────────────────────────────────────
# URLs and JSON shape of the previous Express service.
legacy_router = APIRouter(tags=["Legacy"], include_in_schema=False)


async def get_asset_legacy(
    asset_id: str,
    response: Response,
    service: AssetService = Depends(get_asset_service),
) -> LegacyAssetEnvelope:
    """JSON variant with `file.content` as {"type": "Buffer", "data": [...]}."""
    asset = await service.get_asset(asset_id)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return LegacyAssetEnvelope.from_asset(asset, content_type_for(asset.filename))


legacy_router.add_api_route(
    "/accounts/bild/1/1/{asset_id}",
    get_asset_legacy,
    methods=["GET"],
    response_model=LegacyAssetEnvelope,
)
legacy_router.add_api_route(
    "/accounts/bild/1/1/1/{asset_id}",
    get_asset_raw,
    methods=["GET"],
    response_class=Response,
)
