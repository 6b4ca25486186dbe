"""
ADMIN ENDPOINTS - Embedding management
======================================

Endpoints to:
- Refresh the embedding of one property (called by the listing backend
  after a create/publish/edit)
- Run the bulk re-index sweep
- Check indexing coverage
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from property_search.api.dependencies import get_maintenance_service, require_admin_key
from property_search.api.schemas import ReindexRequest
from property_search.infrastructure.services import EmbeddingMaintenanceService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/embeddings",
    tags=["Admin - Embeddings"],
    dependencies=[Depends(require_admin_key)],
)


@router.post("/properties/{property_id}")
async def refresh_property_embedding(
    property_id: int,
    service: EmbeddingMaintenanceService = Depends(get_maintenance_service),
):
    """Re-embeds a single property from its current fields."""
    found = await service.refresh_property(property_id)

    if not found:
        raise HTTPException(status_code=404, detail="Property not found")

    return {
        "success": True,
        "message": f"Embedding updated for property {property_id}",
        "propertyId": property_id,
    }


@router.post("/reindex")
async def reindex_embeddings(
    payload: Optional[ReindexRequest] = None,
    service: EmbeddingMaintenanceService = Depends(get_maintenance_service),
):
    """
    Re-embeds every property whose text changed, that was never embedded,
    or (with maxAgeDays) that was embedded too long ago.

    **WARNING:** can take minutes on a large catalogue.
    """
    payload = payload or ReindexRequest()
    stats = await service.reindex(force=payload.force, max_age_days=payload.max_age_days)

    return {
        "success": True,
        "stats": stats,
    }


@router.get("/status")
async def indexing_status(
    service: EmbeddingMaintenanceService = Depends(get_maintenance_service),
):
    """Embedding coverage of the catalogue."""
    counts = await service.embedding_status()
    coverage = round(counts["embedded"] / counts["total"] * 100, 1) if counts["total"] else 0.0

    return {
        **counts,
        "coveragePercent": coverage,
    }
