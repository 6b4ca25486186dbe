"""
API Routes: Properties (public)
===============================

Public detail page data and "similar properties" recommendations.
Listing CRUD lives in the marketplace backend, not here.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from property_search.api.dependencies import get_search_service
from property_search.api.schemas import PropertyDetailResponse, SimilarPropertiesResponse
from property_search.domain.entities import Property, PropertyStatus
from property_search.domain.search import DEFAULT_SIMILAR_LIMIT, MAX_SIMILAR_LIMIT
from property_search.infrastructure.database import get_db
from property_search.infrastructure.middleware.rate_limiter import limiter, search_rate_limit
from property_search.infrastructure.services import SemanticSearchService, record_property_view

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("/{property_id}", response_model=PropertyDetailResponse)
async def get_property(
    property_id: int,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """Public detail of an AVAILABLE listing."""
    result = await db.execute(
        select(Property)
        .options(selectinload(Property.agent))
        .where(Property.id == property_id)
    )
    prop = result.scalar_one_or_none()

    # Drafts, sold and unlisted properties are not public
    if not prop or prop.status != PropertyStatus.AVAILABLE.value:
        raise HTTPException(404, "Property not found")

    background_tasks.add_task(record_property_view, request.app.state.session_factory, property_id)

    return prop


@router.get("/{property_id}/similar", response_model=SimilarPropertiesResponse)
@limiter.limit(search_rate_limit)
async def get_similar_properties(
    request: Request,
    property_id: int,
    limit: int = Query(DEFAULT_SIMILAR_LIMIT, ge=1),
    service: SemanticSearchService = Depends(get_search_service),
):
    """
    Nearest listings to `property_id` by stored embedding.

    A property without an embedding yet simply has no recommendations.
    """
    results = await service.find_similar(property_id, limit=min(limit, MAX_SIMILAR_LIMIT))
    return {"properties": results}
