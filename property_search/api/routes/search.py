"""
API Routes: Semantic search
===========================

GET /search?q=3 bedroom house in Baguio&city=Baguio&priceMax=5000000
"""
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from property_search.api.dependencies import get_search_service
from property_search.api.schemas import SearchResponse
from property_search.domain.entities import PropertyType, TransactionType
from property_search.domain.search import (
    DEFAULT_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
    SearchFilters,
)
from property_search.infrastructure.middleware.rate_limiter import limiter, search_rate_limit
from property_search.infrastructure.services import SemanticSearchService

router = APIRouter(prefix="/search", tags=["search"])


def get_search_filters(
    property_type: Optional[PropertyType] = Query(None, alias="propertyType"),
    transaction_type: Optional[TransactionType] = Query(None, alias="transactionType"),
    price_min: Optional[float] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[float] = Query(None, alias="priceMax", ge=0),
    province: Optional[str] = Query(None, max_length=100),
    city: Optional[str] = Query(None, max_length=100),
    bedrooms_min: Optional[int] = Query(None, alias="bedroomsMin", ge=0),
    bedrooms_max: Optional[int] = Query(None, alias="bedroomsMax", ge=0),
    bathrooms_min: Optional[int] = Query(None, alias="bathroomsMin", ge=0),
    bathrooms_max: Optional[int] = Query(None, alias="bathroomsMax", ge=0),
) -> SearchFilters:
    """Parses and validates the filter query params once, at the boundary."""
    return SearchFilters(
        property_type=property_type,
        transaction_type=transaction_type,
        price_min=price_min,
        price_max=price_max,
        province=province.strip() if province and province.strip() else None,
        city=city.strip() if city and city.strip() else None,
        bedrooms_min=bedrooms_min,
        bedrooms_max=bedrooms_max,
        bathrooms_min=bathrooms_min,
        bathrooms_max=bathrooms_max,
    )


@router.get("", response_model=SearchResponse)
@limiter.limit(search_rate_limit)
async def search_properties(
    request: Request,
    q: Optional[str] = Query(None, max_length=500),
    query: Optional[str] = Query(None, max_length=500),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1),
    filters: SearchFilters = Depends(get_search_filters),
    service: SemanticSearchService = Depends(get_search_service),
):
    """
    Semantic search over available listings.

    `limit` above 50 is clamped to 50. Queries shorter than 2 characters
    get a 400.
    """
    text = (q or query or "").strip()
    limit = min(limit, MAX_SEARCH_LIMIT)
    offset = (page - 1) * limit

    result = await service.search(text, filters, limit=limit, offset=offset)

    return {
        "properties": result.results,
        "query": text,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": result.total,
            "total_pages": math.ceil(result.total / limit),
        },
        "filters": filters.to_dict(),
    }
