"""
Response schemas for the search endpoints.

JSON keys are camelCase to match what the web client consumes.
"""

from datetime import datetime
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AgentSummaryResponse(CamelModel):
    id: Optional[int]
    name: Optional[str]
    photo: Optional[str]


class SearchResultResponse(CamelModel):
    """A ranked property."""
    id: int
    title: str
    property_type: str
    transaction_type: str
    price: float
    province: str
    city: str
    barangay: Optional[str]
    bedrooms: Optional[int]
    bathrooms: Optional[int]
    carpark: Optional[int]
    lot_area: Optional[float]
    floor_area: Optional[float]
    photos: List[str]
    features: List[str]
    allow_co_broke: bool
    co_broke_split: float
    view_count: int
    published_at: Optional[datetime]
    similarity: float
    agent: AgentSummaryResponse


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class SearchResponse(CamelModel):
    properties: List[SearchResultResponse]
    query: str
    pagination: PaginationResponse
    filters: Dict[str, Any]


class SimilarPropertiesResponse(CamelModel):
    properties: List[SearchResultResponse]


class PropertyDetailResponse(CamelModel):
    """Public detail of a listing. The full address stays hidden until an inquiry."""
    id: int
    title: str
    description: Optional[str]
    property_type: str
    transaction_type: str
    status: str
    price: float
    province: str
    city: str
    barangay: Optional[str]
    landmark: Optional[str]
    bedrooms: Optional[int]
    bathrooms: Optional[int]
    carpark: Optional[int]
    lot_area: Optional[float]
    floor_area: Optional[float]
    furnishing: Optional[str]
    photos: List[str]
    features: List[str]
    allow_co_broke: bool
    co_broke_split: float
    view_count: int
    published_at: Optional[datetime]
    agent: AgentSummaryResponse


class ReindexRequest(CamelModel):
    force: bool = False
    max_age_days: Optional[int] = Field(default=None, ge=0)
