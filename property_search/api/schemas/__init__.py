from .search import (
    AgentSummaryResponse,
    SearchResultResponse,
    PaginationResponse,
    SearchResponse,
    SimilarPropertiesResponse,
    PropertyDetailResponse,
    ReindexRequest,
)

__all__ = [
    "AgentSummaryResponse",
    "SearchResultResponse",
    "PaginationResponse",
    "SearchResponse",
    "SimilarPropertiesResponse",
    "PropertyDetailResponse",
    "ReindexRequest",
]
