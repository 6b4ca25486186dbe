"""
SEARCH CORE SERVICES
====================

- Embedding generator: embedding_service
- Query builder (pgvector + filters): vector_query
- Search + similar properties: semantic_search_service
- Embedding upkeep: embedding_maintenance
- View counter: property_views
"""

from .embedding_service import (
    EmbeddingService,
    property_to_embedding_text,
    compute_content_hash,
)
from .semantic_search_service import SemanticSearchService
from .embedding_maintenance import EmbeddingMaintenanceService, fields_from_property
from .property_views import record_property_view

__all__ = [
    "EmbeddingService",
    "property_to_embedding_text",
    "compute_content_hash",
    "SemanticSearchService",
    "EmbeddingMaintenanceService",
    "fields_from_property",
    "record_property_view",
]
