"""
SEMANTIC SEARCH SERVICE - RAG style search over pgvector
=========================================================

Flow:
1. User types: "3 bedroom house in Baguio near schools"
2. Query is embedded (EmbeddingService)
3. COUNT of rows matching the structured filters
4. Page of rows ordered by cosine distance to the query vector
5. Rows mapped to SearchResult with similarity = 1 - distance

Failures are never turned into empty results: embedding problems raise
EmbeddingServiceError, database problems raise StorageError. There is no
keyword fallback.
"""

import logging
import time
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from property_search.domain.exceptions import SearchValidationError, StorageError
from property_search.domain.search import (
    MIN_QUERY_LENGTH,
    SearchFilters,
    SearchPage,
    SearchResult,
)
from .embedding_service import EmbeddingService
from .vector_query import (
    build_count_query,
    build_search_query,
    build_similar_query,
    row_to_search_result,
)

logger = logging.getLogger(__name__)


class SemanticSearchService:
    """
    Public entry point of the search core.

    One instance per request: it holds the request's session and the shared
    embedding service.
    """

    def __init__(self, db: AsyncSession, embeddings: EmbeddingService):
        self.db = db
        self.embeddings = embeddings

    async def search(
        self,
        query_text: str,
        filters: SearchFilters = SearchFilters(),
        limit: int = 20,
        offset: int = 0,
    ) -> SearchPage:
        """
        Ranked semantic search.

        Args:
            query_text: free text, at least 2 characters after trimming
            filters: structured predicates, all ANDed
            limit: page size, already clamped by the caller
            offset: rows to skip

        Returns:
            SearchPage with results (nearest first) and total ignoring paging.
        """
        query = (query_text or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise SearchValidationError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters"
            )

        started = time.perf_counter()

        query_vector = await self.embeddings.embed_query(query)

        try:
            total = (await self.db.execute(build_count_query(filters))).scalar_one()

            rows = (
                await self.db.execute(build_search_query(query_vector, filters, limit, offset))
            ).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Search query failed: {e}") from e

        results = [row_to_search_result(row) for row in rows]

        logger.info(
            f"🔍 Semantic search: {len(results)}/{total} results for '{query[:50]}'",
            extra={
                "total": total,
                "returned": len(results),
                "limit": limit,
                "offset": offset,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )

        return SearchPage(results=results, total=total)

    async def find_similar(self, property_id: int, limit: int = 6) -> List[SearchResult]:
        """
        Properties closest to `property_id`, reusing its stored embedding.

        Returns an empty list when the property does not exist or has not
        been embedded yet. That is a normal outcome, not an error.
        """
        try:
            rows = (await self.db.execute(build_similar_query(property_id, limit))).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Similar properties query failed: {e}") from e

        if not rows:
            logger.debug(f"No similar properties for {property_id} (missing or not embedded)")

        return [row_to_search_result(row) for row in rows]
