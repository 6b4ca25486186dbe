"""
SEMANTIC SEARCH SERVICE TESTS
=============================

Orchestration with a mocked AsyncSession: validation, embedding, count and
page queries, error propagation.
"""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from property_search.domain.exceptions import (
    EmbeddingServiceError,
    SearchValidationError,
    StorageError,
)
from property_search.domain.search import SearchFilters
from property_search.infrastructure.services import EmbeddingService, SemanticSearchService
from tests.conftest import rows_result, scalar_result
from tests.utils import FailingEmbeddingProvider, make_row


# =============================================================================
# VALIDATION
# =============================================================================

@pytest.mark.parametrize("query", ["", " ", "a", "  b  "])
async def test_rejects_queries_shorter_than_two_characters(mock_db, embedding_service, fake_provider, query):
    service = SemanticSearchService(mock_db, embedding_service)

    with pytest.raises(SearchValidationError) as exc_info:
        await service.search(query)

    assert exc_info.value.stage == "validation"
    assert fake_provider.calls == []
    mock_db.execute.assert_not_awaited()


async def test_accepts_two_character_query(mock_db, embedding_service, fake_provider):
    mock_db.execute.side_effect = [scalar_result(0), rows_result([])]
    service = SemanticSearchService(mock_db, embedding_service)

    page = await service.search("br")

    assert page.results == []
    assert page.total == 0
    assert fake_provider.calls == ["br"]


# =============================================================================
# HAPPY PATH
# =============================================================================

async def test_search_returns_ranked_results_and_total(mock_db, embedding_service):
    mock_db.execute.side_effect = [
        scalar_result(27),
        rows_result([
            make_row(id=1, similarity=0.92),
            make_row(id=2, similarity=0.85),
            make_row(id=3, similarity=0.60),
        ]),
    ]
    service = SemanticSearchService(mock_db, embedding_service)

    page = await service.search("3 bedroom house in Baguio", limit=3, offset=6)

    assert page.total == 27
    assert [r.id for r in page.results] == [1, 2, 3]
    scores = [r.similarity for r in page.results]
    assert scores == sorted(scores, reverse=True)
    assert all(isinstance(r.price, float) for r in page.results)


async def test_search_runs_count_then_page_query_with_bound_vector(mock_db, embedding_service, fake_provider):
    mock_db.execute.side_effect = [scalar_result(1), rows_result([make_row()])]
    service = SemanticSearchService(mock_db, embedding_service)

    await service.search("  house in Baguio  ", SearchFilters(city="Baguio"), limit=10, offset=20)

    assert mock_db.execute.await_count == 2
    count_stmt = mock_db.execute.await_args_list[0].args[0]
    page_stmt = mock_db.execute.await_args_list[1].args[0]

    count_sql = str(count_stmt.compile(dialect=postgresql.dialect()))
    assert "count(*)" in count_sql
    assert "LIMIT" not in count_sql

    compiled = page_stmt.compile(dialect=postgresql.dialect())
    assert compiled.params["query_embedding"] == fake_provider.vector_for("house in baguio")
    assert 10 in compiled.params.values()
    assert 20 in compiled.params.values()


async def test_no_match_returns_empty_page(mock_db, embedding_service):
    mock_db.execute.side_effect = [scalar_result(0), rows_result([])]
    service = SemanticSearchService(mock_db, embedding_service)

    page = await service.search("mansion", SearchFilters(price_min=10000000))

    assert page.results == []
    assert page.total == 0


# =============================================================================
# FAILURES
# =============================================================================

async def test_embedding_failure_propagates_without_querying(mock_db):
    service = SemanticSearchService(mock_db, EmbeddingService(FailingEmbeddingProvider()))

    with pytest.raises(EmbeddingServiceError):
        await service.search("house in baguio")

    mock_db.execute.assert_not_awaited()


async def test_database_failure_raises_storage_error(mock_db, embedding_service):
    mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))
    service = SemanticSearchService(mock_db, embedding_service)

    with pytest.raises(StorageError) as exc_info:
        await service.search("house in baguio")

    assert exc_info.value.stage == "storage"
    assert isinstance(exc_info.value.__cause__, OperationalError)


# =============================================================================
# SIMILAR PROPERTIES
# =============================================================================

async def test_find_similar_uses_stored_embedding_only(mock_db, embedding_service, fake_provider):
    mock_db.execute.return_value = rows_result([make_row(id=5, similarity=0.8), make_row(id=9, similarity=0.7)])
    service = SemanticSearchService(mock_db, embedding_service)

    results = await service.find_similar(1, limit=6)

    assert [r.id for r in results] == [5, 9]
    assert fake_provider.calls == []


async def test_find_similar_without_embedding_is_empty_not_error(mock_db, embedding_service):
    mock_db.execute.return_value = rows_result([])
    service = SemanticSearchService(mock_db, embedding_service)

    assert await service.find_similar(1) == []


async def test_find_similar_database_failure_raises_storage_error(mock_db, embedding_service):
    mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("timeout"))
    service = SemanticSearchService(mock_db, embedding_service)

    with pytest.raises(StorageError):
        await service.find_similar(1)
