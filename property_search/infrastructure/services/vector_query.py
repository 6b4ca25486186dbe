"""
VECTOR QUERY BUILDER - pgvector + relational filters
=====================================================

Composes the statements used by semantic search:

1. Relational predicates from SearchFilters (ANDed)
2. Restriction to AVAILABLE properties that already have an embedding
3. ORDER BY cosine distance (`<=>`) to a query vector
4. LIMIT / OFFSET pagination
5. A separate COUNT(*) that ignores pagination

Everything is built with the SQLAlchemy expression language, so filter
values and the query vector always travel as bound parameters. There is no
string formatting of SQL in this module.

Similarity is reported as 1 - cosine_distance.
"""

from typing import List, Sequence

from pgvector.sqlalchemy import Vector
from sqlalchemy import Select, bindparam, func, select, and_
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from property_search.domain.entities import Agent, Property, PropertyStatus, EMBEDDING_DIMENSIONS
from property_search.domain.search import AgentSummary, SearchFilters, SearchResult

# Columns projected into SearchResult
RESULT_COLUMNS = (
    Property.id,
    Property.title,
    Property.property_type,
    Property.transaction_type,
    Property.status,
    Property.price,
    Property.province,
    Property.city,
    Property.barangay,
    Property.bedrooms,
    Property.bathrooms,
    Property.carpark,
    Property.lot_area,
    Property.floor_area,
    Property.photos,
    Property.features,
    Property.allow_co_broke,
    Property.co_broke_split,
    Property.view_count,
    Property.published_at,
)

AGENT_COLUMNS = (
    Agent.id.label("agent_id"),
    Agent.name.label("agent_name"),
    Agent.photo.label("agent_photo"),
)


def searchable_conditions(target=Property) -> List[ColumnElement[bool]]:
    """Predicates every search-facing query carries."""
    return [
        target.status == PropertyStatus.AVAILABLE.value,
        target.embedding.is_not(None),
    ]


def build_filter_conditions(filters: SearchFilters) -> List[ColumnElement[bool]]:
    """
    One predicate per present filter, plus the searchable conditions.
    Province and city match as case-insensitive substrings; LIKE wildcards
    typed by the user are escaped.
    """
    conditions = searchable_conditions()

    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type.value)

    if filters.transaction_type is not None:
        conditions.append(Property.transaction_type == filters.transaction_type.value)

    if filters.price_min is not None:
        conditions.append(Property.price >= filters.price_min)

    if filters.price_max is not None:
        conditions.append(Property.price <= filters.price_max)

    if filters.province:
        conditions.append(Property.province.icontains(filters.province, autoescape=True))

    if filters.city:
        conditions.append(Property.city.icontains(filters.city, autoescape=True))

    if filters.bedrooms_min is not None:
        conditions.append(Property.bedrooms >= filters.bedrooms_min)

    if filters.bedrooms_max is not None:
        conditions.append(Property.bedrooms <= filters.bedrooms_max)

    if filters.bathrooms_min is not None:
        conditions.append(Property.bathrooms >= filters.bathrooms_min)

    if filters.bathrooms_max is not None:
        conditions.append(Property.bathrooms <= filters.bathrooms_max)

    return conditions


def build_count_query(filters: SearchFilters) -> Select:
    """Total rows matching the filters, ignoring limit/offset."""
    return (
        select(func.count())
        .select_from(Property)
        .where(and_(*build_filter_conditions(filters)))
    )


def query_vector_param(query_vector: Sequence[float]):
    """The query vector as a typed bind parameter."""
    return bindparam(
        "query_embedding",
        value=list(query_vector),
        type_=Vector(EMBEDDING_DIMENSIONS),
    )


def build_search_query(
    query_vector: Sequence[float],
    filters: SearchFilters,
    limit: int,
    offset: int = 0,
) -> Select:
    """
    Page of properties nearest to `query_vector`, nearest first.

    `limit` is not capped here; callers clamp it (see MAX_SEARCH_LIMIT).
    Ties on distance are broken by id so pages are stable.
    """
    distance = Property.embedding.cosine_distance(query_vector_param(query_vector))

    return (
        select(*RESULT_COLUMNS, (1 - distance).label("similarity"), *AGENT_COLUMNS)
        .select_from(Property)
        .outerjoin(Agent, Agent.id == Property.agent_id)
        .where(and_(*build_filter_conditions(filters)))
        .order_by(distance, Property.id)
        .limit(limit)
        .offset(offset)
    )


def build_similar_query(property_id: int, limit: int) -> Select:
    """
    Nearest neighbours of an existing property using its stored embedding.

    The source row is joined as `source`; when it does not exist or has no
    embedding the join yields nothing, so the result is empty.
    """
    source = aliased(Property, name="source")
    distance = Property.embedding.cosine_distance(source.embedding)

    return (
        select(*RESULT_COLUMNS, (1 - distance).label("similarity"), *AGENT_COLUMNS)
        .select_from(Property)
        .join(source, and_(source.id == property_id, source.embedding.is_not(None)))
        .outerjoin(Agent, Agent.id == Property.agent_id)
        .where(Property.id != property_id, *searchable_conditions())
        .order_by(distance, Property.id)
        .limit(limit)
    )


def _to_float(value):
    return float(value) if value is not None else None


def row_to_search_result(row) -> SearchResult:
    """
    Maps a result row to SearchResult.
    Numeric (Decimal) columns become float so JSON output is uniform.
    """
    m = row._mapping
    return SearchResult(
        id=m["id"],
        title=m["title"],
        property_type=m["property_type"],
        transaction_type=m["transaction_type"],
        status=m["status"],
        price=float(m["price"]),
        province=m["province"],
        city=m["city"],
        barangay=m["barangay"],
        bedrooms=m["bedrooms"],
        bathrooms=m["bathrooms"],
        carpark=m["carpark"],
        lot_area=_to_float(m["lot_area"]),
        floor_area=_to_float(m["floor_area"]),
        photos=list(m["photos"] or []),
        features=list(m["features"] or []),
        allow_co_broke=m["allow_co_broke"],
        co_broke_split=float(m["co_broke_split"]),
        view_count=m["view_count"],
        published_at=m["published_at"],
        similarity=float(m["similarity"]),
        agent=AgentSummary(
            id=m["agent_id"],
            name=m["agent_name"],
            photo=m["agent_photo"],
        ),
    )
