"""
SEARCH VALUE OBJECTS
====================

Ephemeral types passed through the search pipeline. Nothing here is
persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from .entities.enums import PropertyType, TransactionType, Furnishing

# Hard cap for /search page size
MAX_SEARCH_LIMIT = 50
DEFAULT_SEARCH_LIMIT = 20

# Hard cap for /properties/{id}/similar
MAX_SIMILAR_LIMIT = 12
DEFAULT_SIMILAR_LIMIT = 6

MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class SearchFilters:
    """
    Optional structured predicates for a search.

    Every present field becomes one predicate and all predicates are ANDed.
    Bounds are checked for sign at the HTTP boundary; an inverted range
    (min > max) is not rejected, it just matches nothing.
    """

    property_type: Optional[PropertyType] = None
    transaction_type: Optional[TransactionType] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    province: Optional[str] = None
    city: Optional[str] = None
    bedrooms_min: Optional[int] = None
    bedrooms_max: Optional[int] = None
    bathrooms_min: Optional[int] = None
    bathrooms_max: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """camelCase echo of the filters, None for absent ones."""
        return {
            "propertyType": self.property_type.value if self.property_type else None,
            "transactionType": self.transaction_type.value if self.transaction_type else None,
            "priceMin": self.price_min,
            "priceMax": self.price_max,
            "province": self.province,
            "city": self.city,
            "bedroomsMin": self.bedrooms_min,
            "bedroomsMax": self.bedrooms_max,
            "bathroomsMin": self.bathrooms_min,
            "bathroomsMax": self.bathrooms_max,
        }


@dataclass(frozen=True)
class PropertyEmbeddingInput:
    """Descriptive fields of a property that feed its embedding."""

    title: str
    property_type: str
    transaction_type: str
    province: str
    city: str
    description: Optional[str] = None
    barangay: Optional[str] = None
    landmark: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    floor_area: Optional[float] = None
    lot_area: Optional[float] = None
    furnishing: Optional[Furnishing] = None
    features: tuple = ()


@dataclass(frozen=True)
class AgentSummary:
    """Public projection of the listing agent."""

    id: Optional[int]
    name: Optional[str]
    photo: Optional[str]


@dataclass
class SearchResult:
    """A property returned by search, with its cosine similarity to the query."""

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
    agent: AgentSummary
    status: str = "AVAILABLE"


@dataclass
class SearchPage:
    """One page of search results plus the total ignoring pagination."""

    results: List[SearchResult] = field(default_factory=list)
    total: int = 0
