import hashlib
import os
import re
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import List

import numpy as np

from property_search.domain.entities import EMBEDDING_DIMENSIONS
from property_search.infrastructure.llm import EmbeddingProvider

# Real PostgreSQL + pgvector database for the integration tests, read from the environment
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

_TOKEN = re.compile(r"\w+")


class FakeEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic bag-of-words embedding: every token is hashed into one of
    the 1536 buckets and the vector is L2-normalised. Texts sharing words
    end up close in cosine distance.
    """

    def __init__(self, dimensions: int = EMBEDDING_DIMENSIONS):
        self.dimensions = dimensions
        self.calls: List[str] = []

    def vector_for(self, text: str) -> List[float]:
        vector = np.zeros(self.dimensions)
        # Constant component so no text maps to the zero vector
        vector[0] = 0.1
        for token in _TOKEN.findall(text.lower()):
            bucket = int(hashlib.md5(token.encode()).hexdigest(), 16) % (self.dimensions - 1) + 1
            vector[bucket] += 1.0
        return (vector / np.linalg.norm(vector)).tolist()

    async def generate_embeddings(self, text: str) -> List[float]:
        self.calls.append(text)
        return self.vector_for(text)


class FailingEmbeddingProvider(EmbeddingProvider):
    def __init__(self, error: Exception = None):
        self.error = error or ConnectionError("upstream unavailable")

    async def generate_embeddings(self, text: str) -> List[float]:
        raise self.error


class StaticEmbeddingProvider(EmbeddingProvider):
    """Returns whatever it was given, to exercise output validation."""

    def __init__(self, value):
        self.value = value

    async def generate_embeddings(self, text: str):
        return self.value


def make_row(**overrides):
    """A result row shaped like the vector query projection."""
    mapping = {
        "id": 1,
        "title": "Modern 3BR house in Baguio",
        "property_type": "HOUSE",
        "transaction_type": "SALE",
        "status": "AVAILABLE",
        "price": Decimal("4500000.00"),
        "province": "Benguet",
        "city": "Baguio City",
        "barangay": "Camp 7",
        "bedrooms": 3,
        "bathrooms": 2,
        "carpark": 1,
        "lot_area": Decimal("150.00"),
        "floor_area": Decimal("120.50"),
        "photos": ["https://cdn.example.com/p/1.jpg"],
        "features": ["garden", "pine view"],
        "allow_co_broke": True,
        "co_broke_split": Decimal("50.00"),
        "view_count": 12,
        "published_at": datetime(2026, 9, 1, tzinfo=timezone.utc),
        "similarity": 0.91,
        "agent_id": 7,
        "agent_name": "Maria Santos",
        "agent_photo": None,
    }
    mapping.update(overrides)
    return SimpleNamespace(_mapping=mapping)
