"""
EMBEDDING SERVICE - text to vector
==================================

Turns property descriptions and search queries into fixed-length vectors
through a hosted embedding model (text-embedding-3-small, 1536 dims).

- No caching: every call hits the model.
- No retries: failures surface as EmbeddingServiceError and the caller
  decides what to do.
- Output is validated (length and finite values) before it reaches the
  database.
"""

import hashlib
import logging
from typing import List

import numpy as np

from property_search.domain.entities import EMBEDDING_DIMENSIONS
from property_search.domain.exceptions import EmbeddingServiceError
from property_search.domain.search import PropertyEmbeddingInput
from property_search.infrastructure.llm import EmbeddingProvider

logger = logging.getLogger(__name__)

# Label plus synonyms so "condo" and "condominium" land close together
PROPERTY_TYPE_LABELS = {
    "HOUSE": "house",
    "CONDO": "condominium condo",
    "TOWNHOUSE": "townhouse",
    "APARTMENT": "apartment",
    "LOT": "lot land vacant",
    "COMMERCIAL": "commercial office retail",
    "WAREHOUSE": "warehouse industrial",
    "FARM": "farm agricultural land",
}

FURNISHING_LABELS = {
    "UNFURNISHED": "unfurnished",
    "SEMI_FURNISHED": "semi-furnished semi furnished",
    "FULLY_FURNISHED": "fully furnished",
}


def _enum_value(value) -> str:
    return getattr(value, "value", value) or ""


def _format_area(value: float) -> str:
    return f"{float(value):g}"


def property_to_embedding_text(fields: PropertyEmbeddingInput) -> str:
    """
    Builds the text that represents a property in embedding space.

    Includes every field a user can search by: type, transaction,
    title/description, location, specs, furnishing, features and landmark.
    Deterministic for the same input.
    """
    parts: List[str] = []

    property_type = _enum_value(fields.property_type)
    transaction = _enum_value(fields.transaction_type)

    # Type and transaction
    type_label = PROPERTY_TYPE_LABELS.get(property_type, property_type)
    transaction_label = "sale buy purchase" if transaction == "SALE" else "rent lease"
    parts.append(f"{type_label} for {transaction_label}")

    # Title and description
    parts.append(fields.title)
    if fields.description:
        parts.append(fields.description)

    # Location, most specific first
    location = " ".join(p for p in (fields.barangay, fields.city, fields.province) if p)
    if location:
        parts.append(location)
    if fields.landmark:
        parts.append(f"near {fields.landmark}")

    # Specs
    if fields.bedrooms:
        plural = "s" if fields.bedrooms > 1 else ""
        parts.append(f"{fields.bedrooms} bedroom{plural} {fields.bedrooms}BR")
    if fields.bathrooms:
        plural = "s" if fields.bathrooms > 1 else ""
        parts.append(f"{fields.bathrooms} bathroom{plural} {fields.bathrooms}T&B")
    if fields.floor_area:
        parts.append(f"{_format_area(fields.floor_area)} sqm floor area")
    if fields.lot_area:
        parts.append(f"{_format_area(fields.lot_area)} sqm lot area")

    furnishing = _enum_value(fields.furnishing)
    if furnishing:
        parts.append(FURNISHING_LABELS.get(furnishing, furnishing.lower()))

    # Features
    if fields.features:
        parts.append(" ".join(fields.features))

    return " ".join(parts).lower()


def compute_content_hash(text: str) -> str:
    """
    SHA-256 of the embedding text.
    Used by the re-index sweep to detect rows that need a new embedding.
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class EmbeddingService:
    """Embedding generator used by search and maintenance."""

    def __init__(self, provider: EmbeddingProvider, dimensions: int = EMBEDDING_DIMENSIONS):
        self.provider = provider
        self.dimensions = dimensions

    async def embed_query(self, text: str) -> List[float]:
        """
        Embeds a free-text search query.
        The minimum length rule is enforced by the caller.
        """
        return await self._embed(text.lower())

    async def embed_property(self, fields: PropertyEmbeddingInput) -> List[float]:
        """Embeds the descriptive fields of a property."""
        return await self._embed(property_to_embedding_text(fields))

    async def _embed(self, text: str) -> List[float]:
        try:
            raw = await self.provider.generate_embeddings(text)
        except Exception as e:
            raise EmbeddingServiceError(f"Embedding model call failed: {e}") from e

        return self._validate(raw)

    def _validate(self, raw) -> List[float]:
        try:
            vector = np.asarray(raw, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise EmbeddingServiceError(f"Embedding model returned a non-numeric vector: {e}") from e

        if vector.ndim != 1 or vector.shape[0] != self.dimensions:
            logger.error(
                f"Invalid embedding shape {vector.shape}, expected ({self.dimensions},)"
            )
            raise EmbeddingServiceError(
                f"Embedding has {vector.size} dimensions, expected {self.dimensions}"
            )

        if not np.all(np.isfinite(vector)):
            raise EmbeddingServiceError("Embedding contains NaN or infinite values")

        return vector.tolist()
