"""
Property - Listing on the marketplace
=====================================

Catalogue of properties for sale or rent, owned by an Agent.

Main field groups:
- Type (HOUSE, CONDO, TOWNHOUSE, APARTMENT, LOT, COMMERCIAL, WAREHOUSE, FARM)
- Location (province, city, barangay, address, landmark)
- Specs (bedrooms, bathrooms, carpark, lot/floor area)
- Price and co-brokerage terms
- Semantic search data (embedding vector + when it was computed)

The embedding is derived from the descriptive fields. It is NULL when the
row is created and is filled by the embedding maintenance service; nobody
edits it by hand.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING, List
from pgvector.sqlalchemy import Vector
from sqlalchemy import String, Integer, Boolean, ForeignKey, Text, Numeric, Index, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.ext.mutable import MutableList

from .base import Base, TimestampMixin
from .enums import PropertyStatus

if TYPE_CHECKING:
    from .agent import Agent

# text-embedding-3-small
EMBEDDING_DIMENSIONS = 1536


class Property(Base, TimestampMixin):
    """Listing in the catalogue."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True)
    agent_id: Mapped[int] = mapped_column(ForeignKey("agents.id", ondelete="CASCADE"), index=True)

    # Basic Info
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    property_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    transaction_type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), default=PropertyStatus.DRAFT.value, nullable=False, index=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, index=True)

    # Location
    province: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    barangay: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    landmark: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Specs
    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    carpark: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    lot_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    floor_area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    furnishing: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Features / media (JSONB arrays)
    features: Mapped[List[str]] = mapped_column(
        MutableList.as_mutable(JSONB),
        default=list,
        nullable=False
    )
    photos: Mapped[List[str]] = mapped_column(
        MutableList.as_mutable(JSONB),
        default=list,
        nullable=False
    )

    # Co-brokerage
    allow_co_broke: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    co_broke_split: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("50"), nullable=False)

    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Semantic search
    embedding: Mapped[Optional[List[float]]] = mapped_column(Vector(EMBEDDING_DIMENSIONS), nullable=True)
    embedded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    # SHA-256 of the text the embedding was computed from
    embedding_hash: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Relationships
    agent: Mapped["Agent"] = relationship(back_populates="properties")

    # Composite indexes (the HNSW index lives in the migration)
    __table_args__ = (
        Index("ix_properties_status_type_price", "status", "property_type", "price"),
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, type='{self.property_type}', city='{self.city}', price={self.price})>"
