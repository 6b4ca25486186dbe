"""Domain entities."""
from .base import Base, TimestampMixin
from .enums import (
    PropertyType,
    TransactionType,
    PropertyStatus,
    Furnishing,
)
from .agent import Agent
from .property import Property, EMBEDDING_DIMENSIONS

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Enums
    "PropertyType",
    "TransactionType",
    "PropertyStatus",
    "Furnishing",
    # Models
    "Agent",
    "Property",
    "EMBEDDING_DIMENSIONS",
]
