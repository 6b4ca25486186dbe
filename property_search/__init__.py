"""Semantic property search - pgvector backed search core for the marketplace."""

__version__ = "0.1.0"
