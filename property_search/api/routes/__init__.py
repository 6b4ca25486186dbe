"""API routes."""
from .search import router as search_router
from .properties import router as properties_router
from .health import router as health_router
from .admin import admin_embeddings_router

__all__ = [
    "search_router",
    "properties_router",
    "health_router",
    "admin_embeddings_router",
]
