from .embeddings import router as admin_embeddings_router

__all__ = ["admin_embeddings_router"]
