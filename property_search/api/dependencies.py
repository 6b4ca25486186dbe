"""
DEPENDENCIES
============

Functions injected into the routes: services built per request from the
session and the process-wide embedding service, admin key check.
"""

import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from property_search.config import Settings, get_settings
from property_search.infrastructure.database import get_db
from property_search.infrastructure.services import (
    EmbeddingMaintenanceService,
    EmbeddingService,
    SemanticSearchService,
)


def get_embedding_service(request: Request) -> EmbeddingService:
    """Embedding service created in the app lifespan."""
    return request.app.state.embedding_service


def get_search_service(
    db: AsyncSession = Depends(get_db),
    embeddings: EmbeddingService = Depends(get_embedding_service),
) -> SemanticSearchService:
    return SemanticSearchService(db, embeddings)


def get_maintenance_service(
    db: AsyncSession = Depends(get_db),
    embeddings: EmbeddingService = Depends(get_embedding_service),
) -> EmbeddingMaintenanceService:
    return EmbeddingMaintenanceService(db, embeddings)


async def require_admin_key(
    x_admin_key: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Guards the admin routes with a shared key sent in X-Admin-Key.

    Usage in routes:
        router = APIRouter(dependencies=[Depends(require_admin_key)])
    """
    if not settings.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin API is not configured",
        )

    if not x_admin_key or not secrets.compare_digest(x_admin_key, settings.admin_api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin key",
        )
