"""
PROPERTY SEARCH API - Entry point
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from property_search.config import Settings, get_settings
from property_search.domain.exceptions import (
    EmbeddingServiceError,
    SearchValidationError,
    StorageError,
)
from property_search.infrastructure.database import create_engine, create_session_factory, init_db
from property_search.infrastructure.llm import EmbeddingProviderFactory
from property_search.infrastructure.logging_config import setup_logging
from property_search.infrastructure.middleware.rate_limiter import (
    limiter,
    rate_limit_exceeded_handler,
)
from property_search.infrastructure.services import EmbeddingService
from property_search.api.routes import (
    search_router,
    properties_router,
    health_router,
    admin_embeddings_router,
)

logger = logging.getLogger(__name__)

GENERIC_SEARCH_ERROR = "Search failed. Please try again."


# ============================================================
# 🔁 LIFESPAN
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Owns the process-wide clients: DB engine, session factory and
    embedding provider. Built on startup, released on shutdown.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("🚀 Starting Property Search API...")

    engine = create_engine(settings)
    provider = EmbeddingProviderFactory.create(settings)

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.embedding_service = EmbeddingService(provider)

    if settings.is_development:
        await init_db(engine)
        logger.info("✅ Tables ready")

    try:
        yield
    finally:
        logger.info("👋 Shutting down Property Search API...")
        await provider.close()
        await engine.dispose()


# ============================================================
# ERROR HANDLERS
# ============================================================
async def validation_error_handler(request: Request, exc: SearchValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.message})


async def embedding_error_handler(request: Request, exc: EmbeddingServiceError) -> JSONResponse:
    logger.error(
        f"Search failed at stage '{exc.stage}': {exc.message}",
        exc_info=exc,
        extra={"stage": exc.stage, "path": request.url.path},
    )
    return JSONResponse(status_code=502, content={"error": GENERIC_SEARCH_ERROR})


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        f"Search failed at stage '{exc.stage}': {exc.message}",
        exc_info=exc,
        extra={"stage": exc.stage, "path": request.url.path},
    )
    return JSONResponse(status_code=500, content={"error": GENERIC_SEARCH_ERROR})


# ============================================================
# FASTAPI APP
# ============================================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Property Search API",
        description="Semantic search over marketplace listings (pgvector)",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_exception_handler(SearchValidationError, validation_error_handler)
    app.add_exception_handler(EmbeddingServiceError, embedding_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    # ⭐ CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # ROUTES
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(properties_router, prefix="/api/v1")
    app.include_router(admin_embeddings_router, prefix="/api/v1")
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {"name": "Property Search API", "status": "running"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "property_search.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
