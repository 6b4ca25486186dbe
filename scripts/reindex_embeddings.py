"""
Re-embeds properties whose embedding is missing, outdated or older than
--max-age-days.

    python -m scripts.reindex_embeddings
    python -m scripts.reindex_embeddings --max-age-days 90
    python -m scripts.reindex_embeddings --force
"""
import argparse
import asyncio
import logging

from property_search.config import get_settings
from property_search.infrastructure.database import create_engine, create_session_factory
from property_search.infrastructure.llm import EmbeddingProviderFactory
from property_search.infrastructure.logging_config import setup_logging
from property_search.infrastructure.services import EmbeddingMaintenanceService, EmbeddingService

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk re-index of property embeddings")
    parser.add_argument("--force", action="store_true", help="re-embed every property")
    parser.add_argument(
        "--max-age-days",
        type=int,
        default=None,
        help="also refresh embeddings computed more than N days ago",
    )
    return parser.parse_args(argv)


async def reindex(force: bool, max_age_days) -> dict:
    settings = get_settings()
    engine = create_engine(settings)
    provider = EmbeddingProviderFactory.create(settings)
    embeddings = EmbeddingService(provider)

    try:
        async with create_session_factory(engine)() as session:
            service = EmbeddingMaintenanceService(session, embeddings)
            return await service.reindex(force=force, max_age_days=max_age_days)
    finally:
        await provider.close()
        await engine.dispose()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(get_settings().log_level)

    stats = asyncio.run(reindex(args.force, args.max_age_days))
    logger.info(f"🛠️ Re-index stats: {stats}")

    return 1 if stats["failed"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
