"""Property view counter."""

import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from property_search.domain.entities import Property

logger = logging.getLogger(__name__)


async def record_property_view(
    session_factory: async_sessionmaker[AsyncSession],
    property_id: int,
) -> None:
    """
    Increments view_count in its own session.

    Runs as a background task after the detail response is sent. Errors are
    logged and dropped: a lost increment never fails the request.
    """
    try:
        async with session_factory() as session:
            await session.execute(
                update(Property)
                .where(Property.id == property_id)
                .values(view_count=Property.view_count + 1)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
    except SQLAlchemyError as e:
        logger.warning(f"Failed to increment view count for property {property_id}: {e}")
