"""
EMBEDDING MAINTENANCE
=====================

Keeps `properties.embedding` in sync with the descriptive fields.

- update_embedding: embed a snapshot of the fields and write the vector
- refresh_property: same, reading the snapshot from the row
- reindex: bulk sweep for first setup, model changes or stale rows

When to trigger an update is decided by the listing CRUD layer (after
create/publish/edit of a descriptive field). This module only performs it.

Writes are one UPDATE per row. Two concurrent updates for the same
property resolve as last-write-wins; a failed embedding call leaves the
previous vector untouched.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from property_search.domain.entities import Property, PropertyStatus
from property_search.domain.exceptions import EmbeddingServiceError, StorageError
from property_search.domain.search import PropertyEmbeddingInput
from .embedding_service import (
    EmbeddingService,
    compute_content_hash,
    property_to_embedding_text,
)

logger = logging.getLogger(__name__)


def fields_from_property(prop: Property) -> PropertyEmbeddingInput:
    """Snapshot of the descriptive fields of a Property row."""
    return PropertyEmbeddingInput(
        title=prop.title,
        description=prop.description,
        property_type=prop.property_type,
        transaction_type=prop.transaction_type,
        province=prop.province,
        city=prop.city,
        barangay=prop.barangay,
        landmark=prop.landmark,
        bedrooms=prop.bedrooms,
        bathrooms=prop.bathrooms,
        floor_area=float(prop.floor_area) if prop.floor_area is not None else None,
        lot_area=float(prop.lot_area) if prop.lot_area is not None else None,
        furnishing=prop.furnishing,
        features=tuple(prop.features or ()),
    )


class EmbeddingMaintenanceService:
    """Writes property embeddings."""

    def __init__(self, db: AsyncSession, embeddings: EmbeddingService):
        self.db = db
        self.embeddings = embeddings

    async def update_embedding(self, property_id: int, fields: PropertyEmbeddingInput) -> None:
        """
        Embeds `fields` and stores the vector on the property row together
        with embedded_at = now().

        Raises EmbeddingServiceError before touching the row if the model
        call fails, StorageError if the write fails.
        """
        vector = await self.embeddings.embed_property(fields)
        content_hash = compute_content_hash(property_to_embedding_text(fields))

        stmt = (
            update(Property)
            .where(Property.id == property_id)
            .values(
                embedding=vector,
                embedded_at=func.now(),
                embedding_hash=content_hash,
            )
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Failed to store embedding for property {property_id}: {e}") from e

        if result.rowcount == 0:
            logger.warning(f"Embedding computed for missing property {property_id}, nothing written")
        else:
            logger.info(f"✅ Embedding updated for property {property_id}")

    async def refresh_property(self, property_id: int) -> bool:
        """
        Re-embeds a property from its current row.
        Returns False when the property does not exist.
        """
        try:
            prop = await self.db.get(Property, property_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load property {property_id}: {e}") from e

        if prop is None:
            return False

        await self.update_embedding(prop.id, fields_from_property(prop))
        return True

    async def reindex(
        self,
        force: bool = False,
        max_age_days: Optional[int] = None,
    ) -> Dict[str, int]:
        """
        Re-embeds every property that needs it.

        A row is skipped when its stored hash matches the current text and,
        if `max_age_days` is given, it was embedded within that window.
        `force` re-embeds everything. Rows failing on the embedding model
        are counted and the sweep continues; storage errors abort it.

        Returns:
            Dict with counters: updated, skipped, failed
        """
        stats = {"updated": 0, "skipped": 0, "failed": 0}
        cutoff = None
        if max_age_days is not None:
            cutoff = datetime.now(timezone.utc) - timedelta(days=max_age_days)

        try:
            # Rows already in the session may hold a vector written by a Core UPDATE
            result = await self.db.execute(
                select(Property)
                .order_by(Property.id)
                .execution_options(populate_existing=True)
            )
            properties = result.scalars().all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list properties for reindex: {e}") from e

        logger.info(f"📦 Re-index sweep over {len(properties)} properties (force={force})")

        for idx, prop in enumerate(properties, 1):
            fields = fields_from_property(prop)

            if not force and not self._needs_refresh(prop, fields, cutoff):
                stats["skipped"] += 1
                continue

            try:
                await self.update_embedding(prop.id, fields)
                stats["updated"] += 1
            except EmbeddingServiceError as e:
                logger.error(f"[{idx}/{len(properties)}] Embedding failed for property {prop.id}: {e}")
                stats["failed"] += 1

        logger.info(f"✅ Re-index finished: {stats}")
        return stats

    @staticmethod
    def _needs_refresh(
        prop: Property,
        fields: PropertyEmbeddingInput,
        cutoff: Optional[datetime],
    ) -> bool:
        if prop.embedding is None or prop.embedding_hash is None:
            return True
        if prop.embedding_hash != compute_content_hash(property_to_embedding_text(fields)):
            return True
        if cutoff is not None and (prop.embedded_at is None or prop.embedded_at < cutoff):
            return True
        return False

    async def embedding_status(self) -> Dict[str, int]:
        """Indexing coverage counters."""
        try:
            total = (await self.db.execute(select(func.count(Property.id)))).scalar_one()
            embedded = (
                await self.db.execute(
                    select(func.count(Property.id)).where(Property.embedding.is_not(None))
                )
            ).scalar_one()
            available_missing = (
                await self.db.execute(
                    select(func.count(Property.id)).where(
                        Property.status == PropertyStatus.AVAILABLE.value,
                        Property.embedding.is_(None),
                    )
                )
            ).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read embedding status: {e}") from e

        return {
            "total": total,
            "embedded": embedded,
            "missing": total - embedded,
            "available_missing": available_missing,
        }
