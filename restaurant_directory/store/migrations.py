"""Data migrations for the restaurant store."""

import logging

from sqlalchemy import update

from restaurant_directory.store.database import Database, store_errors
from restaurant_directory.store.schema import RestaurantRecord

logger = logging.getLogger(__name__)


async def normalize_bookmark_counts(database: Database) -> int:
    """Backfill a zero bookmark count on every restaurant missing one.

    Idempotent: a second run finds nothing to change.

    Args:
        database: The store to normalize

    Returns:
        Number of restaurants that were updated
    """
    statement = (
        update(RestaurantRecord)
        .where(RestaurantRecord.bookmark_count.is_(None))
        .values(bookmark_count=0)
        .execution_options(synchronize_session=False)
    )

    with store_errors():
        async with database.session() as session:
            result = await session.execute(statement)
            await session.commit()

    updated = result.rowcount
    if updated > 0:
        logger.info(f"Backfilled bookmark count on {updated} restaurants")
    return updated
