"""Generic page arithmetic over filtered restaurant listings."""

import logging
import math

from pydantic import ValidationError
from sqlalchemy import func, select

from restaurant_directory.exceptions import InvalidArgumentError
from restaurant_directory.models import Page, PageRequest, Restaurant
from restaurant_directory.services.filters import RestaurantFilter
from restaurant_directory.store import Database, RestaurantRecord, store_errors

logger = logging.getLogger(__name__)


def page_request(page: int, page_size: int) -> PageRequest:
    """Validate page coordinates.

    Raises:
        InvalidArgumentError: If page or page_size is below 1 or not an integer
    """
    try:
        return PageRequest(page=page, page_size=page_size)
    except ValidationError as exc:
        raise InvalidArgumentError.from_validation_error(exc) from exc


async def paginate(
    database: Database, restaurant_filter: RestaurantFilter, page: int, page_size: int
) -> Page:
    """Fetch one page of the restaurants matching ``restaurant_filter``.

    The total is counted and the page fetched in two separate round trips, so
    under concurrent writes the two may disagree.

    Args:
        database: Store to query
        restaurant_filter: Filter describing the listing
        page: 1-based page index
        page_size: Maximum number of records on the page

    Returns:
        Page with records ordered by id and its pagination metadata
    """
    request = page_request(page, page_size)
    clauses = restaurant_filter.clauses()

    count_statement = (
        select(func.count()).select_from(RestaurantRecord).where(*clauses)
    )
    page_statement = (
        select(RestaurantRecord)
        .where(*clauses)
        .order_by(RestaurantRecord.id)
        .offset(request.skip)
        .limit(request.page_size)
    )

    with store_errors():
        async with database.session() as session:
            total_count = await session.scalar(count_statement) or 0

        async with database.session() as session:
            rows = await session.scalars(page_statement)
            records = [Restaurant.model_validate(row) for row in rows]

    last_page = math.ceil(total_count / request.page_size)
    logger.debug(
        f"Page {request.page}/{last_page} of {restaurant_filter!r}: "
        f"{len(records)} of {total_count} restaurants"
    )

    return Page(
        records=records,
        last_page=last_page,
        total_count=total_count,
        offset=request.offset,
    )
