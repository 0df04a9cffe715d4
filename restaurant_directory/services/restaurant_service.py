"""Restaurant data-access service."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy import func, select, update

from restaurant_directory.exceptions import InvalidArgumentError, NotFoundError
from restaurant_directory.models import (
    Acknowledgement,
    NearbyRestaurant,
    Page,
    Restaurant,
    RestaurantCreate,
    RestaurantQuery,
)
from restaurant_directory.services import geo
from restaurant_directory.services.filters import (
    FieldEquals,
    MatchAll,
    QueryFilter,
)
from restaurant_directory.services.pagination import paginate
from restaurant_directory.store import (
    Database,
    RestaurantRecord,
    UnitOfWork,
    normalize_bookmark_counts,
    store_errors,
)

logger = logging.getLogger(__name__)


class RestaurantService:
    """Service for storing and looking up restaurants.

    Every read opens its own short-lived session and returns detached
    snapshots. Bookmark counter updates run inside a caller-supplied
    UnitOfWork and are committed or rolled back by the caller.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the restaurant service.

        Args:
            database: Store holding the restaurants table
        """
        self.database = database

    # Record store

    async def create(self, attrs: RestaurantCreate | Mapping[str, Any]) -> Restaurant:
        """Insert a new restaurant.

        Args:
            attrs: Full attribute set of the restaurant

        Returns:
            The stored restaurant including its assigned id

        Raises:
            InvalidArgumentError: If an attribute is missing or has the wrong type
        """
        if not isinstance(attrs, RestaurantCreate):
            try:
                attrs = RestaurantCreate.model_validate(attrs)
            except ValidationError as exc:
                raise InvalidArgumentError.from_validation_error(exc) from exc

        record = RestaurantRecord(**attrs.model_dump(), bookmark_count=0)

        with store_errors():
            async with self.database.session() as session:
                session.add(record)
                await session.commit()
                restaurant = Restaurant.model_validate(record)

        logger.info(f"Created restaurant {restaurant.id}: {restaurant.name}")
        return restaurant

    async def find_by_name(self, name: str) -> Restaurant | None:
        """Find the first restaurant with exactly this name.

        Returns:
            Restaurant snapshot if found, None otherwise
        """
        statement = (
            select(RestaurantRecord)
            .where(RestaurantRecord.name == name)
            .order_by(RestaurantRecord.id)
            .limit(1)
        )
        with store_errors():
            async with self.database.session() as session:
                record = (await session.scalars(statement)).first()
                return Restaurant.model_validate(record) if record else None

    async def find_by_id(self, restaurant_id: int) -> Restaurant | None:
        """Find a restaurant by id.

        Returns:
            Restaurant snapshot if found, None otherwise
        """
        with store_errors():
            async with self.database.session() as session:
                record = await session.get(RestaurantRecord, restaurant_id)
                return Restaurant.model_validate(record) if record else None

    async def find_all_by_country(self, country: str) -> list[Restaurant]:
        """Find every restaurant in a country.

        Args:
            country: Exact country name

        Returns:
            Matching restaurants in no particular order, empty if none
        """
        statement = select(RestaurantRecord).where(RestaurantRecord.country == country)
        return await self._find_many(statement)

    async def count_by_country(self, country: str) -> int:
        """Count the restaurants in a country without fetching them."""
        statement = (
            select(func.count())
            .select_from(RestaurantRecord)
            .where(RestaurantRecord.country == country)
        )
        with store_errors():
            async with self.database.session() as session:
                return await session.scalar(statement) or 0

    async def find_all(self) -> list[Restaurant]:
        """Return every restaurant.

        Restaurants without a bookmark count are reported with 0. Persisting
        that default is done by ``normalize_bookmark_counts``.
        """
        return await self._find_many(select(RestaurantRecord))

    async def normalize_bookmark_counts(self) -> int:
        """Backfill missing bookmark counts; returns how many were changed."""
        return await normalize_bookmark_counts(self.database)

    async def _find_many(self, statement) -> list[Restaurant]:
        with store_errors():
            async with self.database.session() as session:
                rows = await session.scalars(statement)
                return [Restaurant.model_validate(row) for row in rows]

    # Paginated listings

    async def find_all_paging(self, page: int, page_size: int) -> Page:
        """List every restaurant, one page at a time, ordered by id."""
        return await paginate(self.database, MatchAll(), page, page_size)

    async def find_all_by_country_paging(
        self, page: int, page_size: int, country: str
    ) -> Page:
        """List the restaurants of one country, one page at a time.

        Args:
            page: 1-based page index
            page_size: Maximum number of records on the page
            country: Exact country name

        Raises:
            InvalidArgumentError: If the page coordinates are out of range
        """
        return await paginate(
            self.database, FieldEquals("country", country), page, page_size
        )

    async def find_all_by_cuisine_paging(
        self, page: int, page_size: int, cuisine: str
    ) -> Page:
        """List the restaurants serving one cuisine, one page at a time.

        Args:
            page: 1-based page index
            page_size: Maximum number of records on the page
            cuisine: Exact cuisine name

        Raises:
            InvalidArgumentError: If the page coordinates are out of range
        """
        return await paginate(
            self.database, FieldEquals("cuisine", cuisine), page, page_size
        )

    async def find_all_by_query(
        self,
        page: int,
        page_size: int,
        query: RestaurantQuery | Mapping[str, Any] | None = None,
        **filters: Any,
    ) -> Page:
        """Search restaurants with a composite filter.

        Filters can be given as a RestaurantQuery, a mapping, or keyword
        arguments. Omitted fields match everything.

        Raises:
            InvalidArgumentError: If a filter field is unknown, a price bound
                is not an integer in range, or the page coordinates are out of
                range
        """
        if not isinstance(query, RestaurantQuery):
            try:
                query = RestaurantQuery.model_validate({**(query or {}), **filters})
            except ValidationError as exc:
                raise InvalidArgumentError.from_validation_error(exc) from exc

        return await paginate(self.database, QueryFilter(query), page, page_size)

    # Proximity search

    async def find_restaurants_near_by_id(
        self, restaurant_id: int
    ) -> list[NearbyRestaurant]:
        """Find restaurants in the same country within 30 km of a pivot.

        The pivot itself is part of the result, first, at distance 0.

        Args:
            restaurant_id: Id of the pivot restaurant

        Returns:
            Restaurants annotated with their distance in km, nearest first

        Raises:
            NotFoundError: If the pivot does not exist
            InvalidArgumentError: If the pivot has no usable coordinates
        """
        pivot = await self.find_by_id(restaurant_id)
        if pivot is None:
            logger.warning(f"Proximity pivot {restaurant_id} not found")
            raise NotFoundError(restaurant_id)

        if not geo.is_valid_coordinate(pivot.latitude, pivot.longitude):
            raise InvalidArgumentError(
                f"Restaurant {restaurant_id} has no valid coordinates"
            )

        south, north = geo.latitude_band(pivot.latitude, geo.MAX_DISTANCE_METERS)
        statement = select(RestaurantRecord).where(
            RestaurantRecord.country == pivot.country,
            RestaurantRecord.latitude.between(south, north),
            RestaurantRecord.longitude.between(-180.0, 180.0),
        )
        candidates = await self._find_many(statement)

        origin = (pivot.latitude, pivot.longitude)
        nearby = []
        for candidate in candidates:
            meters = geo.distance_meters(
                origin, (candidate.latitude, candidate.longitude)
            )
            if meters <= geo.MAX_DISTANCE_METERS:
                nearby.append(
                    NearbyRestaurant(
                        **candidate.model_dump(),
                        distance=meters * geo.DISTANCE_MULTIPLIER,
                    )
                )

        nearby.sort(key=lambda restaurant: (restaurant.distance, restaurant.id))
        logger.debug(
            f"Found {len(nearby)} restaurants near {restaurant_id} "
            f"out of {len(candidates)} candidates"
        )
        return nearby

    # Bookmark counter

    async def bookmark(self, restaurant_id: int, uow: UnitOfWork) -> Restaurant:
        """Add one to a restaurant's bookmark count inside the caller's transaction.

        Returns:
            The restaurant after the update

        Raises:
            NotFoundError: If the restaurant does not exist
        """
        return await self._add_bookmarks(restaurant_id, 1, uow)

    async def unbookmark(self, restaurant_id: int, uow: UnitOfWork) -> Restaurant:
        """Subtract one from a restaurant's bookmark count.

        The count is not clamped at zero; only call this for an existing bookmark.
        """
        return await self._add_bookmarks(restaurant_id, -1, uow)

    async def unbookmark_by_list(
        self, restaurant_ids: Iterable[int], uow: UnitOfWork
    ) -> Acknowledgement:
        """Subtract one from the bookmark count of every listed restaurant.

        Used when the user holding the bookmarks goes away. Ids listed twice
        are decremented once.
        """
        ids = set(restaurant_ids)
        statement = (
            update(RestaurantRecord)
            .where(RestaurantRecord.id.in_(ids))
            .values(bookmark_count=func.coalesce(RestaurantRecord.bookmark_count, 0) - 1)
            .execution_options(synchronize_session=False)
        )

        with store_errors():
            result = await uow.session.execute(statement)

        logger.info(f"Removed bookmarks from {result.rowcount} restaurants")
        return Acknowledgement(matched=result.rowcount)

    async def _add_bookmarks(
        self, restaurant_id: int, amount: int, uow: UnitOfWork
    ) -> Restaurant:
        statement = (
            update(RestaurantRecord)
            .where(RestaurantRecord.id == restaurant_id)
            .values(
                bookmark_count=func.coalesce(RestaurantRecord.bookmark_count, 0)
                + amount
            )
            .execution_options(synchronize_session=False)
        )
        reload = (
            select(RestaurantRecord)
            .where(RestaurantRecord.id == restaurant_id)
            .execution_options(populate_existing=True)
        )

        with store_errors():
            result = await uow.session.execute(statement)
            if result.rowcount == 0:
                logger.warning(f"Cannot update bookmarks of missing restaurant {restaurant_id}")
                raise NotFoundError(restaurant_id)
            record = await uow.session.scalar(reload)

        logger.info(
            f"Bookmark count of restaurant {restaurant_id} changed by {amount:+d} "
            f"to {record.bookmark_count}"
        )
        return Restaurant.model_validate(record)
