"""Filters for paginated restaurant listings."""

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import ColumnElement

from restaurant_directory.models import RestaurantQuery
from restaurant_directory.store import RestaurantRecord

TEXT_FIELDS = ("name", "address", "location", "cuisine", "award", "country")


class RestaurantFilter(Protocol):
    """Anything that can describe which restaurants a listing covers."""

    def clauses(self) -> list[ColumnElement[bool]]: ...


class MatchAll:
    """Every restaurant."""

    def clauses(self) -> list[ColumnElement[bool]]:
        return []

    def __repr__(self) -> str:
        return "MatchAll()"


@dataclass(frozen=True)
class FieldEquals:
    """Restaurants whose ``field`` is exactly ``value``."""

    field: str
    value: str

    def clauses(self) -> list[ColumnElement[bool]]:
        return [getattr(RestaurantRecord, self.field) == self.value]


@dataclass(frozen=True)
class QueryFilter:
    """Restaurants matching every predicate of a composite search query."""

    query: RestaurantQuery

    def clauses(self) -> list[ColumnElement[bool]]:
        clauses = []
        for field in TEXT_FIELDS:
            pattern = getattr(self.query, field)
            # An empty pattern also matches rows where the column is empty or NULL
            if pattern:
                column = getattr(RestaurantRecord, field)
                clauses.append(column.icontains(pattern, autoescape=True))

        clauses.append(RestaurantRecord.min_price >= self.query.min_price)
        clauses.append(RestaurantRecord.max_price <= self.query.max_price)
        return clauses
