"""Persistence for restaurant records."""

from restaurant_directory.store.database import (
    Database,
    UnitOfWork,
    init_database,
    store_errors,
)
from restaurant_directory.store.migrations import normalize_bookmark_counts
from restaurant_directory.store.schema import Base, RestaurantRecord

__all__ = [
    "Base",
    "Database",
    "RestaurantRecord",
    "UnitOfWork",
    "init_database",
    "normalize_bookmark_counts",
    "store_errors",
]
