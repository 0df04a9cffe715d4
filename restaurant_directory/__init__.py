"""Data-access layer for a restaurant directory."""

from restaurant_directory.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    RestaurantStoreError,
    StoreUnavailableError,
)
from restaurant_directory.services import RestaurantService
from restaurant_directory.store import Database, UnitOfWork, init_database

__all__ = [
    "Database",
    "InvalidArgumentError",
    "NotFoundError",
    "RestaurantService",
    "RestaurantStoreError",
    "StoreUnavailableError",
    "UnitOfWork",
    "init_database",
]
