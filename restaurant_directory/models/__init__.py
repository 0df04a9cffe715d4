"""Data models for the restaurant directory."""

from restaurant_directory.models.query import (
    MAX_SAFE_INTEGER,
    Acknowledgement,
    Page,
    PageRequest,
    RestaurantQuery,
)
from restaurant_directory.models.restaurant import (
    NearbyRestaurant,
    Restaurant,
    RestaurantCreate,
)

__all__ = [
    "MAX_SAFE_INTEGER",
    "Acknowledgement",
    "NearbyRestaurant",
    "Page",
    "PageRequest",
    "Restaurant",
    "RestaurantCreate",
    "RestaurantQuery",
]
