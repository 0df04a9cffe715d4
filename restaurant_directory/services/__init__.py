"""Restaurant data-access services."""

from restaurant_directory.services.filters import FieldEquals, MatchAll, QueryFilter
from restaurant_directory.services.pagination import paginate
from restaurant_directory.services.restaurant_service import RestaurantService

__all__ = ["FieldEquals", "MatchAll", "QueryFilter", "RestaurantService", "paginate"]
