"""Errors raised by the restaurant data-access layer."""

from pydantic import ValidationError


class RestaurantStoreError(Exception):
    """Base class for restaurant store errors."""


class NotFoundError(RestaurantStoreError):
    """A write or proximity search needs a restaurant that does not exist."""

    def __init__(self, restaurant_id: int) -> None:
        self.restaurant_id = restaurant_id
        super().__init__(f"Restaurant {restaurant_id} not found")


class StoreUnavailableError(RestaurantStoreError):
    """The underlying store could not be reached."""


class InvalidArgumentError(RestaurantStoreError, ValueError):
    """An argument was out of range or malformed."""

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidArgumentError":
        """Build an error listing every field pydantic rejected."""
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return cls(problems)
