"""Data models for restaurant records."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RestaurantCreate(BaseModel):
    """Full attribute set required to create a restaurant."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Restaurant name")
    address: str = Field(..., description="Street address")
    location: str = Field(..., description="Free-text area name")
    min_price: float = Field(..., description="Lowest menu price")
    max_price: float = Field(..., description="Highest menu price")
    currency: str = Field(..., description="Currency code of the prices")
    cuisine: str = Field(..., description="Type of cuisine")
    longitude: float = Field(..., description="WGS84 longitude in degrees")
    latitude: float = Field(..., description="WGS84 latitude in degrees")
    phone_number: str = Field(..., description="Restaurant phone number")
    url: str = Field(..., description="Directory listing URL")
    website_url: str = Field(..., description="Restaurant website")
    award: str = Field(..., description="Award name, empty if none")
    country: str = Field(..., description="Country name")


class Restaurant(BaseModel):
    """Detached snapshot of a stored restaurant."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(..., description="Store-generated identity")
    name: str
    address: str
    location: str
    min_price: float
    max_price: float
    currency: str
    cuisine: str
    longitude: float | None = None
    latitude: float | None = None
    phone_number: str
    url: str
    website_url: str
    award: str = ""
    country: str
    bookmark_count: int = Field(default=0, description="Number of user bookmarks")

    @field_validator("bookmark_count", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("award", mode="before")
    @classmethod
    def _missing_award_is_empty(cls, value):
        return "" if value is None else value


class NearbyRestaurant(Restaurant):
    """A restaurant annotated with its distance from a proximity pivot."""

    distance: float = Field(..., description="Distance from the pivot in kilometers")
