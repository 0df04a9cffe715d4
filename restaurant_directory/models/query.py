"""Data models for paginated and filtered restaurant lookups."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from restaurant_directory.models.restaurant import Restaurant

# Largest integer a JSON client can send without losing precision
MAX_SAFE_INTEGER = 2**53 - 1
# Largest value a 64-bit SQL INTEGER can hold
MAX_SQL_INTEGER = 2**63 - 1


class PageRequest(BaseModel):
    """Page coordinates for a paginated listing."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(..., ge=1, description="1-based page index")
    page_size: int = Field(
        ..., ge=1, le=MAX_SQL_INTEGER, description="Maximum records per page"
    )

    @model_validator(mode="after")
    def _skip_fits_in_store(self) -> "PageRequest":
        if self.skip > MAX_SQL_INTEGER:
            raise ValueError(
                f"page {self.page} with page_size {self.page_size} "
                f"skips more than {MAX_SQL_INTEGER} records"
            )
        return self

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def offset(self) -> int:
        """1-based display position of the first record on this page."""
        return self.skip + 1


class RestaurantQuery(BaseModel):
    """Composite filter for restaurant search.

    Text fields are case-insensitive substring matches where an empty string
    matches everything. Prices are bounds on the restaurant's own price range.
    Unknown fields are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = ""
    address: str = ""
    location: str = ""
    cuisine: str = ""
    award: str = ""
    country: str = ""
    min_price: int = Field(
        default=0, ge=0, le=MAX_SAFE_INTEGER, description="Lower bound for min_price"
    )
    max_price: int = Field(
        default=MAX_SAFE_INTEGER,
        ge=0,
        le=MAX_SAFE_INTEGER,
        description="Upper bound for max_price",
    )


class Page(BaseModel):
    """One page of a listing plus its pagination metadata."""

    records: list[Restaurant] = Field(default_factory=list)
    last_page: int = Field(..., description="Number of the last non-empty page")
    total_count: int = Field(..., description="Records matching the filter")
    offset: int = Field(..., description="1-based position of the first record")


class Acknowledgement(BaseModel):
    """Result of a bulk write that does not report per-record results."""

    status: Literal["ok"] = "ok"
    matched: int = Field(default=0, description="Number of records updated")
