"""SQLAlchemy mapping for the restaurants table."""

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class RestaurantRecord(Base):
    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    address: Mapped[str] = mapped_column(String)
    location: Mapped[str] = mapped_column(String)
    min_price: Mapped[float]
    max_price: Mapped[float]
    currency: Mapped[str] = mapped_column(String(8))
    cuisine: Mapped[str] = mapped_column(String, index=True)

    # WGS84 degrees; rows without usable coordinates never show up in proximity results
    longitude: Mapped[float | None]
    latitude: Mapped[float | None]

    phone_number: Mapped[str] = mapped_column(String)
    url: Mapped[str] = mapped_column(String)
    website_url: Mapped[str] = mapped_column(String)
    award: Mapped[str | None] = mapped_column(String, default="")
    country: Mapped[str] = mapped_column(String, index=True)

    # Nullable so rows written before the counter existed can be backfilled
    bookmark_count: Mapped[int | None] = mapped_column(default=0)

    def __repr__(self) -> str:
        return f"<RestaurantRecord(id={self.id}, name='{self.name}', country='{self.country}')>"
