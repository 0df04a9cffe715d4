"""Shared fixtures for restaurant store tests."""

import pytest
from sqlalchemy import insert

from restaurant_directory.services import RestaurantService
from restaurant_directory.store import Database, RestaurantRecord

# (latitude, longitude)
SEOUL_CITY_HALL = (37.5665, 126.9780)
GANGNAM_STATION = (37.4979, 127.0276)
SUWON_STATION = (37.2664, 127.0000)
BUSAN_STATION = (35.1151, 129.0422)


def make_restaurant(**overrides) -> dict:
    """Build a full restaurant attribute set."""
    attrs = {
        "name": "Test Restaurant",
        "address": "110 Sejong-daero, Jung-gu",
        "location": "Jung-gu",
        "min_price": 20,
        "max_price": 50,
        "currency": "KRW",
        "cuisine": "Korean",
        "latitude": SEOUL_CITY_HALL[0],
        "longitude": SEOUL_CITY_HALL[1],
        "phone_number": "+82-2-120",
        "url": "https://guide.example.com/test-restaurant",
        "website_url": "https://test-restaurant.example.com",
        "award": "",
        "country": "South Korea",
    }
    attrs.update(overrides)
    return attrs


@pytest.fixture
async def database(tmp_path):
    """Create a fresh SQLite database for each test."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'restaurants.db'}")
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def restaurant_service(database):
    """Create a restaurant service backed by the test database."""
    return RestaurantService(database)


@pytest.fixture
def insert_raw(database):
    """Insert a row directly, bypassing the service defaults."""

    async def _insert(**attrs) -> int:
        async with database.engine.begin() as conn:
            result = await conn.execute(insert(RestaurantRecord.__table__).values(**attrs))
        return result.inserted_primary_key[0]

    return _insert
