"""Tests for configuration and database startup."""

import logging

import pytest
from sqlalchemy import insert, select

from restaurant_directory.config import Config
from restaurant_directory.exceptions import StoreUnavailableError
from restaurant_directory.services import RestaurantService
from restaurant_directory.store import Database, RestaurantRecord, init_database
from tests.conftest import make_restaurant


async def create_legacy_database(url: str) -> None:
    """Create a database holding one row without a bookmark count."""
    legacy = Database(url)
    await legacy.create_schema()
    async with legacy.engine.begin() as conn:
        await conn.execute(
            insert(RestaurantRecord.__table__).values(
                **make_restaurant(), bookmark_count=None
            )
        )
    await legacy.dispose()


async def stored_bookmark_counts(database: Database) -> list[int | None]:
    async with database.engine.connect() as conn:
        result = await conn.execute(select(RestaurantRecord.bookmark_count))
        return list(result.scalars())


class TestConfig:
    """Tests for the Config settings model."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("NORMALIZE_BOOKMARKS_ON_STARTUP", raising=False)
        cfg = Config(_env_file=None)

        assert cfg.database_url == "sqlite+aiosqlite:///restaurants.db"
        assert cfg.database_echo is False
        assert cfg.normalize_bookmarks_on_startup is True
        assert cfg.is_in_memory() is False

    def test_reads_environment(self, monkeypatch):
        """Test that settings come from environment variables."""
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///other.db")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        cfg = Config(_env_file=None)

        assert cfg.database_url == "sqlite+aiosqlite:///other.db"
        assert cfg.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "url", ["sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite://"]
    )
    def test_in_memory_warning(self, url, caplog):
        """Test that an in-memory database is flagged."""
        with caplog.at_level(logging.WARNING, logger="restaurant_directory.config"):
            cfg = Config(_env_file=None, database_url=url)

        assert cfg.is_in_memory() is True
        assert "in-memory" in caplog.text


class TestInitDatabase:
    """Tests for the startup hook."""

    async def test_creates_schema_and_backfills(self, tmp_path):
        """Test that startup normalizes rows without a bookmark count."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'restaurants.db'}"
        await create_legacy_database(url)

        database = await init_database(Config(_env_file=None, database_url=url))
        try:
            counts = await stored_bookmark_counts(database)
            restaurants = await RestaurantService(database).find_all()
        finally:
            await database.dispose()

        assert counts == [0]
        assert [r.bookmark_count for r in restaurants] == [0]

    async def test_skips_backfill_when_disabled(self, tmp_path):
        """Test that the backfill can be turned off."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'restaurants.db'}"
        await create_legacy_database(url)
        cfg = Config(
            _env_file=None, database_url=url, normalize_bookmarks_on_startup=False
        )

        database = await init_database(cfg)
        try:
            counts = await stored_bookmark_counts(database)
        finally:
            await database.dispose()

        assert counts == [None]

    async def test_unreachable_database(self, tmp_path):
        """Test that startup surfaces StoreUnavailableError."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'restaurants.db'}"

        with pytest.raises(StoreUnavailableError):
            await init_database(Config(_env_file=None, database_url=url))
