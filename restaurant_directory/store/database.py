"""Async engine, sessions and units of work for the restaurant store."""

import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from restaurant_directory.config import Config, get_config
from restaurant_directory.exceptions import StoreUnavailableError
from restaurant_directory.store.schema import Base

logger = logging.getLogger(__name__)


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate driver-level connection failures into StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        logger.warning(f"Restaurant store unavailable: {exc.orig or exc}")
        raise StoreUnavailableError(str(exc.orig or exc)) from exc


class UnitOfWork:
    """A caller-managed transaction.

    Every store call made on the caller's behalf inside the transaction runs on
    ``session``. Code receiving a UnitOfWork never commits or rolls it back;
    the owner of the ``Database.unit_of_work()`` block does.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session


class Database:
    """Owns the async engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine = create_async_engine(url, echo=echo)
        self._session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Short-lived session for a single read or self-contained write."""
        async with self._session_factory() as session:
            yield session

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[UnitOfWork]:
        """Open a transaction that commits on clean exit and rolls back on error.

        Only opening and committing the transaction are translated into
        StoreUnavailableError; errors raised inside the block propagate as-is.
        """
        async with self._session_factory() as session:
            with store_errors():
                await session.begin()
            try:
                yield UnitOfWork(session)
            except BaseException:
                await session.rollback()
                raise
            with store_errors():
                await session.commit()

    async def create_schema(self) -> None:
        with store_errors():
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Restaurant schema ready")

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_database(cfg: Config | None = None) -> Database:
    """Create the database handle, the schema and run startup migrations."""
    from restaurant_directory.store.migrations import normalize_bookmark_counts

    if cfg is None:
        cfg = get_config()

    database = Database(cfg.database_url, echo=cfg.database_echo)
    await database.create_schema()

    if cfg.normalize_bookmarks_on_startup:
        await normalize_bookmark_counts(database)

    return database
