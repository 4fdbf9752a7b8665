"""SQL Lookup Service

Uniqueness lookups against a relational database through SQLAlchemy's async
engine. Collections are table names and fields are column names; queries are
built with lightweight ``table()``/``column()`` constructs so no ORM models
are required.

Usage:
    lookup = SqlLookupService.from_settings()
    result = await form.validate_async(lookup, document)
    await lookup.dispose()
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import column, func, select, table
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from formrules.config import Settings, get_settings
from formrules.errors import Ok, Result, ServiceError, map_db_errors
from formrules.logging import db_logger

log = db_logger()


def engine_from_settings(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {"echo": settings.LOG_SQL}
    if "sqlite" not in settings.DATABASE_URL:
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_size": 5,
            "max_overflow": 10,
        })
    return create_async_engine(settings.DATABASE_URL, **engine_kwargs)


class SqlLookupService:
    """Counts matching rows with ``SELECT count(*)``.

    ``id_column`` names the identity column compared against ``exclude``.
    """

    def __init__(self, engine: AsyncEngine, id_column: str = "id"):
        self.engine = engine
        self.id_column = id_column
        self._sessions = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SqlLookupService:
        settings = settings or get_settings()
        return cls(engine_from_settings(settings), id_column=settings.UNIQUE_ID_COLUMN)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._sessions() as session:
            yield session

    @map_db_errors("lookup.sql")
    async def count(
        self,
        collection: str,
        field: str,
        value: str | int | float,
        exclude: Any = None,
    ) -> Result[int, ServiceError]:
        records = table(collection, *(column(name) for name in dict.fromkeys((field, self.id_column))))
        query = select(func.count()).select_from(records).where(records.c[field] == value)
        if exclude is not None:
            query = query.where(records.c[self.id_column] != exclude)

        async with self.session() as session:
            count = (await session.execute(query)).scalar_one()

        log.debug("unique_lookup", collection=collection, field=field, matches=count, excluded=exclude is not None)
        return Ok(count)

    async def dispose(self) -> None:
        await self.engine.dispose()
