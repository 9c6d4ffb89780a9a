from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from finance_mcp.core.migrations import migrate_legacy_owner_columns

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _ensure_sqlite_directory(url: str) -> None:
    database_url = make_url(url)
    if database_url.get_backend_name() != "sqlite":
        return
    path = database_url.database
    if not path or path == ":memory:" or path.startswith("file:"):
        return
    Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)


def _install_sqlite_pragmas(engine: AsyncEngine, busy_timeout_ms: int) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        pragmas = (
            "PRAGMA journal_mode=WAL",
            "PRAGMA synchronous=NORMAL",
            "PRAGMA foreign_keys=ON",
            f"PRAGMA busy_timeout={int(busy_timeout_ms)}",
        )

        for pragma in pragmas:
            cursor.execute(pragma)
            if pragma.startswith("PRAGMA journal_mode"):
                cursor.fetchone()
        cursor.close()


class Database:
    """Own the async engine and session factory for one process lifetime.

    Call :meth:`connect` at startup and :meth:`dispose` at shutdown. Each tool
    call opens its own session through :meth:`session`.
    """

    def __init__(self, url: str, *, echo: bool = False, busy_timeout_ms: int = 5000) -> None:
        self.url = url
        self.echo = echo
        self.busy_timeout_ms = busy_timeout_ms
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine, migrate legacy layouts and create missing tables."""
        if self._engine is not None:
            return

        # Register tables on Base.metadata before create_all.
        from finance_mcp.domain.categories import models as _categories  # noqa: F401
        from finance_mcp.domain.transactions import models as _transactions  # noqa: F401

        _ensure_sqlite_directory(self.url)
        engine = create_async_engine(self.url, echo=self.echo, future=True)
        if make_url(self.url).get_backend_name() == "sqlite":
            _install_sqlite_pragmas(engine, self.busy_timeout_ms)

        async with engine.begin() as conn:
            migrated = await conn.run_sync(migrate_legacy_owner_columns)
            await conn.run_sync(Base.metadata.create_all)

        if migrated:
            logger.info("Renamed legacy owner column on: %s", ", ".join(migrated))

        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database ready at %s", make_url(self.url).render_as_string(hide_password=True))

    def session(self) -> AsyncSession:
        """Return a new session; use it as ``async with database.session() as db``."""
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()

    async def ping(self) -> str | None:
        """Round-trip to the store and return SQLite's journal mode, if any."""
        async with self.engine.connect() as conn:
            if conn.dialect.name == "sqlite":
                return await conn.scalar(text("PRAGMA journal_mode"))
            await conn.execute(text("SELECT 1"))
        return None

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None


__all__ = ["Base", "Database"]
