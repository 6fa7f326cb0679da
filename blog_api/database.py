"""
Blog API — SQL Engine and Session Factory
===========================================

What:  Async SQLAlchemy engine construction, session factory, and ORM base.
Why:   The sql store backend and the Alembic environment share one way of
       connecting to the database.
How:   build_engine() applies pool settings for server databases and leaves
       SQLite on its default pool; build_session_factory() returns a
       sessionmaker with expire_on_commit disabled.
Who:   Used by SqlBlogStore and alembic/env.py.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blog_api.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so Alembic can autogenerate migrations
    and tests can create the schema with Base.metadata.create_all.
    """
    pass


def build_engine(url: str, config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite pools reject size arguments, so pool settings are only applied to
    server databases.
    """
    config = config or default_settings
    kwargs = {"echo": config.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: attributes stay readable after commit, so a store
    method can commit and then convert the row to a document.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
