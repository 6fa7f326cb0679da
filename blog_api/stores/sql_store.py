"""
Blog API — SQL Store
======================

What:  BlogStore backed by the `blogs` table through async SQLAlchemy.
Why:   Runs the same API on PostgreSQL (asyncpg) or SQLite (aiosqlite)
       when a MongoDB deployment is not available.
How:   Every method opens its own session and commits on success, so one
       store call is one transaction. Identifiers are ObjectId strings
       generated here.

Schema management:
    Production schemas come from Alembic (alembic/versions). create_schema()
    exists for tests and throwaway SQLite files.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from blog_api.config import Settings
from blog_api.database import Base, build_engine, build_session_factory
from blog_api.models.blog import Blog
from blog_api.stores.base import BlogDocument, BlogStore

logger = logging.getLogger(__name__)


class SqlBlogStore(BlogStore):
    """Document store over the `blogs` table."""

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self._engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    @classmethod
    def from_settings(cls, config: Settings) -> "SqlBlogStore":
        engine = build_engine(config.database_url, config)
        logger.info("Using SQL store at %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    async def create_schema(self) -> None:
        """Create the `blogs` table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def list_blogs(self) -> List[BlogDocument]:
        async with self._session_factory() as session:
            result = await session.execute(select(Blog).order_by(Blog.date.desc()))
            return [blog.to_document() for blog in result.scalars().all()]

    async def get_blog(self, blog_id: str) -> Optional[BlogDocument]:
        async with self._session_factory() as session:
            blog = await session.get(Blog, blog_id)
            return blog.to_document() if blog is not None else None

    async def insert_blog(self, document: BlogDocument) -> BlogDocument:
        blog = Blog(id=self.new_id(), **document)
        async with self._session_factory() as session:
            session.add(blog)
            await session.commit()
        return blog.to_document()

    async def update_blog(
        self, blog_id: str, fields: BlogDocument
    ) -> Optional[BlogDocument]:
        async with self._session_factory() as session:
            blog = await session.get(Blog, blog_id)
            if blog is None:
                return None
            for key, value in fields.items():
                setattr(blog, key, value)
            await session.commit()
            return blog.to_document()

    async def delete_blog(self, blog_id: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(delete(Blog).where(Blog.id == blog_id))
            await session.commit()
            return result.rowcount

    async def ping(self) -> bool:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def close(self) -> None:
        await self._engine.dispose()
