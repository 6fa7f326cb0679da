"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_store: AsyncMock BlogStore with the real identifier check
    ├── sql_store: SqlBlogStore on a throwaway SQLite file (aiosqlite)
    ├── test_client: HTTPX AsyncClient over an app serving sql_store
    ├── mock_store_client: HTTPX AsyncClient over an app serving mock_store
    ├── sample_blog_payload: Valid POST /blogs body
    └── sample_blog_document: Document as returned by a store
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["STORE_BACKEND"] = "sql"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="blog_api_test_"), "unused.db"
)
os.environ["MONGODB_URI"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blog_api.main import create_app
from blog_api.stores.base import BlogStore
from blog_api.stores.sql_store import SqlBlogStore
from blog_api.database import build_engine


@pytest.fixture
def mock_store():
    """
    A BlogStore whose operations are AsyncMocks.

    is_valid_id keeps the real ObjectId check so identifier validation
    behaves as in production; tests assert on the async methods to prove
    which store calls were (or were not) made.
    """
    store = AsyncMock(spec=BlogStore)
    store.is_valid_id = MagicMock(side_effect=BlogStore.is_valid_id)
    return store


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    """SqlBlogStore on a fresh SQLite file with the schema created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'blogs.db'}")
    store = SqlBlogStore(engine)
    await store.create_schema()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def test_client(sql_store):
    """
    HTTPX AsyncClient talking to an app backed by the real SQL store.

    ASGITransport does not run the lifespan, so the store is injected
    through create_app().
    """
    app = create_app(store=sql_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_store_client(mock_store):
    """HTTPX AsyncClient talking to an app backed by mock_store."""
    app = create_app(store=mock_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_blog_payload():
    return {
        "name": "Ada",
        "email": "ada@example.com",
        "title": "Notes on the Analytical Engine",
        "description": "The engine weaves algebraic patterns.",
    }


@pytest.fixture
def sample_blog_document():
    return {
        "id": "65a1b2c3d4e5f60718293a4b",
        "name": "Ada",
        "email": "ada@example.com",
        "user_img": "",
        "cover_img": "https://img.example.com/cover.png",
        "title": "Notes on the Analytical Engine",
        "description": "The engine weaves algebraic patterns.",
        "date": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
    }
