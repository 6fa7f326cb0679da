# Stores package init
"""
Blog API — Document Store Layer
=================================

What:  Persistence backends for blog documents behind one interface.

Store Inventory:
    - BlogStore (abstract): is-valid-id, list, get, insert, update, delete, ping
    - MongoBlogStore: MongoDB collection via pymongo's async client (default)
    - SqlBlogStore: `blogs` table via async SQLAlchemy

build_store() picks the backend named by STORE_BACKEND.
"""

from blog_api.config import Settings
from blog_api.stores.base import BlogDocument, BlogStore


def build_store(config: Settings) -> BlogStore:
    """Construct the configured store backend. Does not connect eagerly."""
    if config.store_backend == "sql":
        from blog_api.stores.sql_store import SqlBlogStore
        return SqlBlogStore.from_settings(config)

    from blog_api.stores.mongo_store import MongoBlogStore
    return MongoBlogStore.from_settings(config)


__all__ = ["BlogDocument", "BlogStore", "build_store"]
