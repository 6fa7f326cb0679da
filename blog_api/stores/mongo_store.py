"""
Blog API — MongoDB Store
==========================

What:  BlogStore backed by a MongoDB collection through pymongo's async client.
Why:   Blog posts are schemaless JSON-like documents; MongoDB is the primary
       backend (database `blogsDB`, collection `blogs`).
How:   Each method issues exactly one collection operation. ObjectIds are
       converted to strings on the way out, so callers only see "id".

Client options:
    server_api=ServerApi("1", strict=True, deprecation_errors=True) pins the
    Stable API; tz_aware=True returns UTC-aware datetimes for `date`.
"""

import logging
from typing import Any, List, Optional

from bson import ObjectId, decode, encode
from bson.codec_options import CodecOptions
from pymongo import AsyncMongoClient, DESCENDING, ReturnDocument
from pymongo.server_api import ServerApi

from blog_api.config import Settings
from blog_api.stores.base import BlogDocument, BlogStore

logger = logging.getLogger(__name__)

# Matches the client's tz_aware=True decoding
_READ_OPTIONS = CodecOptions(tz_aware=True)


def _to_document(raw: dict) -> BlogDocument:
    """Mongo document → store document ("_id" ObjectId → "id" string)."""
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


def _as_stored(document: BlogDocument) -> BlogDocument:
    """The document as a later read returns it: BSON keeps dates to the millisecond."""
    return decode(encode(document), codec_options=_READ_OPTIONS)


class MongoBlogStore(BlogStore):
    """
    Document store over a pymongo AsyncCollection.

    The collection is injected so tests can pass a mock; from_settings()
    builds the real client for the application.
    """

    def __init__(self, collection: Any, client: Optional[AsyncMongoClient] = None):
        self._collection = collection
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "MongoBlogStore":
        """Create the client and select the configured database/collection."""
        client = AsyncMongoClient(
            config.mongodb_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            tz_aware=True,
        )
        collection = client[config.mongodb_database][config.mongodb_collection]
        logger.info(
            "Using MongoDB database '%s' and collection '%s'",
            config.mongodb_database,
            config.mongodb_collection,
        )
        return cls(collection, client=client)

    async def list_blogs(self) -> List[BlogDocument]:
        cursor = self._collection.find().sort("date", DESCENDING)
        return [_to_document(raw) for raw in await cursor.to_list(length=None)]

    async def get_blog(self, blog_id: str) -> Optional[BlogDocument]:
        raw = await self._collection.find_one({"_id": ObjectId(blog_id)})
        return _to_document(raw) if raw is not None else None

    async def insert_blog(self, document: BlogDocument) -> BlogDocument:
        # insert_one adds "_id" to the dict it is given
        to_insert = dict(document)
        result = await self._collection.insert_one(to_insert)
        return {"id": str(result.inserted_id), **_as_stored(document)}

    async def update_blog(
        self, blog_id: str, fields: BlogDocument
    ) -> Optional[BlogDocument]:
        raw = await self._collection.find_one_and_update(
            {"_id": ObjectId(blog_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return _to_document(raw) if raw is not None else None

    async def delete_blog(self, blog_id: str) -> int:
        result = await self._collection.delete_one({"_id": ObjectId(blog_id)})
        return result.deleted_count

    async def ping(self) -> bool:
        if self._client is None:
            return True
        await self._client.admin.command("ping")
        return True

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
