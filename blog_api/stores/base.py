"""
Blog API — Abstract Document Store Interface
==============================================

What:  Abstract base class defining the contract for blog document stores.
Why:   BlogService talks to one interface; MongoDB in production, SQL when
       configured, and fakes in tests all plug in without touching it.
How:   Concrete stores inherit from BlogStore and implement every method.
Who:   Called by BlogService, one awaited call per operation.

Document shape:
    Stores exchange plain dicts with the identifier under "id" (a 24-hex
    ObjectId string) plus the BlogPost fields. Driver-specific keys such as
    Mongo's "_id" never leave the store.

Identifier validity:
    is_valid_id() is a pure syntactic check on the ObjectId format and never
    touches the database. Both backends issue ObjectId identifiers, so the
    rule is shared.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId

BlogDocument = Dict[str, Any]


class BlogStore(ABC):
    """
    Abstract interface over the `blogs` collection.

    Contract:
        - Methods raise the driver's own exceptions on failure; BlogService
          wraps them into StoreError.
        - A missing document is never an exception: get/update return None,
          delete returns 0.
        - No retries: each method issues its operation once.
    """

    @staticmethod
    def is_valid_id(blog_id: str) -> bool:
        """True when `blog_id` is a well-formed ObjectId string."""
        return ObjectId.is_valid(blog_id)

    @staticmethod
    def new_id() -> str:
        """A fresh ObjectId string for stores that assign ids client-side."""
        return str(ObjectId())

    @abstractmethod
    async def list_blogs(self) -> List[BlogDocument]:
        """All documents ordered by `date` descending."""
        ...

    @abstractmethod
    async def get_blog(self, blog_id: str) -> Optional[BlogDocument]:
        """The document with `blog_id`, or None."""
        ...

    @abstractmethod
    async def insert_blog(self, document: BlogDocument) -> BlogDocument:
        """
        Insert `document` (without an id) and return it with its new "id".

        The caller's dict is not mutated.
        """
        ...

    @abstractmethod
    async def update_blog(
        self, blog_id: str, fields: BlogDocument
    ) -> Optional[BlogDocument]:
        """
        Set `fields` on the document with `blog_id`.

        Returns the post-update document, or None when no document matched.
        Fields not named in `fields` are left as they are.
        """
        ...

    @abstractmethod
    async def delete_blog(self, blog_id: str) -> int:
        """Remove the document with `blog_id`; returns the number deleted (0 or 1)."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight connectivity check for the health endpoint."""
        ...

    async def close(self) -> None:
        """Release client connections. Called once at shutdown."""
        return None
