"""
Blog API — Blog Service (Business Logic)
==========================================

What:  Validation and update-merge policy for the blogs resource.
Why:   Keeps HTTP concerns in the routes and storage concerns in the stores;
       everything a client can get wrong is decided here.
How:   Each operation validates its input, awaits exactly one store call,
       and converts the result into a response model.
Who:   Constructed per request by the routes with the app's BlogStore.

Operation Flow:
    ┌────────────┐    ┌──────────────────┐    ┌─────────────┐    ┌───────────┐
    │  Request   │───▶│  Validate id /   │───▶│ Store call  │───▶│ Response  │
    │  (Route)   │    │  body (400)      │    │ (exactly 1) │    │ model     │
    └────────────┘    └──────────────────┘    └─────────────┘    └───────────┘

    - Invalid id or body: raised before the store is touched
    - Missing document: NotFoundError (404)
    - Store raised: wrapped in StoreError (500), driver error logged here
"""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, TypeVar

from blog_api.exceptions import (
    BlogApiError,
    InvalidIdentifierError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from blog_api.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, MessageResponse
from blog_api.stores.base import BlogStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields that must be present and non-empty on create
REQUIRED_FIELDS = ("name", "email", "title", "description")

# Fields a PUT may change; anything else in the body is ignored
UPDATABLE_FIELDS = ("name", "email", "user_img", "cover_img", "title", "description", "date")

# Updatable fields that a null clears to ""
CLEARABLE_FIELDS = ("user_img", "cover_img")


def build_update_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Select the partial-update set from a request body.

    Returns the allow-listed fields that are present in `payload`, including
    those sent as null, so fields the client did not send are left untouched
    in storage.

    Example:
        >>> build_update_fields({"title": "X", "views": 3})
        {'title': 'X'}
    """
    return {field: payload[field] for field in UPDATABLE_FIELDS if field in payload}


def resolve_nulls(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply null semantics to an update set.

    A null image field is stored as "". A null on any other field is
    rejected: name, email, title, description and date always hold a value.
    """
    rejected = [
        field for field, value in fields.items()
        if value is None and field not in CLEARABLE_FIELDS
    ]
    if rejected:
        raise ValidationError(
            message=f"{', '.join(rejected)} cannot be null",
            field=rejected[0],
            context={"null_fields": rejected},
        )
    return {field: "" if value is None else value for field, value in fields.items()}


def utc_now() -> datetime:
    """Current UTC time at millisecond precision, the resolution BSON dates keep."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class BlogService:
    """
    Business logic layer for blog operations.

    Stateless apart from the injected store: routes build one per request.
    """

    def __init__(self, store: BlogStore):
        self._store = store

    # ── Helpers ───────────────────────────────────────────────────────────

    def _require_valid_id(self, blog_id: str) -> None:
        if not self._store.is_valid_id(blog_id):
            raise InvalidIdentifierError(blog_id)

    async def _store_call(
        self,
        action: str,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T:
        """
        Await one store operation, translating driver failures into StoreError.

        `action` names the operation in logs and in the user-facing message
        ("fetch blogs", "create blog", ...).
        """
        try:
            return await operation(*args)
        except BlogApiError:
            raise
        except Exception as e:
            logger.error("Store error during %s: %s", action, str(e), exc_info=True)
            raise StoreError(
                message=f"Failed to {action}",
                context={"action": action, "error_type": type(e).__name__},
            )

    # ── Operations ────────────────────────────────────────────────────────

    async def list_blogs(self) -> List[BlogResponse]:
        """All blogs, newest first."""
        documents = await self._store_call("fetch blogs", self._store.list_blogs)
        return [BlogResponse(**document) for document in documents]

    async def get_blog(self, blog_id: str) -> BlogResponse:
        """
        Retrieve a single blog.

        Raises:
            InvalidIdentifierError: `blog_id` is not a well-formed id (→ 400)
            NotFoundError: No blog has this id (→ 404)
            StoreError: The store call failed (→ 500)
        """
        self._require_valid_id(blog_id)
        document = await self._store_call("fetch blog", self._store.get_blog, blog_id)
        if document is None:
            raise NotFoundError(resource="blog", resource_id=blog_id)
        return BlogResponse(**document)

    async def create_blog(self, payload: BlogCreate) -> BlogResponse:
        """
        Validate and insert a new blog.

        name, email, title and description must be non-empty. user_img and
        cover_img default to "". `date` is stamped with the current UTC time.
        """
        missing = [field for field in REQUIRED_FIELDS if not getattr(payload, field)]
        if missing:
            raise ValidationError(
                message="name, email, title, description are required",
                context={"missing_fields": missing},
            )

        document = {
            "name": payload.name,
            "email": payload.email,
            "user_img": payload.user_img or "",
            "cover_img": payload.cover_img or "",
            "title": payload.title,
            "description": payload.description,
            "date": utc_now(),
        }
        created = await self._store_call("create blog", self._store.insert_blog, document)
        logger.info("Blog created: %s", created["id"])
        return BlogResponse(**created)

    async def update_blog(self, blog_id: str, payload: BlogUpdate) -> BlogResponse:
        """
        Merge the supplied fields into an existing blog.

        Only fields present in the request body are written. A body with no
        recognized fields, or a null on a field that must hold a value, is
        rejected before the store is called. A blog that no longer exists
        when the update runs is reported as not found.
        """
        self._require_valid_id(blog_id)

        fields = build_update_fields(payload.model_dump(exclude_unset=True))
        if not fields:
            raise ValidationError(
                message="At least one field must be provided to update",
                context={"allowed_fields": list(UPDATABLE_FIELDS)},
            )
        fields = resolve_nulls(fields)

        updated = await self._store_call(
            "update blog", self._store.update_blog, blog_id, fields
        )
        if updated is None:
            raise NotFoundError(resource="blog", resource_id=blog_id)
        logger.info("Blog updated: %s (fields: %s)", blog_id, ", ".join(sorted(fields)))
        return BlogResponse(**updated)

    async def delete_blog(self, blog_id: str) -> MessageResponse:
        """Permanently remove a blog."""
        self._require_valid_id(blog_id)
        deleted = await self._store_call("delete blog", self._store.delete_blog, blog_id)
        if deleted == 0:
            raise NotFoundError(resource="blog", resource_id=blog_id)
        logger.info("Blog deleted: %s", blog_id)
        return MessageResponse(message="Blog deleted successfully")
