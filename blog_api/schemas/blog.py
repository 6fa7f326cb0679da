"""
Blog API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract for the blogs resource.
Why:   Input parsing, response serialization, and OpenAPI doc generation.
How:   FastAPI parses request bodies into BlogCreate/BlogUpdate and
       serializes BlogResponse. Business rules (required fields, empty
       updates) are enforced by BlogService, not here, so that they report
       the same 400 error format as every other validation failure.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BlogCreate(BaseModel):
    """
    Body of POST /blogs.

    Every field is optional at the schema level; BlogService rejects a
    missing or empty name/email/title/description with a ValidationError.
    Unknown fields are ignored.
    """
    name: Optional[str] = Field(default=None, description="Author name (required)")
    email: Optional[str] = Field(default=None, description="Author email (required)")
    title: Optional[str] = Field(default=None, description="Post title (required)")
    description: Optional[str] = Field(default=None, description="Post body (required)")
    user_img: Optional[str] = Field(default=None, description="Author avatar URL")
    cover_img: Optional[str] = Field(default=None, description="Cover image URL")

    model_config = {"extra": "ignore"}


class BlogUpdate(BaseModel):
    """
    Body of PUT /blogs/{id}: any subset of the updatable fields.

    Only fields the client actually sent are applied (see
    blog_service.build_update_fields). Unknown fields are ignored.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    user_img: Optional[str] = None
    cover_img: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None

    model_config = {"extra": "ignore"}

    @field_validator("date")
    @classmethod
    def normalize_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are taken to be UTC; aware ones are converted to UTC."""
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BlogResponse(BaseModel):
    """
    A stored blog post.

    String fields default to "" so documents written by older clients with
    missing fields still serialize.
    """
    id: str = Field(description="Blog identifier (24-hex ObjectId)")
    name: str = ""
    email: str = ""
    user_img: str = ""
    cover_img: str = ""
    title: str = ""
    description: str = ""
    date: Optional[datetime] = Field(default=None, description="Creation time (UTC ISO 8601)")

    @field_validator("name", "email", "user_img", "cover_img", "title", "description", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v


class MessageResponse(BaseModel):
    """Confirmation body for operations that return no document."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "invalid_identifier",
            "message": "Invalid blog ID",
            "details": {"field": "id", "blog_id": "not-an-id"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
