"""
Blog API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the blog resource handler.
Why:   Each failure mode maps to one HTTP status code and a stable error code,
       so route handlers never build error responses by hand.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into JSON.
Who:   Raised by BlogService; caught by the global handlers.

Exception Hierarchy:
    BlogApiError (base)
    ├── ValidationError              → 400 Bad Request
    │   └── InvalidIdentifierError   → 400 Bad Request (malformed blog ID)
    ├── NotFoundError                → 404 Not Found
    └── StoreError                   → 500 Internal Server Error

No retries anywhere: a StoreError means the single store call failed.
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 4xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when client input fails validation.

    When:    Missing or empty required fields on create, an update body with
             no recognized fields, or a body that is not valid JSON.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(ValidationError):
    """
    Raised when a path identifier is not a well-formed blog ID.

    Detected before any store call is made.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        blog_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["blog_id"] = blog_id
        super().__init__(message="Invalid blog ID", field="id", context=ctx)
        self.blog_id = blog_id


class NotFoundError(BlogApiError):
    """
    Raised when a well-formed identifier matches no document.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(BlogApiError):
    """
    Raised when the document store is unreachable or an operation throws.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Driver errors
        (connection strings, host names, query text) are logged server-side
        only, via the context dict.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
