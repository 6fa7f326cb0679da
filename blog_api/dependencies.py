"""
Blog API — FastAPI Dependencies
=================================

What:  Resolves the application's BlogStore and builds a BlogService per request.
Why:   The store is created once (app factory or lifespan) and stored on
       app.state; routes receive it through Depends() instead of importing a
       module-level handle, so tests can hand the app any store they like.
"""

from fastapi import Depends, Request

from blog_api.exceptions import StoreError
from blog_api.services.blog_service import BlogService
from blog_api.stores.base import BlogStore


def get_blog_store(request: Request) -> BlogStore:
    """The store attached to the running application."""
    store = getattr(request.app.state, "blog_store", None)
    if store is None:
        raise StoreError(message="The blog store is not available")
    return store


def get_blog_service(store: BlogStore = Depends(get_blog_store)) -> BlogService:
    return BlogService(store)
