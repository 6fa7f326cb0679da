"""
Blog API — Blogs Route Handlers
=================================

What:  CRUD endpoints for the blogs collection.
How:   Each handler delegates to BlogService and returns its response model.
       Errors are raised by the service and formatted by the global
       exception handlers in main.py.

Route Inventory:
    GET    /blogs        list, newest first
    GET    /blogs/{id}   single blog
    POST   /blogs        create (201)
    PUT    /blogs/{id}   partial update (merge)
    DELETE /blogs/{id}   permanent delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from blog_api.dependencies import get_blog_service
from blog_api.schemas.blog import (
    BlogCreate,
    BlogResponse,
    BlogUpdate,
    ErrorResponse,
    MessageResponse,
)
from blog_api.services.blog_service import BlogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blogs", tags=["Blogs"])

_INVALID_ID = {"description": "Invalid blog ID or request body", "model": ErrorResponse}
_NOT_FOUND = {"description": "Blog not found", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Store error", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[BlogResponse],
    responses={500: _SERVER_ERROR},
    summary="List all blogs",
    description="Returns every blog ordered by date, newest first. No pagination.",
)
async def list_blogs(
    service: BlogService = Depends(get_blog_service),
) -> List[BlogResponse]:
    return await service.list_blogs()


@router.get(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a single blog by ID",
)
async def get_blog(
    blog_id: str,
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    return await service.get_blog(blog_id)


@router.post(
    "",
    status_code=201,
    response_model=BlogResponse,
    responses={400: _INVALID_ID, 500: _SERVER_ERROR},
    summary="Create a blog",
    description=(
        "Creates a blog. name, email, title and description are required and must "
        "be non-empty; user_img and cover_img default to an empty string. The date "
        "is set by the server."
    ),
)
async def create_blog(
    payload: BlogCreate,
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    return await service.create_blog(payload)


@router.put(
    "/{blog_id}",
    response_model=BlogResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Update a blog",
    description=(
        "Updates only the fields present in the body among name, email, user_img, "
        "cover_img, title, description and date. Other fields keep their values."
    ),
)
async def update_blog(
    blog_id: str,
    payload: BlogUpdate,
    service: BlogService = Depends(get_blog_service),
) -> BlogResponse:
    return await service.update_blog(blog_id, payload)


@router.delete(
    "/{blog_id}",
    response_model=MessageResponse,
    responses={400: _INVALID_ID, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a blog",
)
async def delete_blog(
    blog_id: str,
    service: BlogService = Depends(get_blog_service),
) -> MessageResponse:
    return await service.delete_blog(blog_id)
