"""
Diario de Classe API — Posts Route Handlers
============================================

What:  CRUD and search endpoints for posts.
Why:   The public HTTP surface of the API.
How:   Extracts path/query/body values, delegates to PostService, returns
       the success envelope. Errors raised by the service are rendered by
       the global handlers in main.py.

Route Inventory:
    GET    /posts              list all posts
    GET    /posts/search?q=    search title and content
    GET    /posts/{id}         single post
    POST   /posts              create (201)
    PUT    /posts/{id}         partial update
    DELETE /posts/{id}         delete

Ordering Note:
    /posts/search is registered before /posts/{post_id} so "search" is never
    captured as an id.

Why `post_id: str`:
    A non-numeric id must produce the API's own 400 envelope, not FastAPI's
    automatic 422 for a failed int conversion, so the raw value goes to the
    service validator.
"""

import logging

from fastapi import APIRouter, Depends, Query

from diario_api.dependencies import get_post_service
from diario_api.schemas.post import (
    ErrorResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostSearchResponse,
    PostUpdate,
    StatusResponse,
)
from diario_api.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


@router.get(
    "/posts",
    response_model=PostListResponse,
    summary="List all posts",
)
async def list_posts(
    service: PostService = Depends(get_post_service),
) -> PostListResponse:
    return await service.get_all()


@router.get(
    "/posts/search",
    response_model=PostSearchResponse,
    responses={400: {"description": "Missing or too short search term", "model": ErrorResponse}},
    summary="Search posts by term (title or content)",
)
async def search_posts(
    q: str = Query(default="", description="Search term (min 2 chars), case-insensitive"),
    service: PostService = Depends(get_post_service),
) -> PostSearchResponse:
    return await service.search(q)


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Get a post by id",
)
async def get_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.get_by_id(post_id)


@router.post(
    "/posts",
    status_code=201,
    response_model=PostResponse,
    responses={422: {"description": "Missing or invalid fields", "model": ErrorResponse}},
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return await service.create(payload.model_dump())


@router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        422: {"description": "Invalid fields", "model": ErrorResponse},
    },
    summary="Update some or all fields of a post",
)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    # exclude_unset: only fields the client actually sent are validated/applied
    return await service.update(post_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/posts/{post_id}",
    response_model=StatusResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    service: PostService = Depends(get_post_service),
) -> StatusResponse:
    await service.delete(post_id)
    return StatusResponse()
