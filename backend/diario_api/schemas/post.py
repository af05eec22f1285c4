"""
Diario de Classe API — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract.
Why:   Automatic serialization and OpenAPI doc generation (served at /docs).
How:   FastAPI parses request bodies into the request models and serializes
       responses through the response models (by alias, so `created_at`
       goes out as `createdAt`).

Envelope:
    Every response carries `status`: "success" on success, "error" on failure.
    Single-post responses are flat: {"status": "success", "id": 1, "title": ...}

Design Decision:
    Request fields are Optional[str] with no length rules. The content rules
    live in the validators module and are enforced by PostService, which
    answers with the API's own error envelope and status codes. Type errors
    (e.g. a numeric title) are still caught here and rendered as 422.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from diario_api.models.post import Post


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /posts. All three fields are required by the service."""
    title: Optional[str] = Field(default=None, description="Post title (min 3 chars)")
    content: Optional[str] = Field(default=None, description="Post body (min 10 chars)")
    author: Optional[str] = Field(default=None, description="Author name (min 3 chars)")

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Introdução ao FastAPI",
                "content": "O FastAPI gera a documentação OpenAPI automaticamente.",
                "author": "Grupo 20",
            }
        }
    }


class PostUpdate(BaseModel):
    """
    Body of PUT /posts/{id}. Any subset of the fields.

    Fields left out are not touched; fields sent as null are validated
    (and rejected). `id` and `createdAt` in the body are ignored.
    """
    title: Optional[str] = Field(default=None, description="New title (min 3 chars)")
    content: Optional[str] = Field(default=None, description="New body (min 10 chars)")
    author: Optional[str] = Field(default=None, description="New author (min 3 chars)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostItem(BaseModel):
    """A post as exposed by the API."""

    # Accepts created_at when built in code, emits createdAt on the wire
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Numeric post identifier, assigned by the store")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")
    author: str = Field(description="Author name")
    created_at: datetime = Field(
        alias="createdAt",
        description="When the post was created (UTC ISO 8601)",
    )

    @classmethod
    def from_post(cls, post: Post) -> "PostItem":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=post.author,
            created_at=post.created_at,
        )


class PostResponse(PostItem):
    """Single post wrapped in the success envelope."""
    status: str = Field(default="success")

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(**PostItem.from_post(post).model_dump())


class PostListResponse(BaseModel):
    """Returned by GET /posts."""
    status: str = Field(default="success")
    total: int = Field(description="Number of posts returned")
    posts: List[PostItem] = Field(description="All posts in store order")


class PostSearchResponse(BaseModel):
    """Returned by GET /posts/search."""
    status: str = Field(default="success")
    total: int = Field(description="Number of matching posts")
    query: str = Field(description="The search term as received")
    posts: List[PostItem] = Field(description="Posts whose title or content matches")


class StatusResponse(BaseModel):
    """Bare success envelope, returned by DELETE /posts/{id}."""
    status: str = Field(default="success")


class ErrorResponse(BaseModel):
    """
    Error envelope for every failed request.

    Example:
        {"status": "error", "message": "Post not found."}
    """
    status: str = Field(default="error")
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Configured store backend: memory, mongo")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
