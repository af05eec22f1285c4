"""
Diario de Classe API — Post Service (Business Logic Orchestrator)
==================================================================

What:  Validates input, delegates to the repository, and translates absence
       into NotFoundError.
Why:   Keeps every business rule in one place, independent of HTTP and of
       the storage backend.
How:   Receives its PostRepository in the constructor; the application
       factory builds one service per app.

Operation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Route   │───▶│  Validate   │───▶│  Repository  │───▶│  None/False  │
    │          │    │  (fail fast)│    │              │    │  → NotFound  │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘

Status Codes Carried by Errors:
    invalid id / search term  → InvalidInputError(400)
    invalid title/content/author → InvalidInputError(422)
    unknown id                → NotFoundError(404)
"""

import logging
from typing import Any, Dict, Mapping

from diario_api.exceptions import InvalidInputError, NotFoundError
from diario_api.models.post import MUTABLE_FIELDS
from diario_api.repositories.base import PostRepository
from diario_api.schemas.post import (
    PostItem,
    PostListResponse,
    PostResponse,
    PostSearchResponse,
)
from diario_api.validators import (
    ValidationResult,
    parse_id,
    validate_fields,
    validate_id,
    validate_post_fields,
    validate_query,
)

logger = logging.getLogger(__name__)

# Field rule violations are well-formed but unacceptable requests
FIELD_ERROR_STATUS = 422


class PostService:
    """
    Business logic layer for post operations.

    Responsibilities:
        - get_all() / search(): listings wrapped with totals
        - get_by_id(): single post with not-found handling
        - create() / update() / delete(): validated mutations

    Args:
        repository: the store every operation delegates to
    """

    def __init__(self, repository: PostRepository):
        self.repository = repository

    # ── Validation helpers ────────────────────────────────────────────────

    def _require_id(self, raw_id: Any) -> int:
        result = validate_id(raw_id)
        if not result.valid:
            raise InvalidInputError(
                message=result.reason,
                field=result.field,
                status_code=400,
                # Path values can be arbitrarily long; keep the log line bounded
                context={"value": str(raw_id)[:64]},
            )
        return parse_id(raw_id)

    def _check_fields(self, result: ValidationResult) -> None:
        if not result.valid:
            raise InvalidInputError(
                message=result.reason,
                field=result.field,
                status_code=FIELD_ERROR_STATUS,
            )

    @staticmethod
    def _trimmed(fields: Mapping[str, Any]) -> Dict[str, str]:
        """Only the mutable fields present in `fields`, whitespace-trimmed."""
        return {name: fields[name].strip() for name in MUTABLE_FIELDS if name in fields}

    # ── Queries ───────────────────────────────────────────────────────────

    async def get_all(self) -> PostListResponse:
        posts = await self.repository.find_all()
        return PostListResponse(
            total=len(posts),
            posts=[PostItem.from_post(post) for post in posts],
        )

    async def get_by_id(self, raw_id: Any) -> PostResponse:
        """
        Retrieve a single post.

        Raises:
            InvalidInputError: id is not a positive integer (→ 400)
            NotFoundError: no post has this id (→ 404)
        """
        post_id = self._require_id(raw_id)
        post = await self.repository.find_by_id(post_id)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        return PostResponse.from_post(post)

    async def search(self, query: Any) -> PostSearchResponse:
        """
        Case-insensitive substring search over title and content.

        The term is validated trimmed but echoed back as received.
        """
        result = validate_query(query)
        if not result.valid:
            raise InvalidInputError(message=result.reason, field="q", status_code=400)

        posts = await self.repository.find_by_text(query.strip())
        return PostSearchResponse(
            total=len(posts),
            query=query,
            posts=[PostItem.from_post(post) for post in posts],
        )

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, fields: Mapping[str, Any]) -> PostResponse:
        """
        Create a post from title, content and author.

        Missing fields are validated as empty, so the first missing or
        too-short field (in title → content → author order) is reported.
        """
        self._check_fields(
            validate_post_fields(fields.get("title"), fields.get("content"), fields.get("author"))
        )
        cleaned = self._trimmed(fields)

        post = await self.repository.create(cleaned)
        logger.info("Post %d created by '%s'", post.id, post.author)
        return PostResponse.from_post(post)

    async def update(self, raw_id: Any, fields: Mapping[str, Any]) -> PostResponse:
        """
        Partially update a post.

        Only the fields present in `fields` are validated and applied;
        `id` and `createdAt` are never mutable. An empty update returns
        the post unchanged.
        """
        post_id = self._require_id(raw_id)
        self._check_fields(validate_fields(fields))
        cleaned = self._trimmed(fields)

        post = await self.repository.update(post_id, cleaned)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        logger.info("Post %d updated (%s)", post_id, ", ".join(sorted(cleaned)) or "no fields")
        return PostResponse.from_post(post)

    async def delete(self, raw_id: Any) -> None:
        post_id = self._require_id(raw_id)
        deleted = await self.repository.delete(post_id)
        if not deleted:
            raise NotFoundError(resource="Post", resource_id=post_id)
        logger.info("Post %d deleted", post_id)
