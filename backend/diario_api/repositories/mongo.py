"""
Diario de Classe API — MongoDB Post Repository
===============================================

What:  Post store backed by a MongoDB collection through PyMongo's async API.
Why:   Persistent storage that survives restarts and is shared by all workers.
How:   Documents mirror the public fields and carry a numeric `id` next to
       MongoDB's native `_id`. All lookups go through `id`; `_id` is
       projected away and never leaves this module.

Identifier Strategy:
    New ids are the wall clock in milliseconds. Within one process the
    generator never issues an id lower than or equal to the previous one,
    so rapid successive creates still get strictly increasing ids. Two
    processes creating in the same millisecond can still collide; the
    unique index on `id` turns that into a DuplicateKeyError, which
    surfaces as DatabaseError (HTTP 500).

Atomicity:
    Each operation is a single-document command (insert_one,
    find_one_and_update, delete_one). No multi-document transactions.
"""

import logging
import re
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from diario_api.exceptions import DatabaseError
from diario_api.models.post import MUTABLE_FIELDS, Post, utc_now
from diario_api.repositories.base import PostRepository

logger = logging.getLogger(__name__)

# Never return MongoDB's native identifier to callers
# Why: `_id` is an ObjectId, which is neither part of the API nor JSON serializable
PROJECTION = {"_id": False}


@contextmanager
def _translate_errors(operation: str, **context: Any) -> Iterator[None]:
    """Wrap driver failures in DatabaseError; details go to context only."""
    try:
        yield
    except PyMongoError as e:
        logger.error("MongoDB %s failed: %s", operation, str(e))
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e


def _to_post(document: Dict[str, Any]) -> Post:
    """Decode a stored document; malformed ones surface as DatabaseError."""
    try:
        return Post.from_document(document)
    except ValueError as e:
        logger.error("Malformed post document (id=%s): %s", document.get("id"), str(e))
        raise DatabaseError(
            context={"operation": "decode", "error_type": "ValueError", "post_id": document.get("id")},
        ) from e


class MongoPostRepository(PostRepository):
    """
    Post store over an AsyncCollection.

    Args:
        collection: pymongo AsyncCollection holding post documents
        clock: seconds-since-epoch source used for id generation (tests pin it)
    """

    backend_name = "mongo"

    def __init__(self, collection: Any, clock: Callable[[], float] = time.time):
        self._collection = collection
        self._clock = clock
        self._last_id = 0

    def _next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    async def ensure_indexes(self) -> None:
        """Create the unique index on `id` (idempotent)."""
        with _translate_errors("create_index"):
            await self._collection.create_index(
                [("id", ASCENDING)], unique=True, name="uniq_post_id"
            )
        logger.info("Ensured unique index on posts.id")

    async def find_all(self) -> List[Post]:
        with _translate_errors("find_all"):
            documents = await self._collection.find({}, PROJECTION).to_list(length=None)
        return [_to_post(doc) for doc in documents]

    async def find_by_id(self, post_id: int) -> Optional[Post]:
        with _translate_errors("find_by_id", post_id=post_id):
            document = await self._collection.find_one({"id": post_id}, PROJECTION)
        return _to_post(document) if document else None

    async def find_by_text(self, query: str) -> List[Post]:
        pattern = {"$regex": re.escape(query), "$options": "i"}
        criteria = {"$or": [{"title": pattern}, {"content": pattern}]}
        with _translate_errors("find_by_text"):
            documents = await self._collection.find(criteria, PROJECTION).to_list(length=None)
        return [_to_post(doc) for doc in documents]

    async def create(self, fields: Dict[str, str]) -> Post:
        post = Post(
            id=self._next_id(),
            title=fields["title"],
            content=fields["content"],
            author=fields["author"],
            created_at=utc_now(),
        )
        with _translate_errors("insert", post_id=post.id):
            # insert_one adds `_id` to the dict it is given; use a throwaway copy
            await self._collection.insert_one(post.to_document())
        return post

    async def update(self, post_id: int, fields: Dict[str, str]) -> Optional[Post]:
        changes = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
        if not changes:
            return await self.find_by_id(post_id)

        with _translate_errors("update", post_id=post_id):
            document = await self._collection.find_one_and_update(
                {"id": post_id},
                {"$set": changes},
                projection=PROJECTION,
                return_document=ReturnDocument.AFTER,
            )
        return _to_post(document) if document else None

    async def delete(self, post_id: int) -> bool:
        with _translate_errors("delete", post_id=post_id):
            result = await self._collection.delete_one({"id": post_id})
        return result.deleted_count > 0

    async def ping(self) -> bool:
        try:
            await self._collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
