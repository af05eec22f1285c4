"""
Diario de Classe API — In-Memory Post Repository
=================================================

What:  List-backed post store with a monotonic id counter.
Why:   Runs the whole API with no external service (development, demos, tests).
How:   Each instance owns its list and counter; nothing is module-global, so
       every app (and every test) gets an isolated store.

Concurrency:
    All methods run on the event loop without awaiting in between reads and
    writes, so each operation is atomic with respect to other requests.
    There is no isolation across operations (read-then-update races are
    accepted).
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from diario_api.models.post import MUTABLE_FIELDS, Post, utc_now
from diario_api.repositories.base import PostRepository

logger = logging.getLogger(__name__)


def default_seed_posts() -> List[Post]:
    """The three example posts the in-memory store starts with."""
    return [
        Post(
            id=1,
            title="Bem-vindo ao Diario",
            content="Este é o primeiro post do sistema.",
            author="Professor João",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        ),
        Post(
            id=2,
            title="Segundo Post",
            content="Conteúdo do segundo post sobre Node.js",
            author="Professor Maria",
            created_at=datetime(2026, 1, 2, tzinfo=timezone.utc),
        ),
        Post(
            id=3,
            title="Terceiro Post",
            content="Express é um framework incrível",
            author="Professor Pedro",
            created_at=datetime(2026, 1, 3, tzinfo=timezone.utc),
        ),
    ]


class InMemoryPostRepository(PostRepository):
    """
    Post store kept in a Python list.

    The next id is always one more than the highest id ever issued, so ids
    are never reused, even after the newest post is deleted.
    """

    backend_name = "memory"

    def __init__(self, seed: Optional[Iterable[Post]] = None):
        self._posts: List[Post] = [replace(post) for post in (seed or [])]
        self._next_id = max((post.id for post in self._posts), default=0) + 1
        logger.info(
            "InMemoryPostRepository initialized with %d post(s), next id=%d",
            len(self._posts),
            self._next_id,
        )

    def _index_of(self, post_id: int) -> int:
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                return index
        return -1

    async def find_all(self) -> List[Post]:
        # Why copies: callers (and tests) must not be able to edit stored posts
        return [replace(post) for post in self._posts]

    async def find_by_id(self, post_id: int) -> Optional[Post]:
        index = self._index_of(post_id)
        if index == -1:
            return None
        return replace(self._posts[index])

    async def find_by_text(self, query: str) -> List[Post]:
        needle = query.lower()
        return [
            replace(post)
            for post in self._posts
            if needle in post.title.lower() or needle in post.content.lower()
        ]

    async def create(self, fields: Dict[str, str]) -> Post:
        post = Post(
            id=self._next_id,
            title=fields["title"],
            content=fields["content"],
            author=fields["author"],
            created_at=utc_now(),
        )
        self._posts.append(post)
        self._next_id += 1
        return replace(post)

    async def update(self, post_id: int, fields: Dict[str, str]) -> Optional[Post]:
        index = self._index_of(post_id)
        if index == -1:
            return None
        changes = {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}
        self._posts[index] = replace(self._posts[index], **changes)
        return replace(self._posts[index])

    async def delete(self, post_id: int) -> bool:
        index = self._index_of(post_id)
        if index == -1:
            return False
        del self._posts[index]
        return True
