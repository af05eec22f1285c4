"""
Diario de Classe API — Abstract Post Repository
================================================

What:  Abstract base class defining the contract for post storage.
Why:   The service is written once against this interface; the in-memory
       and MongoDB stores are swapped by configuration (Strategy pattern).
How:   Concrete stores inherit from PostRepository and implement every method.

Contract:
    - Returned Post objects are copies; mutating them never changes the store
    - Absence is reported with None / False, never with an exception
    - The store assigns `id` and `created_at`; callers only supply MUTABLE_FIELDS
    - Infrastructure failures raise DatabaseError (or propagate unclassified)
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from diario_api.models.post import Post


class PostRepository(ABC):
    """
    Abstract interface for post persistence.

    Implementations:
        - InMemoryPostRepository: list + counter, optional seed data
        - MongoPostRepository: MongoDB collection keyed by a numeric `id` field
    """

    # Short name reported by the health check
    backend_name: str = "abstract"

    @abstractmethod
    async def find_all(self) -> List[Post]:
        """All posts in the store's natural order."""
        ...

    @abstractmethod
    async def find_by_id(self, post_id: int) -> Optional[Post]:
        ...

    @abstractmethod
    async def find_by_text(self, query: str) -> List[Post]:
        """
        Posts whose title or content contains `query`, ignoring case.

        The query is matched literally (no regex or wildcard semantics).
        """
        ...

    @abstractmethod
    async def create(self, fields: Dict[str, str]) -> Post:
        """Insert a new post, assigning a fresh id and the current UTC time."""
        ...

    @abstractmethod
    async def update(self, post_id: int, fields: Dict[str, str]) -> Optional[Post]:
        """
        Replace the supplied fields of an existing post.

        Only keys in MUTABLE_FIELDS are applied; `id` and `created_at` are
        never changed. Returns None if no post has this id.
        """
        ...

    @abstractmethod
    async def delete(self, post_id: int) -> bool:
        """Remove a post. Returns False if no post has this id."""
        ...

    async def ping(self) -> bool:
        """Reachability probe for the health check."""
        return True
