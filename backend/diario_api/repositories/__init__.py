"""
Diario de Classe API — Repositories Package
============================================

What:  Persistence layer for posts.
How:   `build_repository()` picks the implementation named by
       `settings.store_backend`.

Repository Inventory:
    - PostRepository (abstract): storage contract used by PostService
    - InMemoryPostRepository: list-backed, seeded with example posts
    - MongoPostRepository: MongoDB-backed, numeric `id` field lookups
"""

from typing import Any, Optional

from diario_api.config import Settings
from diario_api.repositories.base import PostRepository
from diario_api.repositories.memory import InMemoryPostRepository, default_seed_posts
from diario_api.repositories.mongo import MongoPostRepository


def build_repository(settings: Settings, collection: Optional[Any] = None) -> PostRepository:
    """
    Create the repository configured by `settings.store_backend`.

    Args:
        settings: application settings
        collection: MongoDB collection, required for the mongo backend
    """
    if settings.store_backend == "mongo":
        if collection is None:
            raise ValueError("A MongoDB collection is required for store_backend='mongo'")
        return MongoPostRepository(collection)
    return InMemoryPostRepository(seed=default_seed_posts() if settings.seed_posts else None)


__all__ = [
    "PostRepository",
    "InMemoryPostRepository",
    "MongoPostRepository",
    "build_repository",
    "default_seed_posts",
]
