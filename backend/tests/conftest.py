"""
Diario de Classe API — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (stores, mocked collection, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── seeded_repository: In-memory store with the three example posts
    ├── empty_repository: In-memory store with no posts
    ├── mock_collection: AsyncMock standing in for a pymongo AsyncCollection
    ├── valid_post_data: Fields that pass every validation rule
    ├── app: FastAPI app wired to seeded_repository
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
# Prevents tests from reaching a real MongoDB
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from diario_api.config import Settings  # noqa: E402
from diario_api.main import create_app  # noqa: E402
from diario_api.repositories.memory import (  # noqa: E402
    InMemoryPostRepository,
    default_seed_posts,
)


@pytest.fixture
def seeded_repository():
    """A fresh in-memory store holding the three example posts (ids 1-3)."""
    return InMemoryPostRepository(seed=default_seed_posts())


@pytest.fixture
def empty_repository():
    return InMemoryPostRepository()


@pytest.fixture
def valid_post_data():
    return {
        "title": "Introdução ao FastAPI",
        "content": "FastAPI gera documentação OpenAPI automaticamente.",
        "author": "Grupo 20",
    }


@pytest.fixture
def mock_collection():
    """
    Provides a mock pymongo AsyncCollection.

    What:    find() is synchronous in pymongo and returns a cursor whose
             to_list() is awaited; every other method is awaited directly.

    Usage:
        mock_collection.find.return_value.to_list.return_value = [doc]
        mock_collection.find_one.return_value = doc
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock()
    collection.create_index = AsyncMock()
    collection.database.command = AsyncMock(return_value={"ok": 1})
    return collection


@pytest.fixture
def app(seeded_repository):
    return create_app(Settings(store_backend="memory"), repository=seeded_repository)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app (no server).
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
