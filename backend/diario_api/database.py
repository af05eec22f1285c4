"""
Diario de Classe API — MongoDB Connection Management
=====================================================

What:  Async MongoDB client construction, collection lookup and shutdown.
Why:   Centralizes all database connection logic in one place.
How:   PyMongo's AsyncMongoClient keeps its own connection pool; one client
       is created per application and closed by the lifespan handler.
Who:   Used by the application factory (main.py) when STORE_BACKEND=mongo.
When:  Client is created in create_app(); the first network round trip
       happens in the lifespan startup ping.

Connection Settings:
    serverSelectionTimeoutMS: bounds how long a request can wait for a
        reachable server (default 5s) instead of the driver's 30s
    tz_aware=True: BSON dates come back as UTC-aware datetimes
"""

import logging
from typing import Any

from pymongo import AsyncMongoClient

from diario_api.config import Settings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> AsyncMongoClient:
    """
    Build the application's MongoDB client.

    No I/O happens here; the driver connects lazily on first use.
    """
    return AsyncMongoClient(
        settings.database_url,
        serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
        tz_aware=True,
    )


def get_posts_collection(client: AsyncMongoClient, settings: Settings) -> Any:
    """
    Resolve the posts collection.

    The database named in the connection string wins; `database_name`
    is used when the URL has no path component.
    """
    database = client.get_default_database(default=settings.database_name)
    logger.info(
        "Using MongoDB database '%s', collection '%s'",
        database.name,
        settings.posts_collection,
    )
    return database[settings.posts_collection]


async def ping_database(client: AsyncMongoClient) -> None:
    """Round trip to the server; raises if it cannot be reached."""
    await client.admin.command("ping")


async def close_client(client: AsyncMongoClient) -> None:
    """Close all pooled connections on shutdown."""
    await client.close()
    logger.info("MongoDB client closed")
