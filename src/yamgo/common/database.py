"""Async MongoDB client management."""

from functools import lru_cache

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from yamgo.common.config import get_settings


@lru_cache(maxsize=1)
def get_client() -> AsyncMongoClient:
    """Return a cached async client (created on first call)."""
    return AsyncMongoClient(get_settings().mongodb_url)


def get_database() -> AsyncDatabase:
    return get_client()[get_settings().mongodb_database]


def get_collection(name: str) -> AsyncCollection:
    return get_database()[name]


async def close_client() -> None:
    """Close the cached client, if one was created, and forget it."""
    if get_client.cache_info().currsize:
        await get_client().close()
    reset_client()


def reset_client() -> None:
    """Clear the cached client so it is re-created on next use."""
    get_client.cache_clear()
