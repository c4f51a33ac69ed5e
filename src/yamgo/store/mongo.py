"""MongoDB-backed DocumentStore with per-call timeouts."""

from typing import Any

import pymongo
import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from yamgo.common.errors import NotFoundError, StoreError
from yamgo.common.logging import store_operation

logger = structlog.get_logger()


class MongoStore:
    """Wraps one pymongo AsyncCollection.

    Every operation runs inside ``pymongo.timeout``: ``short_timeout`` for
    single-document lookups, ``long_timeout`` for scans, counts and
    aggregations. Driver failures (timeouts included) surface as StoreError.
    Log events emitted during a call carry the collection and operation names.
    """

    def __init__(self, collection: AsyncCollection, short_timeout: float, long_timeout: float) -> None:
        self.collection = collection
        self.short_timeout = short_timeout
        self.long_timeout = long_timeout

    @property
    def name(self) -> str:
        return self.collection.name

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any]:
        with store_operation(self.name, "find_one"):
            try:
                with pymongo.timeout(self.short_timeout):
                    document = await self.collection.find_one(filter)
            except PyMongoError as exc:
                logger.error("mongo_call_failed", error=str(exc))
                raise StoreError("find_one", exc) from exc
            if document is None:
                raise NotFoundError(filter)
            return document

    async def find(
        self,
        filter: dict[str, Any],
        *,
        sort: list[tuple[str, int]] | None = None,
        limit: int | None = None,
        skip: int | None = None,
        collation: Any = None,
        hint: Any = None,
        projection: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {}
        if sort:
            kwargs["sort"] = sort
        if limit:
            kwargs["limit"] = limit
        if skip:
            kwargs["skip"] = skip
        if collation is not None:
            kwargs["collation"] = collation
        if hint is not None:
            kwargs["hint"] = hint
        if projection:
            kwargs["projection"] = projection

        with store_operation(self.name, "find"):
            try:
                with pymongo.timeout(self.long_timeout):
                    cursor = self.collection.find(filter, **kwargs)
                    documents: list[dict[str, Any]] = await cursor.to_list()
            except PyMongoError as exc:
                logger.error("mongo_call_failed", error=str(exc))
                raise StoreError("find", exc) from exc

            logger.debug("mongo_find", count=len(documents), limit=limit)
            return documents

    async def aggregate(self, pipeline: list[dict[str, Any]], *, length: int | None = None) -> list[dict[str, Any]]:
        """Run ``pipeline`` and read at most ``length`` documents (all when None)."""
        with store_operation(self.name, "aggregate"):
            try:
                with pymongo.timeout(self.long_timeout):
                    cursor = await self.collection.aggregate(pipeline)
                    async with cursor:
                        documents: list[dict[str, Any]] = await cursor.to_list(length)
            except PyMongoError as exc:
                logger.error("mongo_call_failed", stages=len(pipeline), error=str(exc))
                raise StoreError("aggregate", exc) from exc

            logger.debug("mongo_aggregate", stages=len(pipeline), count=len(documents))
            return documents

    async def count_documents(self, filter: dict[str, Any]) -> int:
        with store_operation(self.name, "count_documents"):
            try:
                with pymongo.timeout(self.long_timeout):
                    count: int = await self.collection.count_documents(filter)
            except PyMongoError as exc:
                logger.error("mongo_call_failed", error=str(exc))
                raise StoreError("count_documents", exc) from exc
            return count
