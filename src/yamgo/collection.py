"""Yamgo: query, pagination and population helpers bound to one collection."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel

from yamgo.common.config import Settings, get_settings
from yamgo.common.database import get_collection
from yamgo.common.errors import InvalidArgumentError
from yamgo.common.logging import configure_logging
from yamgo.common.models import FindOptions
from yamgo.pagination.engine import CursorPaginator
from yamgo.pagination.query import combine_filters
from yamgo.pagination.types import ID_FIELD, Page, PaginationParams
from yamgo.populate.pipeline import build_pipeline
from yamgo.populate.types import PopulateOptions, ResultMode
from yamgo.store.mongo import MongoStore
from yamgo.store.protocol import DocumentStore

logger = structlog.get_logger()


def _decode(document: dict[str, Any], document_class: type[BaseModel] | None) -> Any:
    return document_class.model_validate(document) if document_class is not None else document


class Yamgo:
    def __init__(self, store: DocumentStore, default_page_limit: int | None = None) -> None:
        self.store = store
        self.paginator = CursorPaginator(store, default_page_limit)

    @classmethod
    def from_settings(cls, collection_name: str, settings: Settings | None = None) -> Yamgo:
        """Build a Yamgo over ``collection_name`` using the shared client.

        Also applies ``settings.log_level`` to structlog.
        """
        settings = settings or get_settings()
        configure_logging(settings.log_level)
        store = MongoStore(
            get_collection(collection_name),
            short_timeout=settings.short_timeout,
            long_timeout=settings.long_timeout,
        )
        return cls(store, default_page_limit=settings.default_page_limit)

    # ------------------------------------------------------------------
    # Plain lookups
    # ------------------------------------------------------------------
    async def find_one(self, filter: dict[str, Any], document_class: type[BaseModel] | None = None) -> Any:
        """Return the first document matching ``filter``; NotFoundError if none."""
        document = await self.store.find_one(filter)
        return _decode(document, document_class)

    async def find_by_id(self, id: str, document_class: type[BaseModel] | None = None) -> Any:
        if not isinstance(id, str):
            raise InvalidArgumentError(f"object id must be a hex string, got {type(id).__name__}")
        try:
            object_id = ObjectId(id)
        except InvalidId as exc:
            raise InvalidArgumentError(f"invalid object id {id!r}: {exc}") from exc
        return await self.find_by_object_id(object_id, document_class)

    async def find_by_object_id(self, object_id: ObjectId, document_class: type[BaseModel] | None = None) -> Any:
        return await self.find_one({ID_FIELD: object_id}, document_class)

    async def find(self, filter: dict[str, Any], document_class: type[BaseModel] | None = None) -> list[Any]:
        documents = await self.store.find(filter)
        return [_decode(doc, document_class) for doc in documents]

    async def find_with_options(
        self,
        filter: dict[str, Any],
        options: FindOptions,
        document_class: type[BaseModel] | None = None,
    ) -> list[Any]:
        documents = await self.store.find(filter, sort=options.sort, skip=options.skip, limit=options.limit)
        return [_decode(doc, document_class) for doc in documents]

    async def count_documents(self, filter: list[dict[str, Any]]) -> int:
        """Count documents matching every clause in ``filter``."""
        return await self.store.count_documents(combine_filters(filter))

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    async def paginated_find(
        self,
        params: PaginationParams,
        results: MutableSequence[Any],
        document_class: type[BaseModel] | None = None,
    ) -> Page:
        """Replace the contents of ``results`` with one page and return its Page."""
        return await self.paginator.paginate(params, results, document_class)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------
    async def find_and_populate(
        self,
        filter: dict[str, Any],
        populate: list[PopulateOptions],
        mode: ResultMode = ResultMode.MULTIPLE,
        options: FindOptions | None = None,
        document_class: type[BaseModel] | None = None,
    ) -> Any:
        """Match ``filter`` and inline each relation in ``populate``.

        Returns a list in MULTIPLE mode. In SINGLE mode only the first
        aggregated document is read; it is returned, or None when nothing
        matched.
        """
        pipeline = build_pipeline(filter, populate, options)
        logger.debug(
            "find_and_populate",
            relations=[p.on for p in populate],
            stages=len(pipeline),
            mode=mode.value,
        )

        if mode is ResultMode.SINGLE:
            documents = await self.store.aggregate(pipeline, length=1)
            return _decode(documents[0], document_class) if documents else None

        documents = await self.store.aggregate(pipeline)
        return [_decode(doc, document_class) for doc in documents]

    async def find_one_and_populate(
        self,
        filter: dict[str, Any],
        populate: list[PopulateOptions],
        options: FindOptions | None = None,
        document_class: type[BaseModel] | None = None,
    ) -> Any:
        return await self.find_and_populate(filter, populate, ResultMode.SINGLE, options, document_class)
