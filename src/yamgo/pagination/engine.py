"""Keyset pagination over a DocumentStore.

One call fetches ``limit + 1`` documents ordered by the paginated field
(with ``_id`` as tie-breaker), uses the extra document to detect whether
another page exists, and returns cursors for the neighbouring pages.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any

import structlog
from pydantic import BaseModel

from yamgo.common.errors import CursorEncodeError, CursorGenerationError, InvalidArgumentError
from yamgo.pagination.cursor import generate_cursor
from yamgo.pagination.params import ensure_mandatory_params
from yamgo.pagination.query import build_queries, combine_filters
from yamgo.pagination.types import ID_FIELD, Page, PaginationParams
from yamgo.store.protocol import DocumentStore

logger = structlog.get_logger()


def build_projection(fields: list[str]) -> dict[str, bool] | None:
    """Map a field list to a MongoDB projection, ``id`` meaning ``_id``."""
    if not fields:
        return None
    return {(ID_FIELD if key == "id" else key): True for key in fields}


class CursorPaginator:
    def __init__(self, store: DocumentStore, default_limit: int | None = None) -> None:
        self.store = store
        self.default_limit = default_limit

    async def count(self, queries: list[dict[str, Any]]) -> int:
        return await self.store.count_documents(combine_filters(queries))

    async def paginate(
        self,
        params: PaginationParams,
        results: MutableSequence[Any],
        document_class: type[BaseModel] | None = None,
    ) -> Page:
        """Fill ``results`` with one page of documents and describe its neighbours.

        ``results`` is replaced in place. When ``document_class`` is given
        each raw document is validated into it before being written back.

        Raises:
            InvalidArgumentError: If ``results`` is not a mutable sequence or
                both cursors are set.
            MalformedCursorError: If the supplied cursor cannot be decoded.
            CursorGenerationError: If a boundary document cannot be encoded.
            StoreError: If the count or find fails.
        """
        if not isinstance(results, MutableSequence):
            raise InvalidArgumentError("results must be a mutable sequence")

        params = ensure_mandatory_params(params, self.default_limit)
        secondary_sort_on_id = params.paginated_field != ID_FIELD

        # Cursor problems surface before any store call
        queries, sort = build_queries(params)

        # Total across all pages, so only the caller's own filter applies
        count = 0
        if params.count_total:
            count = await self.count([params.query] if params.query else [])

        documents = await self.store.find(
            combine_filters(queries),
            sort=sort,
            limit=params.limit + 1,
            collation=params.collation,
            hint=params.hint,
            projection=build_projection(params.projection),
        )

        has_more = len(documents) > params.limit
        if has_more:
            documents = documents[: params.limit]

        has_previous = bool(params.next) or (bool(params.previous) and has_more)
        has_next = bool(params.previous) or has_more

        previous_cursor = ""
        next_cursor = ""
        if documents:
            # Backward pages are fetched in inverted order
            if params.previous:
                documents.reverse()

            if has_previous:
                try:
                    previous_cursor = generate_cursor(documents[0], params.paginated_field, secondary_sort_on_id)
                except CursorEncodeError as exc:
                    raise CursorGenerationError("previous", exc) from exc

            if has_next:
                try:
                    next_cursor = generate_cursor(documents[-1], params.paginated_field, secondary_sort_on_id)
                except CursorEncodeError as exc:
                    raise CursorGenerationError("next", exc) from exc

        page = Page(
            previous=previous_cursor,
            has_previous=has_previous,
            next=next_cursor,
            has_next=has_next,
            count=count,
        )

        if document_class is not None:
            results[:] = [document_class.model_validate(doc) for doc in documents]
        else:
            results[:] = documents

        logger.debug(
            "paginated_find",
            paginated_field=params.paginated_field,
            limit=params.limit,
            returned=len(documents),
            has_previous=has_previous,
            has_next=has_next,
        )
        return page
