"""Range-filter and sort construction for keyset pagination."""

from __future__ import annotations

from typing import Any

from yamgo.common.errors import InvalidArgumentError, MalformedCursorError
from yamgo.pagination.cursor import decode_cursor
from yamgo.pagination.types import ID_FIELD, PaginationParams

ASCENDING = 1
DESCENDING = -1


def combine_filters(clauses: list[dict[str, Any]]) -> dict[str, Any]:
    """AND the clauses together; MongoDB rejects an empty ``$and``."""
    if not clauses:
        return {}
    return {"$and": clauses}


def build_cursor_query(
    paginated_field: str,
    operator: str,
    value: Any,
    secondary: Any,
    secondary_sort_on_id: bool,
) -> dict[str, Any]:
    """Filter selecting documents strictly past the cursor in sort order."""
    if not secondary_sort_on_id:
        return {paginated_field: {operator: value}}
    return {
        "$or": [
            {paginated_field: {operator: value}},
            {paginated_field: value, ID_FIELD: {operator: secondary}},
        ]
    }


def build_queries(params: PaginationParams) -> tuple[list[dict[str, Any]], list[tuple[str, int]]]:
    """Build the conjunctive filter clauses and sort order for one page.

    ``params`` must already carry a paginated field (see ensure_mandatory_params).
    When paging backward the sort order is inverted so the documents closest
    to the cursor come first; the caller restores presentation order.

    Raises:
        InvalidArgumentError: If both ``next`` and ``previous`` are set.
        MalformedCursorError: If the supplied cursor cannot be decoded.
    """
    if params.next and params.previous:
        raise InvalidArgumentError("next and previous cursors are mutually exclusive")

    field = params.paginated_field or ID_FIELD
    secondary_sort_on_id = field != ID_FIELD

    queries: list[dict[str, Any]] = []
    if params.query:
        queries.append(params.query)

    cursor = params.next or params.previous
    if cursor:
        value, secondary = decode_cursor(cursor)
        if secondary_sort_on_id and secondary is None:
            raise MalformedCursorError(f"invalid cursor: missing tie-break id for field {field!r}")
        forward = bool(params.next)
        operator = "$gt" if forward == params.sort_ascending else "$lt"
        queries.append(build_cursor_query(field, operator, value, secondary, secondary_sort_on_id))

    direction = ASCENDING if params.sort_ascending else DESCENDING
    if params.previous:
        direction = -direction

    sort = [(field, direction)]
    if field != ID_FIELD:
        sort.append((ID_FIELD, direction))

    return queries, sort
