"""Defaults for pagination parameters."""

from yamgo.common.config import get_settings
from yamgo.pagination.types import ID_FIELD, PaginationParams


def ensure_mandatory_params(params: PaginationParams, default_limit: int | None = None) -> PaginationParams:
    """Return a copy of ``params`` with an unset paginated field and limit filled in."""
    updates: dict = {}
    if not params.paginated_field:
        updates["paginated_field"] = ID_FIELD
    if params.limit <= 0:
        updates["limit"] = default_limit or get_settings().default_page_limit
    return params.model_copy(update=updates) if updates else params
