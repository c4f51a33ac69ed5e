"""Types for cursor-paginated queries and their results."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pymongo.collation import Collation

ID_FIELD = "_id"


class PaginationParams(BaseModel):
    query: dict[str, Any] = {}
    paginated_field: str = ""
    limit: int = 0
    next: str = ""
    previous: str = ""
    sort_ascending: bool = True
    count_total: bool = False
    collation: Collation | dict[str, Any] | None = None
    hint: str | list[Any] | dict[str, Any] | None = None
    projection: list[str] = []

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("projection", mode="before")
    @classmethod
    def _split_projection(cls, value: Any) -> Any:
        """Accept the comma-separated form as well as a list."""
        if isinstance(value, str):
            return [key.strip() for key in value.split(",") if key.strip()]
        return value

    @field_validator("next", "previous", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Page(BaseModel):
    """Navigation metadata for one page of results."""

    previous: str = ""
    has_previous: bool = False
    next: str = ""
    has_next: bool = False
    count: int = 0

    model_config = ConfigDict(frozen=True)
