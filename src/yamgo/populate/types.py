"""Types describing relations to inline into query results."""

from enum import Enum

from pydantic import BaseModel


class PopulateOptions(BaseModel):
    """One relation: the local ``path`` references ``_id`` in collection ``on``."""

    on: str
    path: str
    projection: list[str] = []


class ResultMode(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"
