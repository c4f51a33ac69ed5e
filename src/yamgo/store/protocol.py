"""DocumentStore Protocol: the slice of a document database yamgo needs.

MongoStore implements it over a pymongo AsyncCollection; tests substitute
in-memory or mocked stores without explicit inheritance.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentStore(Protocol):
    """Structural interface for a single collection of documents."""

    async def find_one(self, filter: dict[str, Any]) -> dict[str, Any]: ...

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
    ) -> list[dict[str, Any]]: ...

    async def aggregate(self, pipeline: list[dict[str, Any]], *, length: int | None = None) -> list[dict[str, Any]]: ...

    async def count_documents(self, filter: dict[str, Any]) -> int: ...
