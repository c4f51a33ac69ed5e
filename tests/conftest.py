"""Shared test fixtures for the yamgo test suite."""

import copy
import operator
from unittest.mock import AsyncMock, MagicMock

import pytest

from yamgo.common.errors import NotFoundError

_MISSING = object()

_COMPARISONS = {
    "$eq": operator.eq,
    "$ne": operator.ne,
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def _get(document, path):
    current = document
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _matches(document, filter):
    for key, condition in filter.items():
        if key == "$and":
            if not all(_matches(document, clause) for clause in condition):
                return False
        elif key == "$or":
            if not any(_matches(document, clause) for clause in condition):
                return False
        else:
            value = _get(document, key)
            if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
                for op, operand in condition.items():
                    if value is _MISSING or not _COMPARISONS[op](value, operand):
                        return False
            elif value != condition:
                return False
    return True


def _sort(documents, sort):
    documents = list(documents)
    for field, direction in reversed(sort):
        documents.sort(key=lambda doc: _get(doc, field), reverse=direction < 0)
    return documents


def _project(document, projection):
    return {k: v for k, v in document.items() if k == "_id" or projection.get(k)}


class InMemoryStore:
    """DocumentStore over Python lists, evaluating the query subset yamgo emits."""

    def __init__(self, documents=None, related=None):
        self.documents = [dict(doc) for doc in documents or []]
        self.related = related or {}
        self.find_calls = []
        self.count_calls = []
        self.aggregate_calls = []

    async def find_one(self, filter):
        for document in self.documents:
            if _matches(document, filter):
                return copy.deepcopy(document)
        raise NotFoundError(filter)

    async def find(self, filter, *, sort=None, limit=None, skip=None, collation=None, hint=None, projection=None):
        self.find_calls.append(
            {"filter": filter, "sort": sort, "limit": limit, "skip": skip, "projection": projection}
        )
        documents = [copy.deepcopy(doc) for doc in self.documents if _matches(doc, filter)]
        if sort:
            documents = _sort(documents, sort)
        if skip:
            documents = documents[skip:]
        if limit:
            documents = documents[:limit]
        if projection:
            documents = [_project(doc, projection) for doc in documents]
        return documents

    async def count_documents(self, filter):
        self.count_calls.append(filter)
        return sum(1 for doc in self.documents if _matches(doc, filter))

    async def aggregate(self, pipeline, *, length=None):
        self.aggregate_calls.append(pipeline)
        documents = [copy.deepcopy(doc) for doc in self.documents]
        for stage in pipeline:
            ((name, spec),) = stage.items()
            if name == "$match":
                documents = [doc for doc in documents if _matches(doc, spec)]
            elif name == "$sort":
                documents = _sort(documents, list(spec.items()))
            elif name == "$skip":
                documents = documents[spec:]
            elif name == "$limit":
                documents = documents[:spec]
            elif name == "$lookup":
                documents = [self._lookup(doc, spec) for doc in documents]
            elif name == "$addFields":
                for doc in documents:
                    for field, expression in spec.items():
                        joined = _get(doc, expression["$first"][1:])
                        if joined:
                            doc[field] = joined[0]
                        else:
                            doc.pop(field, None)
            else:
                raise AssertionError(f"unsupported stage {name}")
        return documents if length is None else documents[:length]

    def _lookup(self, document, spec):
        variables = {name: _get(document, path[1:]) for name, path in spec["let"].items()}
        joined = []
        for foreign in self.related.get(spec["from"], []):
            candidate = copy.deepcopy(foreign)
            keep = True
            for stage in spec["pipeline"]:
                if "$match" in stage:
                    left, right = stage["$match"]["$expr"]["$eq"]
                    keep = _resolve(candidate, left, variables) == _resolve(candidate, right, variables)
                elif "$project" in stage:
                    candidate = _project(candidate, stage["$project"])
                if not keep:
                    break
            if keep:
                joined.append(candidate)
        document[spec["as"]] = joined
        return document


def _resolve(document, expression, variables):
    if expression.startswith("$$"):
        return variables[expression[2:]]
    return _get(document, expression[1:])


@pytest.fixture
def make_store():
    """Factory for in-memory document stores."""

    def factory(documents=None, related=None):
        return InMemoryStore(documents, related)

    return factory


@pytest.fixture
def score_documents():
    """Five documents with distinct ascending scores."""
    return [{"_id": i + 1, "score": score} for i, score in enumerate([10, 20, 30, 40, 50])]


@pytest.fixture
def mock_store():
    """Mock DocumentStore."""
    store = AsyncMock()
    store.find_one = AsyncMock(return_value={"_id": 1})
    store.find = AsyncMock(return_value=[])
    store.aggregate = AsyncMock(return_value=[])
    store.count_documents = AsyncMock(return_value=0)
    return store


@pytest.fixture
def mock_collection():
    """Mock pymongo AsyncCollection."""
    collection = MagicMock()
    collection.name = "articles"

    find_cursor = MagicMock()
    find_cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=find_cursor)

    aggregate_cursor = MagicMock()
    aggregate_cursor.to_list = AsyncMock(return_value=[])
    collection.aggregate = AsyncMock(return_value=aggregate_cursor)

    collection.find_one = AsyncMock(return_value=None)
    collection.count_documents = AsyncMock(return_value=0)
    return collection
