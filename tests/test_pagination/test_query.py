"""Tests for yamgo.pagination.query: range filters and sort order."""

import pytest

from yamgo.common.errors import InvalidArgumentError, MalformedCursorError
from yamgo.pagination.cursor import encode_cursor
from yamgo.pagination.query import build_queries, combine_filters
from yamgo.pagination.types import PaginationParams


class TestCombineFilters:
    def test_empty(self):
        assert combine_filters([]) == {}

    def test_conjunction(self):
        assert combine_filters([{"a": 1}, {"b": 2}]) == {"$and": [{"a": 1}, {"b": 2}]}


class TestFirstPage:
    def test_no_query_no_cursor(self):
        queries, sort = build_queries(PaginationParams(paginated_field="_id"))
        assert queries == []
        assert sort == [("_id", 1)]

    def test_caller_query_kept(self):
        queries, _ = build_queries(PaginationParams(query={"status": "active"}, paginated_field="_id"))
        assert queries == [{"status": "active"}]

    def test_secondary_sort_on_id(self):
        _, sort = build_queries(PaginationParams(paginated_field="score"))
        assert sort == [("score", 1), ("_id", 1)]

    def test_descending(self):
        _, sort = build_queries(PaginationParams(paginated_field="score", sort_ascending=False))
        assert sort == [("score", -1), ("_id", -1)]


class TestNextCursor:
    def test_id_field_range(self):
        params = PaginationParams(paginated_field="_id", next=encode_cursor(5))
        queries, sort = build_queries(params)
        assert queries == [{"_id": {"$gt": 5}}]
        assert sort == [("_id", 1)]

    def test_tie_break_clause(self):
        params = PaginationParams(query={"kind": "a"}, paginated_field="score", next=encode_cursor(30, 3))
        queries, sort = build_queries(params)
        assert queries == [
            {"kind": "a"},
            {"$or": [{"score": {"$gt": 30}}, {"score": 30, "_id": {"$gt": 3}}]},
        ]
        assert sort == [("score", 1), ("_id", 1)]

    def test_descending_uses_lt(self):
        params = PaginationParams(paginated_field="score", next=encode_cursor(30, 3), sort_ascending=False)
        queries, sort = build_queries(params)
        assert queries == [{"$or": [{"score": {"$lt": 30}}, {"score": 30, "_id": {"$lt": 3}}]}]
        assert sort == [("score", -1), ("_id", -1)]


class TestPreviousCursor:
    def test_inverts_operator_and_sort(self):
        params = PaginationParams(paginated_field="score", previous=encode_cursor(30, 3))
        queries, sort = build_queries(params)
        assert queries == [{"$or": [{"score": {"$lt": 30}}, {"score": 30, "_id": {"$lt": 3}}]}]
        assert sort == [("score", -1), ("_id", -1)]

    def test_descending_previous_uses_gt(self):
        params = PaginationParams(paginated_field="_id", previous=encode_cursor(9), sort_ascending=False)
        queries, sort = build_queries(params)
        assert queries == [{"_id": {"$gt": 9}}]
        assert sort == [("_id", 1)]


class TestInvalidInput:
    def test_both_cursors_rejected(self):
        params = PaginationParams(paginated_field="_id", next=encode_cursor(1), previous=encode_cursor(2))
        with pytest.raises(InvalidArgumentError, match="mutually exclusive"):
            build_queries(params)

    def test_malformed_cursor(self):
        with pytest.raises(MalformedCursorError):
            build_queries(PaginationParams(paginated_field="_id", next="bogus!!"))

    def test_cursor_without_tie_break_on_non_id_field(self):
        with pytest.raises(MalformedCursorError, match="tie-break"):
            build_queries(PaginationParams(paginated_field="score", next=encode_cursor(30)))
