"""yamgo: cursor pagination and relation population for MongoDB collections."""

from yamgo.collection import Yamgo
from yamgo.common.errors import (
    CursorEncodeError,
    CursorGenerationError,
    InvalidArgumentError,
    MalformedCursorError,
    NotFoundError,
    StoreError,
    YamgoError,
)
from yamgo.common.models import FindOptions
from yamgo.pagination.cursor import decode_cursor, encode_cursor
from yamgo.pagination.types import Page, PaginationParams
from yamgo.populate.types import PopulateOptions, ResultMode
from yamgo.store.mongo import MongoStore
from yamgo.store.protocol import DocumentStore

__all__ = [
    "CursorEncodeError",
    "CursorGenerationError",
    "DocumentStore",
    "FindOptions",
    "InvalidArgumentError",
    "MalformedCursorError",
    "MongoStore",
    "NotFoundError",
    "Page",
    "PaginationParams",
    "PopulateOptions",
    "ResultMode",
    "StoreError",
    "Yamgo",
    "YamgoError",
    "decode_cursor",
    "encode_cursor",
]
