"""Cursor encoding and decoding for keyset pagination.

A cursor is the URL-safe base64 form of a small BSON document holding the
paginated field's value at a page boundary (``v``) and, when the paginated
field is not ``_id``, the boundary document's ``_id`` as a tie-breaker
(``id``).  BSON is the store's own value encoding, so every value the store
returns (strings, numbers, datetimes, ObjectIds, Decimal128, ...) round-trips
without loss.

Datetimes are stored as UTC milliseconds, the store's own resolution.
Timezone-aware values are listed under ``tz`` and come back aware (in UTC);
naive values come back naive.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import bson
from bson.codec_options import CodecOptions
from bson.errors import BSONError

from yamgo.common.errors import CursorEncodeError, MalformedCursorError
from yamgo.pagination.types import ID_FIELD

_VALUE_KEY = "v"
_ID_KEY = "id"
_TZ_KEY = "tz"

_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+={0,2}")
_DECODE_OPTIONS: CodecOptions = CodecOptions(tz_aware=True)


def _is_aware_datetime(value: Any) -> bool:
    """Return whether ``value`` is an aware datetime; reject sub-millisecond ones."""
    if not isinstance(value, datetime):
        return False
    if value.microsecond % 1000:
        raise CursorEncodeError(f"datetime {value.isoformat()} is finer than millisecond precision")
    return value.utcoffset() is not None


def encode_cursor(value: Any, secondary: Any = None) -> str:
    """Encode a boundary value (and optional tie-break id) into a cursor token.

    Raises:
        CursorEncodeError: If a value has no BSON form, or is a datetime with
            sub-millisecond precision.
    """
    payload: dict[str, Any] = {_VALUE_KEY: value}
    if secondary is not None:
        payload[_ID_KEY] = secondary

    aware = [key for key in (_VALUE_KEY, _ID_KEY) if key in payload and _is_aware_datetime(payload[key])]
    if aware:
        payload[_TZ_KEY] = aware

    try:
        raw = bson.encode(payload)
    except (BSONError, TypeError, OverflowError) as exc:
        raise CursorEncodeError(f"value cannot be encoded: {exc}") from exc
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_cursor(cursor: str) -> tuple[Any, Any]:
    """Decode a cursor token into ``(value, secondary)``.

    ``secondary`` is ``None`` for cursors built without a tie-break id.

    Raises:
        MalformedCursorError: If the token was not produced by encode_cursor.
    """
    if not isinstance(cursor, str) or not cursor:
        raise MalformedCursorError("invalid cursor: empty or not a string")
    if not _TOKEN_RE.fullmatch(cursor):
        raise MalformedCursorError("invalid cursor: not URL-safe base64")
    try:
        raw = base64.urlsafe_b64decode(cursor)
        payload = bson.decode(raw, codec_options=_DECODE_OPTIONS)
    except (binascii.Error, BSONError, ValueError, TypeError) as exc:
        raise MalformedCursorError(f"invalid cursor: {exc}") from exc

    if _VALUE_KEY not in payload or not set(payload) <= {_VALUE_KEY, _ID_KEY, _TZ_KEY}:
        raise MalformedCursorError(f"invalid cursor: unexpected keys {sorted(payload)}")

    aware = payload.pop(_TZ_KEY, [])
    if not isinstance(aware, list):
        raise MalformedCursorError("invalid cursor: bad timezone marker")
    for key, value in payload.items():
        if isinstance(value, datetime) and key not in aware:
            payload[key] = value.replace(tzinfo=None)
    return payload[_VALUE_KEY], payload.get(_ID_KEY)


def get_field_value(document: Mapping[str, Any], field: str) -> Any:
    """Read a possibly dotted field path out of a store document."""
    current: Any = document
    for part in field.split("."):
        if not isinstance(current, Mapping) or part not in current:
            raise CursorEncodeError(f"document has no field {field!r}")
        current = current[part]
    return current


def generate_cursor(document: Mapping[str, Any], paginated_field: str, secondary_sort_on_id: bool) -> str:
    """Build the cursor marking ``document`` as a page boundary."""
    value = get_field_value(document, paginated_field)
    secondary = get_field_value(document, ID_FIELD) if secondary_sort_on_id else None
    return encode_cursor(value, secondary)
