"""Exception hierarchy raised by yamgo."""


class YamgoError(Exception):
    """Base class for all yamgo errors."""


class NotFoundError(YamgoError):
    """Raised when a single-document lookup matches nothing."""

    def __init__(self, filter: dict | None = None) -> None:
        super().__init__(f"no document matches filter: {filter!r}")
        self.filter = filter


class InvalidArgumentError(YamgoError, ValueError):
    """Raised for unusable caller input (result container, identifier, direction)."""


class MalformedCursorError(YamgoError, ValueError):
    """Raised when a page token cannot be decoded."""


class CursorEncodeError(YamgoError):
    """Raised when boundary values cannot be encoded into a page token."""


class CursorGenerationError(YamgoError):
    """Raised when the previous or next cursor of a page cannot be built."""

    def __init__(self, boundary: str, reason: Exception) -> None:
        super().__init__(f"could not create a {boundary} cursor: {reason}")
        self.boundary = boundary


class StoreError(YamgoError):
    """Wraps a failure raised by the underlying document-store driver."""

    def __init__(self, operation: str, reason: Exception) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
