"""Structured logging with structlog.

Store operations bind ``collection`` and ``operation`` into structlog's
context variables, so every event logged while a call is in flight carries
them without each call site repeating the fields.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


@contextmanager
def store_operation(collection: str, operation: str) -> Iterator[None]:
    with structlog.contextvars.bound_contextvars(collection=collection, operation=operation):
        yield


def configure_logging(log_level: str = "INFO") -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
