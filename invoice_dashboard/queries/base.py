"""
Shared plumbing for the read-only query layer.

Every query is an async function taking the `Database` as its first argument.
`guarded` turns store failures into a `DataFetchError` with a generic message;
the original exception only reaches the server-side log.
"""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, TypeVar

import psycopg

from invoice_dashboard.errors import DataFetchError
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

ITEMS_PER_PAGE = 6

T = TypeVar("T")


def guarded(message: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator: log any `psycopg.Error` raised by the query and re-raise it as
    `DataFetchError(message)` without chaining.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except psycopg.Error:
                log.exception("Database Error", extra={"query_name": func.__name__})
                raise DataFetchError(message) from None

        return wrapper

    return decorator


def contains_pattern(term: str) -> str:
    """`ILIKE` pattern matching `term` anywhere in the value."""
    return f"%{term}%"


__all__ = ["ITEMS_PER_PAGE", "contains_pattern", "guarded"]
