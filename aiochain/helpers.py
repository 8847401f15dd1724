"""Helpers shared by futures and sequences."""

import inspect
from collections.abc import AsyncIterator, Awaitable
from typing import Any, Final


class Missing:
    """Marker for an omitted argument or an absent result."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = Missing()


async def resolve_maybe_awaitable[T](value: T | Awaitable[T]) -> T:
    """Await the value if it is awaitable, otherwise return it as is.

    User-supplied predicates, projections and accumulators may be either
    synchronous or asynchronous; their results go through this function.

    """
    return await value if inspect.isawaitable(value) else value  # type: ignore[return-value]


async def close_iterator(iterator: AsyncIterator[Any]) -> None:
    """Close an async iterator if it supports closing."""
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()
