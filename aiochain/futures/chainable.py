"""Chainable futures.

A `ChainableFuture` wraps exactly one asynchronous computation. The computation
is started on the first await and its outcome is cached, so a future can be
awaited any number of times without repeating side effects.

Futures are composed with `map` and `map_async`. Composition never starts the
computation: it only describes what to do once the future is awaited.

Example:
    ```python
    from aiochain import ChainableFuture

    total = ChainableFuture.from_awaitable(fetch_prices()).map(sum).map(round)

    assert not total.is_resolved()
    print(await total)
    ```

"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Final

from aiochain.futures.awaiter import FutureAwaiter

logger = logging.getLogger(__name__)


class ChainableFuture[T]:
    """Read-only, lazily started future of a single value.

    The type parameter is only ever produced, never consumed, so a
    `ChainableFuture[bool]` can be used where a `ChainableFuture[int]` is expected.
    Awaiting observers share the computation but not its cancellation: an
    observer that is cancelled (e.g. by a timeout) stops waiting, and the
    computation keeps running for the others.

    """

    __slots__ = ("_factory", "_future")

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        """Initialize the future.

        Args:
            factory: Zero-argument callable returning the awaitable to run.
                Called at most once, on the first await.

        """
        self._factory: Final = factory
        self._future: asyncio.Future[Any] | None = None

    @classmethod
    def from_awaitable[V](cls, awaitable: Awaitable[V]) -> ChainableFuture[V]:
        """Wrap an existing awaitable (coroutine, task, future).

        The awaitable is owned by the caller. It is awaited once, on the first
        resolution attempt of the returned future.

        """
        return cls(lambda: awaitable)  # type: ignore[arg-type, return-value]

    @classmethod
    def from_value[V](cls, value: V) -> ChainableFuture[V]:
        """Create a future that resolves to an already available value."""

        async def _value() -> V:
            return value

        return cls(_value)  # type: ignore[arg-type, return-value]

    def _schedule(self) -> asyncio.Future[Any]:
        if self._future is None:
            self._future = asyncio.ensure_future(self._factory())
            logger.debug("Scheduled %s", type(self).__name__)
        return self._future

    def get_awaiter(self) -> FutureAwaiter[T]:
        """Get the suspension object of this future.

        The first call starts the wrapped computation. Later calls return
        awaiters over the same cached outcome.

        """
        return FutureAwaiter(self._schedule())

    def is_resolved(self) -> bool:
        """Whether the wrapped computation has completed at the time of the check."""
        return self._future is not None and self._future.done()

    async def resolve(self) -> T:
        """Wait for the wrapped computation and return its value.

        Raises:
            Exception: Whatever the wrapped computation raised, unchanged.

        """
        return await self

    def __await__(self) -> Generator[Any, None, T]:
        return self.get_awaiter().__await__()

    def map[R](self, projection: Callable[[T], R]) -> ChainableFuture[R]:
        """Apply a synchronous function to the eventual value.

        Args:
            projection: Function applied once this future is available.
                Never called if the returned future is never awaited.

        Returns:
            New future of the projected value.

        Example:
            ```python
            length = ChainableFuture.from_value("hello").map(len)
            assert await length == 5
            ```

        """
        from aiochain.futures.combinators import pipe  # noqa: PLC0415

        return pipe(self, projection)

    def map_async[R](self, projection: Callable[[T], Awaitable[R]]) -> ChainableFuture[R]:
        """Apply an asynchronous function to the eventual value.

        Args:
            projection: Function returning an awaitable (coroutine, native
                future or another `ChainableFuture`). Its result is awaited too.

        Returns:
            New future of the awaited projection result.

        """
        from aiochain.futures.combinators import pipe_async  # noqa: PLC0415

        return pipe_async(self, projection)
