"""Generic combinators turning one future into another."""

from collections.abc import Awaitable, Callable

from aiochain.futures.chainable import ChainableFuture


def pipe[T, R](source: Awaitable[T], projection: Callable[[T], R]) -> ChainableFuture[R]:
    """Apply a function to the result of an awaitable, without awaiting it yet.

    Args:
        source: Awaitable producing the input value. A plain coroutine can only be
            awaited once; wrap it with `ChainableFuture.from_awaitable` first if it
            feeds several pipes.
        projection: Function applied to the awaited value.

    Returns:
        Future of the projected value.

    Example:
        ```python
        from aiochain.futures import pipe

        squared = pipe(ChainableFuture.from_value(10.0), lambda x: x**2)
        assert await squared == 100.0
        ```

    """

    async def _piped() -> R:
        return projection(await source)

    return ChainableFuture(_piped)


def pipe_async[T, R](source: Awaitable[T], projection: Callable[[T], Awaitable[R]]) -> ChainableFuture[R]:
    """Apply an asynchronous function to the result of an awaitable.

    Args:
        source: Awaitable producing the input value.
        projection: Function returning an awaitable; its result is awaited too.

    Returns:
        Future of the awaited projection result.

    """

    async def _piped() -> R:
        return await projection(await source)

    return ChainableFuture(_piped)
