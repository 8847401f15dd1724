"""Awaiter forwarding completion queries to a native asyncio future."""

import asyncio
from collections.abc import Callable, Generator
from typing import Any, Final


class FutureAwaiter[T]:
    """Thin suspension object around one scheduled asyncio future.

    The awaiter never schedules anything by itself. It reports whether the
    underlying future is done and hands out its value or its exception.
    Cancelling a task that awaits it does not cancel the underlying future.

    Example:
        ```python
        awaiter = future.get_awaiter()
        if awaiter.is_completed:
            value = awaiter.get_result()
        else:
            value = await awaiter
        ```

    """

    __slots__ = ("_future",)

    def __init__(self, future: asyncio.Future[Any]) -> None:
        """Initialize the awaiter.

        Args:
            future: Scheduled native future. Owned by whoever created it.

        """
        self._future: Final = future

    @property
    def is_completed(self) -> bool:
        """Whether the underlying computation has finished, successfully or not."""
        return self._future.done()

    def get_result(self) -> T:
        """Get the computed value.

        Returns:
            The value of the underlying computation.

        Raises:
            asyncio.InvalidStateError: If the computation has not finished yet.
            Exception: Whatever the underlying computation raised, unchanged.

        """
        return self._future.result()

    def on_completed(self, continuation: Callable[[], None]) -> None:
        """Schedule a continuation to run once the computation has finished."""
        self._future.add_done_callback(lambda _: continuation())

    def __await__(self) -> Generator[Any, None, T]:
        return asyncio.shield(self._future).__await__()
