"""Lazy asynchronous sequences.

An `AsyncSequence` describes a chain of stages over an asynchronously produced
source. Operators return new sequences and never touch the source; the work is
done element by element, in source order, when a terminal operation (or an
`async for`) drains the chain.

Example:
    ```python
    from aiochain import AsyncSequence

    urls = AsyncSequence.from_iterable(["https://a.example", "https://b.example"])
    pages = await urls.project_async(download).filter_async(lambda page: page.ok).enumerate_async()
    ```

"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable
from typing import Any

from aiochain.exceptions import EmptySequenceError
from aiochain.futures.chainable import ChainableFuture
from aiochain.helpers import MISSING, Missing, close_iterator, resolve_maybe_awaitable
from aiochain.observability.utils import terminal_span
from aiochain.sequences.collection import MaybeAwaitable, SequenceFuture
from aiochain.sequences.stages import StageIterator, StageOperation, drain


class AsyncSequence[T]:
    """Lazily evaluated asynchronous sequence.

    A sequence is immutable: every operator returns a new sequence and leaves
    the previous one reusable. Each drain opens a fresh chain of stage
    iterators over the source. Whether the source can be drained more than once
    depends on the source: a callable source is re-opened on every drain, an
    async iterator is consumed by the first one.

    Draining a sequence that never ends never returns. Bound it first, e.g.
    with `first_async`.

    """

    __slots__ = ("_open",)

    def __init__(self, source: AsyncIterable[T] | Callable[[], AsyncIterable[T]]) -> None:
        """Initialize the sequence.

        Args:
            source: Async iterable, or zero-argument callable returning one
                (an async generator function, for instance).

        """
        if isinstance(source, AsyncIterable):
            self._open: Callable[[], AsyncIterator[T]] = lambda: aiter(source)
        else:
            self._open = lambda: aiter(source())

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> AsyncSequence[T]:
        """Create a sequence yielding the elements of a plain iterable as they are pulled."""

        async def _generate() -> AsyncIterator[T]:
            for item in iterable:
                yield item

        return cls(_generate)

    def __aiter__(self) -> AsyncIterator[T]:
        return self._open()

    def _chain[R](self, operation: StageOperation[T, R], kind: str) -> AsyncSequence[R]:
        upstream = self._open
        return AsyncSequence(lambda: StageIterator(upstream(), operation, kind))

    def filter_async(self, predicate: Callable[[T], MaybeAwaitable[bool]]) -> AsyncSequence[T]:
        """Keep the elements satisfying a predicate, evaluated per pulled element.

        Args:
            predicate: Function that returns True (or an awaitable of True) for elements to keep.

        """

        async def _filter(item: T) -> tuple[T, ...]:
            return (item,) if await resolve_maybe_awaitable(predicate(item)) else ()

        return self._chain(_filter, "filter")

    def project_async[R](self, projection: Callable[[T], MaybeAwaitable[R]]) -> AsyncSequence[R]:
        """Transform each pulled element.

        Args:
            projection: Function applied to every pulled element.

        """

        async def _project(item: T) -> tuple[R]:
            return (await resolve_maybe_awaitable(projection(item)),)

        return self._chain(_project, "project")

    def flatten_async[R](self, selector: Callable[[T], MaybeAwaitable[Iterable[R]]]) -> AsyncSequence[R]:
        """Expand each pulled element into a sub-collection, yielded element by element.

        The next upstream element is pulled only once the current sub-collection is exhausted.

        """

        async def _flatten(item: T) -> Iterable[R]:
            return await resolve_maybe_awaitable(selector(item))

        return self._chain(_flatten, "flatten")

    async def _find_first(self, predicate: Callable[[T], MaybeAwaitable[bool]] | None) -> T | Missing:
        iterator = self._open()
        try:
            async for item in iterator:
                try:
                    matched = predicate is None or await resolve_maybe_awaitable(predicate(item))
                except StopAsyncIteration as exc:
                    msg = "first predicate raised StopAsyncIteration"
                    raise RuntimeError(msg) from exc
                if matched:
                    return item
        finally:
            await close_iterator(iterator)
        return MISSING

    def first_async(self, predicate: Callable[[T], MaybeAwaitable[bool]] | None = None) -> ChainableFuture[T]:
        """Get the first element, optionally the first one satisfying a predicate.

        Pulls one element at a time and stops pulling at the first match.

        Raises (when awaited):
            EmptySequenceError: If the sequence ends before an element qualifies.

        """

        async def _first() -> T:
            with terminal_span("first"):
                found = await self._find_first(predicate)
                if isinstance(found, Missing):
                    raise EmptySequenceError() if predicate is None else EmptySequenceError.no_matching_element()
                return found

        return ChainableFuture(_first)

    def first_or_default_async[D](
        self,
        predicate: Callable[[T], MaybeAwaitable[bool]] | None = None,
        default: D | None = None,
    ) -> ChainableFuture[T | D | None]:
        """Get the first qualifying element, or `default` if the sequence ends first."""

        async def _first_or_default() -> T | D | None:
            with terminal_span("first_or_default"):
                found = await self._find_first(predicate)
                return default if isinstance(found, Missing) else found

        return ChainableFuture(_first_or_default)

    def aggregate_async(
        self,
        accumulator: Callable[[Any, T], MaybeAwaitable[Any]],
        seed: Any = MISSING,
        result_selector: Callable[[Any], MaybeAwaitable[Any]] | None = None,
    ) -> ChainableFuture[Any]:
        """Left-fold the elements as they are pulled. See `SequenceFuture.aggregate_async`."""

        async def _aggregate() -> Any:
            with terminal_span("aggregate"):
                accumulated = seed
                async for item in self:
                    if isinstance(accumulated, Missing):
                        accumulated = item
                    else:
                        accumulated = await resolve_maybe_awaitable(accumulator(accumulated, item))
                if isinstance(accumulated, Missing):
                    raise EmptySequenceError
                if result_selector is None:
                    return accumulated
                return await resolve_maybe_awaitable(result_selector(accumulated))

        return ChainableFuture(_aggregate)

    def enumerate_async(self) -> SequenceFuture[T]:
        """Drain the sequence into a read-only ordered collection (a tuple).

        The result is a `SequenceFuture`, so grouping and ordering can follow.

        """

        async def _enumerate() -> tuple[T, ...]:
            with terminal_span("enumerate"):
                return tuple(await drain(self._open()))

        return SequenceFuture(_enumerate)


def is_async_source(value: Any) -> bool:
    """Whether a value can be the source of an `AsyncSequence`."""
    return isinstance(value, AsyncIterable) or inspect.isasyncgenfunction(value)
