"""Conversions between plain collections, futures and lazy sequences.

Example:
    ```python
    from aiochain import chain_with, filter_async, to_sequence_future

    # Future of a concrete collection -> future of a sequence
    lines = to_sequence_future(read_lines("app.log"))

    # Plain collection + async predicate -> lazy sequence
    reachable = filter_async(hosts, ping)

    # Any awaitable -> chainable future
    content = chain_with(download("https://example.com")).map(str.upper)
    ```

"""

from collections.abc import AsyncIterable, Awaitable, Callable, Collection, Iterable

from aiochain.futures.chainable import ChainableFuture
from aiochain.sequences.collection import MaybeAwaitable, SequenceFuture
from aiochain.sequences.lazy import AsyncSequence, is_async_source


def chain_with[T](awaitable: Awaitable[T]) -> ChainableFuture[T]:
    """Wrap an awaitable into a chainable future, without starting it."""
    return ChainableFuture.from_awaitable(awaitable)


def to_sequence_future[T](awaitable: Awaitable[Collection[T]]) -> SequenceFuture[T]:
    """Widen a future of a concrete collection (list, tuple, set, ...) to a future of a sequence.

    No copy is made: the collection is iterated as it is by later operators.
    Iteration order is the collection's own (unspecified for sets).

    """
    return SequenceFuture.from_awaitable(awaitable)


def to_async_sequence[T](source: Iterable[T] | AsyncIterable[T]) -> AsyncSequence[T]:
    """Create a lazy sequence over a plain or asynchronous iterable.

    Elements are yielded as pulled, without transformation.

    """
    if is_async_source(source):
        return AsyncSequence(source)  # type: ignore[arg-type]
    return AsyncSequence.from_iterable(source)  # type: ignore[arg-type]


def filter_async[T](iterable: Iterable[T], predicate: Callable[[T], MaybeAwaitable[bool]]) -> AsyncSequence[T]:
    """Create a lazy sequence of the elements of a plain iterable satisfying a (usually async) predicate."""
    return AsyncSequence.from_iterable(iterable).filter_async(predicate)


def project_async[T, R](iterable: Iterable[T], projection: Callable[[T], MaybeAwaitable[R]]) -> AsyncSequence[R]:
    """Create a lazy sequence projecting each element of a plain iterable with a (usually async) function."""
    return AsyncSequence.from_iterable(iterable).project_async(projection)


def enumerate_all[T](source: AsyncIterable[T]) -> SequenceFuture[T]:
    """Drain an async iterable into a future of a tuple.

    Never completes for an infinite source.

    """
    return AsyncSequence(source).enumerate_async()
