"""Combinators over futures of collections.

A `SequenceFuture` is a `ChainableFuture` of an iterable. Each operator waits
for the source collection and then runs a collection operation over it, in
source order, one element at a time. Nothing runs until the returned future is
awaited.

Example:
    ```python
    from aiochain import to_sequence_future

    summary = await (
        to_sequence_future(load_numbers())
        .filter_async(lambda x: x % 20 == 0)
        .order_by_descending_async()
        .project_async(lambda x: f"Element is {x}")
        .aggregate_async(lambda acc, text: f"{acc}, {text}")
    )
    ```

"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from aiochain.exceptions import EmptySequenceError
from aiochain.futures.chainable import ChainableFuture
from aiochain.helpers import MISSING, Missing, resolve_maybe_awaitable
from aiochain.observability.utils import terminal_span
from aiochain.sequences.grouping import Grouping, group_stable

type MaybeAwaitable[T] = T | Awaitable[T]


class SequenceFuture[T](ChainableFuture[Iterable[T]]):
    """Future of an ordered collection, with collection combinators.

    Supplied functions may be synchronous or return awaitables. They are called
    sequentially, once per element, in source order.

    """

    @classmethod
    def from_awaitable[V](cls, awaitable: Awaitable[Iterable[V]]) -> SequenceFuture[V]:  # type: ignore[override]
        """Wrap an existing awaitable of a collection. See `ChainableFuture.from_awaitable`."""
        return cls(lambda: awaitable)  # type: ignore[arg-type, return-value]

    @classmethod
    def from_value[V](cls, value: Iterable[V]) -> SequenceFuture[V]:  # type: ignore[override]
        """Create a future of an already available collection."""

        async def _value() -> Iterable[V]:
            return value

        return cls(_value)  # type: ignore[arg-type, return-value]

    def _then[R](self, operation: Callable[[Iterable[T]], Awaitable[Iterable[R]]]) -> SequenceFuture[R]:
        async def _run() -> Iterable[R]:
            return await operation(await self)

        return SequenceFuture(_run)

    def _then_terminal[R](
        self,
        name: str,
        operation: Callable[[Iterable[T]], Awaitable[R]],
    ) -> ChainableFuture[R]:
        async def _run() -> R:
            with terminal_span(name):
                return await operation(await self)

        return ChainableFuture(_run)

    def filter_async(self, predicate: Callable[[T], MaybeAwaitable[bool]]) -> SequenceFuture[T]:
        """Keep the elements satisfying a predicate.

        Args:
            predicate: Function that returns True (or an awaitable of True) for elements to keep.

        Returns:
            Future of the kept elements, in source order.

        """

        async def _filter(items: Iterable[T]) -> tuple[T, ...]:
            return tuple([item for item in items if await resolve_maybe_awaitable(predicate(item))])

        return self._then(_filter)

    def project_async[R](self, projection: Callable[[T], MaybeAwaitable[R]]) -> SequenceFuture[R]:
        """Transform each element.

        Args:
            projection: Function applied to every element.

        Returns:
            Future of the projected elements, index for index.

        """

        async def _project(items: Iterable[T]) -> tuple[R, ...]:
            return tuple([await resolve_maybe_awaitable(projection(item)) for item in items])

        return self._then(_project)

    def flatten_async[R](self, selector: Callable[[T], MaybeAwaitable[Iterable[R]]]) -> SequenceFuture[R]:
        """Expand each element into a sub-collection and concatenate them.

        Args:
            selector: Function returning the sub-collection of an element.

        Returns:
            Future of the concatenated sub-collections, in source order.

        """

        async def _flatten(items: Iterable[T]) -> tuple[R, ...]:
            results: list[R] = []
            for item in items:
                results.extend(await resolve_maybe_awaitable(selector(item)))
            return tuple(results)

        return self._then(_flatten)

    def group_by_async[K](self, key_selector: Callable[[T], MaybeAwaitable[K]]) -> SequenceFuture[Grouping[K, T]]:
        """Group elements by key.

        Groups come in first-seen key order and keep the original relative order
        of their elements. Keys must be hashable.

        Args:
            key_selector: Function returning the key of an element.

        Returns:
            Future of the groups.

        Example:
            ```python
            groups = await people.group_by_async(lambda p: p.age // 18)
            assert [g.key for g in groups] == [0, 1]
            ```

        """

        async def _group(items: Iterable[T]) -> tuple[Grouping[K, T], ...]:
            materialized = list(items)
            keys = [await resolve_maybe_awaitable(key_selector(item)) for item in materialized]
            return group_stable(materialized, keys)

        return self._then(_group)

    def order_by_async(
        self,
        key_selector: Callable[[T], MaybeAwaitable[Any]] | None = None,
        *,
        descending: bool = False,
    ) -> SequenceFuture[T]:
        """Sort elements with a stable sort.

        Args:
            key_selector: Function returning the sort key of an element.
                If None, elements are compared with each other directly.
            descending: Whether to sort from the greatest key to the smallest.

        Returns:
            Future of the sorted elements. Elements with equal keys keep their
            original relative order in both directions.

        """

        async def _order(items: Iterable[T]) -> tuple[T, ...]:
            materialized = list(items)
            if key_selector is None:
                keys: list[Any] = materialized
            else:
                keys = [await resolve_maybe_awaitable(key_selector(item)) for item in materialized]
            order = sorted(range(len(materialized)), key=keys.__getitem__, reverse=descending)
            return tuple(materialized[index] for index in order)

        return self._then(_order)

    def order_by_descending_async(
        self,
        key_selector: Callable[[T], MaybeAwaitable[Any]] | None = None,
    ) -> SequenceFuture[T]:
        """Sort elements from the greatest key to the smallest. See `order_by_async`."""
        return self.order_by_async(key_selector, descending=True)

    def first_async(self, predicate: Callable[[T], MaybeAwaitable[bool]] | None = None) -> ChainableFuture[T]:
        """Get the first element, optionally the first one satisfying a predicate.

        Raises (when awaited):
            EmptySequenceError: If no element qualifies.

        """

        async def _first(items: Iterable[T]) -> T:
            found = await _find_first(items, predicate)
            if isinstance(found, Missing):
                raise EmptySequenceError() if predicate is None else EmptySequenceError.no_matching_element()
            return found

        return self._then_terminal("first", _first)

    def first_or_default_async[D](
        self,
        predicate: Callable[[T], MaybeAwaitable[bool]] | None = None,
        default: D | None = None,
    ) -> ChainableFuture[T | D | None]:
        """Get the first qualifying element, or `default` if there is none."""

        async def _first_or_default(items: Iterable[T]) -> T | D | None:
            found = await _find_first(items, predicate)
            return default if isinstance(found, Missing) else found

        return self._then_terminal("first_or_default", _first_or_default)

    def aggregate_async(
        self,
        accumulator: Callable[[Any, T], MaybeAwaitable[Any]],
        seed: Any = MISSING,
        result_selector: Callable[[Any], MaybeAwaitable[Any]] | None = None,
    ) -> ChainableFuture[Any]:
        """Left-fold the elements in source order.

        Args:
            accumulator: Function (accumulated, element) -> accumulated.
            seed: Initial accumulated value. If omitted, the fold starts from the
                first element and the collection must not be empty.
            result_selector: Function applied to the final accumulated value.

        Returns:
            Future of the (selected) final accumulated value.

        Raises (when awaited):
            EmptySequenceError: If `seed` is omitted and the collection is empty.

        Example:
            ```python
            result = await numbers.aggregate_async(lambda acc, x: acc + x, 100, lambda total: total // 2)
            ```

        """

        async def _aggregate(items: Iterable[T]) -> Any:
            iterator = iter(items)
            if isinstance(seed, Missing):
                accumulated = next(iterator, MISSING)
                if isinstance(accumulated, Missing):
                    raise EmptySequenceError
            else:
                accumulated = seed
            for item in iterator:
                accumulated = await resolve_maybe_awaitable(accumulator(accumulated, item))
            if result_selector is None:
                return accumulated
            return await resolve_maybe_awaitable(result_selector(accumulated))

        return self._then_terminal("aggregate", _aggregate)

    def enumerate_async(self) -> SequenceFuture[T]:
        """Materialize the elements into a read-only ordered collection (a tuple)."""

        async def _enumerate() -> tuple[T, ...]:
            with terminal_span("enumerate"):
                return tuple(await self)

        return SequenceFuture(_enumerate)


async def _find_first[T](
    items: Iterable[T],
    predicate: Callable[[T], MaybeAwaitable[bool]] | None,
) -> T | Missing:
    for item in items:
        if predicate is None or await resolve_maybe_awaitable(predicate(item)):
            return item
    return MISSING
