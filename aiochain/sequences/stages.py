"""Stage iterators of lazy asynchronous sequences.

Every drain of an `AsyncSequence` builds a chain of `StageIterator` objects,
one per operator, linked from the source to the consumer. A stage pulls one
upstream element when it is asked for its next element, applies its operation
and either hands a value downstream or pulls again.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Iterator
from enum import StrEnum
from typing import Self

from aiochain.exceptions import StageReentryError
from aiochain.helpers import close_iterator

logger = logging.getLogger(__name__)

type StageOperation[T, R] = Callable[[T], Awaitable[Iterable[R]]]
"""Operation of a stage: one upstream element in, zero or more values out."""


class StageState(StrEnum):
    """State of a stage iterator.

    Values:
        IDLE: Not being pulled; the next pull may start.
        PULLING: Waiting for the upstream or for the stage operation.
        YIELDING: Last pull handed a value downstream.
        EXHAUSTED: Upstream is done or the stage was closed.
        FAULTED: Upstream or the stage operation raised; the failure is raised again on every pull.
    """

    IDLE = "idle"
    PULLING = "pulling"
    YIELDING = "yielding"
    EXHAUSTED = "exhausted"
    FAULTED = "faulted"


class StageIterator[T, R]:
    """Forward-only, non-reentrant iterator applying one operation to an upstream.

    The operation is called at most once per pulled upstream element. A new
    upstream element is pulled only when the values produced for the previous
    one have all been handed downstream.

    Once faulted, the iterator raises the same exception on every later pull.
    Once exhausted, it keeps raising `StopAsyncIteration`.

    """

    def __init__(self, upstream: AsyncIterator[T], operation: StageOperation[T, R], kind: str) -> None:
        """Initialize the stage iterator.

        Args:
            upstream: Iterator of the previous stage or of the source.
            operation: Operation applied to every pulled element.
            kind: Operator name, used in logs and error messages.

        """
        self._upstream = upstream
        self._operation = operation
        self._kind = kind
        self._pending: Iterator[R] | None = None
        self._state = StageState.IDLE
        self._failure: Exception | None = None

    @property
    def state(self) -> StageState:
        """Current state of the stage."""
        return self._state

    @property
    def kind(self) -> str:
        """Operator name of the stage."""
        return self._kind

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> R:
        if self._state is StageState.EXHAUSTED:
            raise StopAsyncIteration
        if self._failure is not None:
            raise self._failure
        if self._state is StageState.PULLING:
            msg = f"{self._kind} stage is already being pulled"
            raise StageReentryError(msg)

        self._state = StageState.PULLING
        try:
            value = await self._pull()
        except StopAsyncIteration:
            self._state = StageState.EXHAUSTED
            self._pending = None
            logger.debug("%s stage exhausted", self._kind)
            raise
        except Exception as exc:
            self._state = StageState.FAULTED
            self._failure = exc
            self._pending = None
            logger.debug("%s stage faulted: %r", self._kind, exc)
            raise
        except BaseException:
            # Cancelled while suspended: the stage can be pulled again.
            self._state = StageState.IDLE
            raise

        self._state = StageState.YIELDING
        return value

    async def _pull(self) -> R:
        while True:
            if self._pending is not None:
                for value in self._pending:
                    return value
                self._pending = None
            item = await anext(self._upstream)
            try:
                produced = await self._operation(item)
            except StopAsyncIteration as exc:
                msg = f"{self._kind} operation raised StopAsyncIteration"
                raise RuntimeError(msg) from exc
            self._pending = iter(produced)

    async def aclose(self) -> None:
        """Stop the stage and close the upstream chain."""
        if self._state is not StageState.FAULTED:
            self._state = StageState.EXHAUSTED
        self._pending = None
        await close_iterator(self._upstream)


async def drain[T](iterator: AsyncIterator[T]) -> list[T]:
    """Pull every remaining element of an iterator, in order."""
    return [item async for item in iterator]
