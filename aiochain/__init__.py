"""Fluent combinators for asynchronous futures and lazy asynchronous sequences."""

from aiochain.adapters import (
    chain_with,
    enumerate_all,
    filter_async,
    project_async,
    to_async_sequence,
    to_sequence_future,
)
from aiochain.exceptions import AiochainError, EmptySequenceError, StageReentryError
from aiochain.futures import ChainableFuture, FutureAwaiter
from aiochain.sequences import AsyncSequence, Grouping, SequenceFuture, StageIterator, StageState

__all__ = [
    "AiochainError",
    "AsyncSequence",
    "ChainableFuture",
    "EmptySequenceError",
    "FutureAwaiter",
    "Grouping",
    "SequenceFuture",
    "StageIterator",
    "StageReentryError",
    "StageState",
    "chain_with",
    "enumerate_all",
    "filter_async",
    "project_async",
    "to_async_sequence",
    "to_sequence_future",
]
