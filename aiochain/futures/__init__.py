"""Chainable single-value futures."""

from aiochain.futures.awaiter import FutureAwaiter
from aiochain.futures.chainable import ChainableFuture
from aiochain.futures.combinators import pipe, pipe_async

__all__ = [
    "ChainableFuture",
    "FutureAwaiter",
    "pipe",
    "pipe_async",
]
