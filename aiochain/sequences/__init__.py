"""Combinators over futures of collections and lazy asynchronous sequences."""

from aiochain.sequences.collection import SequenceFuture
from aiochain.sequences.grouping import Grouping
from aiochain.sequences.lazy import AsyncSequence
from aiochain.sequences.stages import StageIterator, StageState

__all__ = [
    "AsyncSequence",
    "Grouping",
    "SequenceFuture",
    "StageIterator",
    "StageState",
]
