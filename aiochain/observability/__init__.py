"""Observability for aiochain pipelines."""

from aiochain.observability.setupper import ObservabilitySetupper
from aiochain.observability.utils import observe_exception, terminal_span

__all__ = [
    "ObservabilitySetupper",
    "observe_exception",
    "terminal_span",
]
