"""Observability utilities."""

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import trace

TRACER_NAME = "aiochain"


def observe_exception(exc: Exception) -> None:
    """Observe exception on the current span."""

    span = trace.get_current_span()
    span.record_exception(exc)
    span.set_status(trace.Status(trace.StatusCode.ERROR, str(exc)))


@contextmanager
def terminal_span(operation: str) -> Iterator[trace.Span]:
    """Run a terminal operation inside its own span.

    Without a configured tracer provider the span is a no-op.
    Exceptions are recorded on the span and re-raised unchanged.

    Args:
        operation: Name of the terminal operation, e.g. "enumerate".

    """
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(
        f"aiochain.{operation}", record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as exc:
            observe_exception(exc)
            raise
