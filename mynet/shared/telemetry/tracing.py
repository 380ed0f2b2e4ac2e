"""Cache spans and cache attributes on the current request span."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace

CACHE_TRACER_NAME = "mynet.cache"


@contextmanager
def cache_span(
    operation: str,
    attributes: dict[str, Any] | None = None,
    tracer: trace.Tracer | None = None,
) -> Iterator[trace.Span]:
    """Run the block inside a current ``cache.<operation>`` span.

    Exceptions are recorded on the span and re-raised.
    """
    tracer = tracer or trace.get_tracer(CACHE_TRACER_NAME)
    with tracer.start_as_current_span(f"cache.{operation}", attributes=attributes) as span:
        yield span


def annotate_cache_lookup(status: str, ttl: int, family: str) -> None:
    """Tag the current span with the cache outcome of a GET."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    span.set_attribute("cache.status", status)
    span.set_attribute("cache.ttl", ttl)
    span.set_attribute("cache.family", family)
