"""Shared telemetry: logging setup, OpenTelemetry tracing, and cache spans."""

from mynet.shared.telemetry.logging import (
    RequestIDLogFilter,
    request_id_var,
    setup_logging,
)
from mynet.shared.telemetry.telemetry import Telemetry, build_exporter, build_resource
from mynet.shared.telemetry.tracing import annotate_cache_lookup, cache_span

__all__ = [
    "setup_logging",
    "request_id_var",
    "RequestIDLogFilter",
    "Telemetry",
    "build_exporter",
    "build_resource",
    "annotate_cache_lookup",
    "cache_span",
]
