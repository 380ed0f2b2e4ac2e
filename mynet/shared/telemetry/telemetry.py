"""OpenTelemetry tracing for the mynet API.

The tracer provider's resource carries the response cache backend and
whether caching is on, so traces from memory and Redis deployments can be
told apart. Redis commands are instrumented only for the Redis backend.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from mynet.core.config import Settings

logger = logging.getLogger(__name__)

# Liveness and readiness checks are not traced.
UNTRACED_URLS = "/api/v1/health"


def build_resource(settings: Settings) -> Resource:
    """Service identity plus the response cache deployment shape."""
    return Resource(
        attributes={
            SERVICE_NAME: settings.app_name,
            SERVICE_VERSION: settings.app_version,
            "deployment.environment": settings.telemetry_environment,
            "mynet.cache.enabled": settings.cache_enabled,
            "mynet.cache.backend": settings.cache_backend,
        }
    )


def build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for exporter_type, or None for "none".

    "otlp" without an endpoint falls back to the console exporter.
    """
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint,
                insecure=otlp_endpoint.startswith("http://"),
            )
        logger.warning("TELEMETRY_OTLP_ENDPOINT not set; exporting spans to console")
    elif exporter_type != "console":
        logger.warning("Unknown telemetry exporter %r; exporting spans to console", exporter_type)
    return ConsoleSpanExporter()


class Telemetry:
    """Tracer provider lifecycle for one application instance.

    Built in the lifespan when TELEMETRY_ENABLED is set; instrument_app()
    and shutdown() are no-ops if setup failed.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None

    def setup(self) -> TracerProvider | None:
        """Create and register the global tracer provider."""
        try:
            provider = TracerProvider(
                resource=build_resource(self.settings),
                sampler=TraceIdRatioBased(self.settings.telemetry_sample_rate),
            )
            exporter = build_exporter(
                self.settings.telemetry_exporter, self.settings.telemetry_otlp_endpoint
            )
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: exporter=%s, cache backend=%s",
            self.settings.telemetry_exporter,
            self.settings.cache_backend,
        )
        return provider

    def instrument_app(self, app: FastAPI) -> None:
        """Instrument FastAPI requests, and Redis commands when Redis backs the cache."""
        if self.tracer_provider is None:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
            )
            if self.settings.cache_enabled and self.settings.cache_backend == "redis":
                RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)
        except Exception as e:
            logger.exception("Failed to instrument application: %s", e)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("Error during telemetry shutdown: %s", e)
        self.tracer_provider = None
