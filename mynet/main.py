"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here (SRP). See mynet.core.lifespan and
mynet.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear get_settings cache) before calling create_app(). The
route cache table is compiled here, so a malformed CACHE_STRATEGY stops
the app at startup.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mynet.api.v1 import api_router
from mynet.application.services import AuthorizationService, PermissionResolver
from mynet.core.config import get_settings
from mynet.core.exception_handlers import register_exception_handlers
from mynet.core.lifespan import create_lifespan
from mynet.infrastructure.cache import RouteCachePolicy, build_cache_store
from mynet.middleware import (
    RequestIDMiddleware,
    ResponseCacheMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from mynet.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    resolver = PermissionResolver()
    app.state.permission_resolver = resolver
    app.state.authorization_service = AuthorizationService(resolver)

    cache_policy = RouteCachePolicy(
        settings.cache_strategy, default_ttl=settings.cache_default_ttl
    )
    app.state.cache_policy = cache_policy
    app.state.cache = build_cache_store(settings) if settings.cache_enabled else None

    # Middleware: first added = innermost. Order (outer → inner): timeout → request ID → CORS → security headers → response cache.
    if app.state.cache is not None:
        app.add_middleware(
            ResponseCacheMiddleware, store=app.state.cache, policy=cache_policy
        )
    app.add_middleware(SecurityHeadersMiddleware, hsts_enabled=settings.hsts_enabled)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-Cache-TTL", settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
