"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, telemetry, middleware, routers.
No business logic here. See wanderbites.core.lifespan and
wanderbites.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from wanderbites.api.v1 import api_router
from wanderbites.core.config import Settings, get_settings
from wanderbites.core.exception_handlers import register_exception_handlers
from wanderbites.core.lifespan import create_lifespan
from wanderbites.core.limiter import limiter
from wanderbites.middleware import RequestContextMiddleware, TimeoutMiddleware
from wanderbites.shared.telemetry.telemetry import TelemetryConfig, set_telemetry


def _setup_telemetry(app: FastAPI, settings: Settings) -> None:
    """Install the tracer provider and instrument FastAPI before the app starts."""
    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost. Request context wraps everything so timeout
    # warnings carry the request ID.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header, settings.correlation_id_header],
    )
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)
    app.add_middleware(
        RequestContextMiddleware,
        request_id_header=settings.request_id_header,
        correlation_id_header=settings.correlation_id_header,
    )

    if settings.telemetry_enabled:
        _setup_telemetry(app, settings)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
