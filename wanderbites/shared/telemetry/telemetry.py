"""OpenTelemetry tracer provider for the Wanderbites service.

create_app() builds one TelemetryConfig when TELEMETRY_ENABLED is set and
registers it with set_telemetry(); the lifespan picks it up again to
instrument the Redis cache and to flush spans on shutdown.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

logger = logging.getLogger(__name__)


def _make_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for TELEMETRY_EXPORTER; None keeps spans in-process."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp" and otlp_endpoint:
        return OTLPSpanExporter(endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://"))
    if exporter_type != "console":
        logger.warning("Exporter %r unusable, falling back to console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Owns the tracer provider that Cosmic repository spans are recorded on."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        if not self.enabled:
            return None
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(sample_rate))
        try:
            exporter = _make_exporter(exporter_type, otlp_endpoint)
        except Exception:
            # tracing must never keep the service from starting
            logger.exception("Could not build %s span exporter", exporter_type)
            return None
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info("Tracing %s %s via %s exporter", self.service_name, self.service_version, exporter_type)
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Span per request; health checks are left out."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=self.tracer_provider,
            excluded_urls="/api/v1/health",
        )

    def instrument_redis(self) -> None:
        if self.tracer_provider is None:
            return
        RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)

    def shutdown(self) -> None:
        """Flush buffered spans."""
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            logger.info("Tracer provider shut down")


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Register (or clear, with None) the app's telemetry."""
    global _telemetry
    _telemetry = telemetry
