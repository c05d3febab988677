"""OpenTelemetry setup: traces and metrics for the search API.

One exporter family is chosen for both signals: "console" (development),
"otlp" (gRPC collector) or "none". PerformanceLogger instruments are created
against the global meter, so they start exporting once setup_telemetry runs.
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")
# Probes and the landing page are not worth a span each.
UNTRACED_URLS = "/api/v1/health,/api/v1/health/ready"
METRIC_EXPORT_INTERVAL_MS = 60_000


def _resolve_exporter(exporter_type: str, otlp_endpoint: str | None) -> str:
    if exporter_type == "otlp" and not otlp_endpoint:
        logger.warning("OTLP exporter selected without an endpoint; using console")
        return "console"
    if exporter_type not in EXPORTERS:
        logger.warning("Unknown telemetry exporter %r; using console", exporter_type)
        return "console"
    return exporter_type


def _span_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if exporter_type == "otlp":
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if exporter_type == "console":
        return ConsoleSpanExporter()
    return None


def _metric_reader(exporter_type: str, otlp_endpoint: str | None) -> MetricReader | None:
    if exporter_type == "otlp":
        exporter = OTLPMetricExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    elif exporter_type == "console":
        exporter = ConsoleMetricExporter()
    else:
        return None
    return PeriodicExportingMetricReader(
        exporter, export_interval_millis=METRIC_EXPORT_INTERVAL_MS
    )


class TelemetryConfig:
    """Tracer and meter providers for the API process.

    Also instruments FastAPI requests, SQLAlchemy queries (the passage and
    section queries run by the repositories) and log records.
    """

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
        self.meter_provider: MeterProvider | None = None

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install global tracer and meter providers.

        Args:
            exporter_type: "console", "otlp", or "none".
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Trace sampling ratio 0.0-1.0.

        Returns:
            TracerProvider, or None if disabled or initialization failed.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        exporter_type = _resolve_exporter(exporter_type, otlp_endpoint)
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        try:
            tracer_provider = TracerProvider(
                resource=resource, sampler=TraceIdRatioBased(sample_rate)
            )
            span_exporter = _span_exporter(exporter_type, otlp_endpoint)
            if span_exporter is not None:
                tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))

            reader = _metric_reader(exporter_type, otlp_endpoint)
            meter_provider = MeterProvider(
                resource=resource, metric_readers=[reader] if reader else []
            )
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None

        trace.set_tracer_provider(tracer_provider)
        metrics.set_meter_provider(meter_provider)
        self.tracer_provider = tracer_provider
        self.meter_provider = meter_provider
        logger.info(
            "OpenTelemetry initialized: service=%s version=%s exporter=%s sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return tracer_provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Add request spans. Called from create_app, before setup_telemetry runs."""
        if not self.enabled:
            return
        try:
            FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)
        except Exception as e:
            logger.exception("Failed to instrument FastAPI: %s", e)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        if self.tracer_provider is None:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
                enable_commenter=False,
            )
        except Exception as e:
            logger.exception("Failed to instrument SQLAlchemy: %s", e)

    def instrument_logging(self) -> None:
        """Add otelTraceID/otelSpanID to log records; the log format stays ours."""
        if self.tracer_provider is None:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider,
                set_logging_format=False,
            )
        except Exception as e:
            logger.exception("Failed to instrument logging: %s", e)

    def shutdown(self) -> None:
        """Flush pending spans and metrics."""
        for provider in (self.tracer_provider, self.meter_provider):
            if provider is None:
                continue
            try:
                provider.shutdown()
            except Exception as e:
                logger.exception("Error during telemetry shutdown: %s", e)
        self.tracer_provider = None
        self.meter_provider = None
        logger.info("Telemetry shutdown complete")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set by create_app)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
