"""
OpenTelemetry wiring for the cinema service.

Spans come from three places: the FastAPI instrumentation (one per request),
the SQLAlchemy instrumentation (one per statement) and the booking use case
(`use_case.create_booking`). They are exported over OTLP when
OTEL_EXPORTER_OTLP_ENDPOINT is set; without it the provider still records
spans but ships them nowhere.
"""

from typing import Any

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from src.platform.config.core_setting import settings


# Probes and scrapes would drown the booking traces
EXCLUDED_URLS = 'api/health,metrics'


class TracingConfig:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        console_export: bool | None = None,
    ) -> None:
        self.service_name = service_name
        self.otlp_endpoint = otlp_endpoint or settings.OTEL_EXPORTER_OTLP_ENDPOINT
        self.console_export = (
            settings.OTEL_CONSOLE_EXPORT if console_export is None else console_export
        )
        self._provider: TracerProvider | None = None

    def span_exporters(self) -> list[SpanExporter]:
        exporters: list[SpanExporter] = []
        if self.otlp_endpoint:
            exporters.append(OTLPSpanExporter(endpoint=self.otlp_endpoint))
        if self.console_export:
            exporters.append(ConsoleSpanExporter())
        return exporters

    def setup(self) -> None:
        """Install the global tracer provider. Call once, at startup."""
        # Sample everything; error-aware sampling is the collector's job
        self._provider = TracerProvider(
            resource=Resource(attributes={SERVICE_NAME: self.service_name}),
            sampler=ALWAYS_ON,
        )
        for exporter in self.span_exporters():
            self._provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(self._provider)

    def instrument_fastapi(self, *, app: FastAPI) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)

    def instrument_sqlalchemy(self, *, engine: Any) -> None:
        # AsyncEngine is instrumented through the sync engine it wraps
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    def shutdown(self) -> None:
        if self._provider is not None:
            self._provider.shutdown()
