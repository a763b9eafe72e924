"""
Emarsys SDK Observability Setup

- Logs: standard logging under the `emarsys_sdk` logger hierarchy
- Traces: one `emarsys.request` span per dispatched API call, exported
  through OpenTelemetry when a provider is installed
"""
from __future__ import annotations
from typing import Optional
import logging
import os

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO, fmt: str = LOG_FORMAT) -> logging.Logger:
    """Attach a stream handler to the SDK's root logger."""
    logger = logging.getLogger("emarsys_sdk")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


def setup_tracing(
    service_name: str = "emarsys-sdk",
    endpoint: Optional[str] = None,
    exporter: Optional[SpanExporter] = None,
) -> trace.Tracer:
    """Install a TracerProvider, exporting via OTLP when an endpoint is set."""
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    otlp_endpoint = endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if exporter is None and otlp_endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(service_name)
