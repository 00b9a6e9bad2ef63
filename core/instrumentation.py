"""
OpenTelemetry instrumentation setup.

This module configures OpenTelemetry for distributed tracing.
Tracing is off unless OTEL_ENABLED is set; until then the global
tracer provider is the API's no-op one and spans cost nothing.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Status, StatusCode

logger = logging.getLogger(__name__)

__all__ = ["Status", "StatusCode", "get_tracer", "setup_opentelemetry", "tracing_enabled"]

_configured = False


def tracing_enabled() -> bool:
    """Return True when OTEL_ENABLED is truthy."""
    return os.environ.get("OTEL_ENABLED", "false").lower() in ("1", "true", "yes")


def setup_opentelemetry():
    """
    Configure OpenTelemetry instrumentation.

    Sets up:
    - Distributed tracing (exported via OTLP)
    - Auto-instrumentation for Django

    Calling it more than once is a no-op.
    """
    global _configured
    if _configured:
        return
    if not tracing_enabled():
        logger.info("OpenTelemetry disabled, spans are no-ops")
        return

    service_name = os.environ.get("OTEL_SERVICE_NAME", "payment-license-service")
    service_version = os.environ.get("SERVICE_VERSION", "1.0.0")
    environment = os.environ.get("ENVIRONMENT", "development")

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": service_version,
            "deployment.environment": environment,
        }
    )

    trace_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(trace_provider)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
    otlp_exporter = OTLPSpanExporter(
        endpoint=otlp_endpoint,
        insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
    )
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    DjangoInstrumentor().instrument()

    _configured = True
    logger.info("OpenTelemetry instrumentation configured", extra={"endpoint": otlp_endpoint})


def get_tracer(name: str):
    """
    Get a tracer instance for manual instrumentation.

    Args:
        name: Tracer name (usually module name)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
