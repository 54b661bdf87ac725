from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from resto.config import get_settings

_OTEL_CONFIGURED = False
logger = logging.getLogger(__name__)


def configure_otel() -> TracerProvider | None:
    global _OTEL_CONFIGURED
    if _OTEL_CONFIGURED:
        return None

    settings = get_settings()
    endpoint = settings.otel_exporter_endpoint

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: settings.otel_service_name}))
    if endpoint:
        try:
            exporter = OTLPSpanExporter(
                endpoint=endpoint,
                insecure=endpoint.startswith("http://"),
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("otel_exporter_setup_failed")

    trace.set_tracer_provider(provider)
    _OTEL_CONFIGURED = True
    return provider
