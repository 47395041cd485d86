# recordsync\shared\observability.py
import structlog
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from recordsync.shared.config import settings

logger = structlog.get_logger()

def setup_observability() -> TracerProvider:
    """
    Configures OpenTelemetry for the process.

    1. Sets the Global Tracer Provider.
    2. Configures an Exporter (OTLP when an endpoint is configured,
       Console when DEBUG is on).

    Without an exporter the provider still produces Trace IDs, which the
    logging processor copies into every log entry.
    """

    # 1. Define Resource (Service Name identity)
    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "service.environment": settings.APP_ENV.value,
    })

    # 2. Initialize the Tracer Provider
    provider = TracerProvider(resource=resource)

    # 3. Configure the Exporter
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("telemetry_export_enabled", endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    elif settings.DEBUG:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # Set the global provider
    trace.set_tracer_provider(provider)
    return provider

def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation in Use Cases.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("my_custom_logic"):
            ...
    """
    return trace.get_tracer(name)
