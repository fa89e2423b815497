"""
OpenTelemetry configuration and initialization for the Axiom MCP Server

Handles tracing setup with the OTLP exporter and httpx instrumentation.
Tracing is off unless OTEL_TELEMETRY_ENABLED is set.
"""

import os
from typing import Optional
from src.logging import get_logger

logger = get_logger('TELEMETRY')

# Global telemetry state
_telemetry_initialized = False
_tracer = None


def is_telemetry_enabled() -> bool:
    """Check if telemetry is enabled via environment variables."""
    return os.getenv('OTEL_TELEMETRY_ENABLED', 'false').lower() in ('true', '1', 'yes', 'on')


def is_telemetry_initialized() -> bool:
    return _telemetry_initialized


def get_service_name() -> str:
    """Get the service name for telemetry."""
    return os.getenv('OTEL_SERVICE_NAME', 'axiom-mcp')


def get_otel_endpoint() -> str:
    """Get the OTLP endpoint for telemetry export."""
    return os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT', 'http://localhost:4317')


def get_deployment_environment() -> str:
    """Get the deployment environment."""
    return os.getenv('DEPLOYMENT_ENVIRONMENT', 'development')


def initialize_telemetry(service_version: str = "dev") -> bool:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_version: Version reported in the service resource

    Returns:
        True if initialization was successful, False otherwise
    """
    global _telemetry_initialized, _tracer

    if _telemetry_initialized:
        logger.debug("telemetry already initialized")
        return True

    if not is_telemetry_enabled():
        logger.debug("telemetry disabled via configuration")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
    except ImportError as e:
        logger.warning(f"telemetry disabled | missing dependencies: {e}")
        return False

    resource = Resource.create({
        "service.name": get_service_name(),
        "service.version": service_version,
        "deployment.environment": get_deployment_environment(),
        "service.namespace": "axiom-mcp",
    })

    otlp_endpoint = get_otel_endpoint()
    logger.info(f"initializing telemetry | endpoint:{otlp_endpoint} | service:{get_service_name()}")

    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(trace_provider)

    HTTPXClientInstrumentor().instrument()

    _tracer = trace.get_tracer(__name__)
    _telemetry_initialized = True
    logger.info("telemetry initialization complete")
    return True


def get_tracer():
    """Get the OpenTelemetry tracer instance, or None when tracing is off."""
    if not _telemetry_initialized:
        return None
    return _tracer


def shutdown_telemetry():
    """Shutdown the tracer provider and flush any pending spans."""
    global _telemetry_initialized, _tracer

    if not _telemetry_initialized:
        return

    try:
        from opentelemetry import trace

        trace_provider = trace.get_tracer_provider()
        if hasattr(trace_provider, 'shutdown'):
            trace_provider.shutdown()
        logger.info("telemetry shutdown complete")
    except Exception as e:
        logger.error(f"telemetry shutdown error | error: {e}")
    finally:
        _telemetry_initialized = False
        _tracer = None


def get_telemetry_status() -> dict:
    """
    Get the current telemetry configuration status.

    Returns:
        Dictionary with telemetry status information
    """
    return {
        "enabled": is_telemetry_enabled(),
        "initialized": _telemetry_initialized,
        "service_name": get_service_name(),
        "endpoint": get_otel_endpoint(),
        "environment": get_deployment_environment(),
        "tracer_available": _tracer is not None,
    }
