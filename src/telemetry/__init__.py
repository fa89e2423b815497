"""
OpenTelemetry instrumentation package for the Axiom MCP Server

Provides tracing setup and decorators for tool invocations and
Axiom API calls.
"""

from .config import (
    initialize_telemetry,
    get_tracer,
    shutdown_telemetry,
    is_telemetry_enabled,
    is_telemetry_initialized,
    get_telemetry_status
)

from .decorators import (
    trace_mcp_tool,
    trace_axiom_api_call
)

__all__ = [
    # Core configuration
    'initialize_telemetry',
    'get_tracer',
    'shutdown_telemetry',
    'is_telemetry_enabled',
    'is_telemetry_initialized',
    'get_telemetry_status',

    # Decorators
    'trace_mcp_tool',
    'trace_axiom_api_call'
]
