"""
OpenTelemetry decorators for instrumenting MCP server operations

Provides decorators for adding tracing to MCP tools and Axiom API calls.
Both call straight through when telemetry is not initialized.
"""

import functools
import inspect
from typing import Callable, Optional
from src.logging import get_logger

logger = get_logger('TELEMETRY')

SENSITIVE_PARAMS = {
    'token', 'password', 'secret', 'key', 'auth', 'authorization',
    'access_token', 'api_key', 'headers'
}


def trace_mcp_tool(tool_name: Optional[str] = None, record_args: bool = True, record_result: bool = False):
    """
    Decorator to trace MCP tool execution.

    Args:
        tool_name: Custom span name (defaults to mcp_tool.<function name>)
        record_args: Whether to record function arguments as span attributes
        record_result: Whether to record the result as a span attribute
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            from .config import get_tracer

            tracer = get_tracer()
            if not tracer:
                return await func(*args, **kwargs)

            from opentelemetry import trace

            with tracer.start_as_current_span(tool_name or f"mcp_tool.{func.__name__}") as span:
                span.set_attribute("mcp.tool.name", func.__name__)
                span.set_attribute("mcp.operation.type", "tool_execution")
                if record_args:
                    _record_function_args(span, func, args, kwargs)

                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    span.set_attribute("mcp.tool.error_type", type(e).__name__)
                    raise

                # Tool functions report failures as "Error..." strings
                if isinstance(result, str) and result.startswith("Error"):
                    span.set_attribute("mcp.tool.error", True)
                    span.set_attribute("mcp.tool.error_message", result[:1000])
                    span.set_status(trace.Status(trace.StatusCode.ERROR, result[:200]))
                else:
                    span.set_status(trace.Status(trace.StatusCode.OK))

                if record_result and result is not None:
                    result_str = str(result)
                    if len(result_str) <= 1000:
                        span.set_attribute("mcp.tool.result", result_str)
                    else:
                        span.set_attribute("mcp.tool.result_size", len(result_str))

                return result

        return wrapper
    return decorator


def trace_axiom_api_call(operation: Optional[str] = None):
    """
    Decorator to trace Axiom API calls.

    Args:
        operation: Description of the API operation
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            from .config import get_tracer

            tracer = get_tracer()
            if not tracer:
                return await func(*args, **kwargs)

            from opentelemetry import trace

            with tracer.start_as_current_span(f"axiom_api.{operation or func.__name__}") as span:
                span.set_attribute("axiom.operation.type", "api_call")
                if 'endpoint' in kwargs:
                    span.set_attribute("axiom.api.endpoint", kwargs['endpoint'])
                if 'method' in kwargs:
                    span.set_attribute("axiom.api.method", kwargs['method'])

                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    span.set_attribute("axiom.api.error_type", type(e).__name__)
                    raise

                if isinstance(result, dict) and result.get('error') is True:
                    span.set_attribute("axiom.api.has_error", True)
                    if 'status_code' in result:
                        span.set_attribute("axiom.api.status_code", result['status_code'])
                    span.add_event("axiom_api_error_response", {
                        "axiom.error.message": str(result.get('message', ''))[:1000],
                    })
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(result.get('message', ''))[:200]))
                else:
                    span.set_status(trace.Status(trace.StatusCode.OK))

                return result

        return wrapper
    return decorator


def _record_function_args(span, func: Callable, args: tuple, kwargs: dict):
    """Record function arguments as span attributes, redacting sensitive names."""
    try:
        bound_args = inspect.signature(func).bind_partial(*args, **kwargs)
        bound_args.apply_defaults()
    except TypeError as e:
        logger.debug(f"failed to record function args | error: {e}")
        return

    for param_name, value in bound_args.arguments.items():
        if param_name.lower() in SENSITIVE_PARAMS:
            span.set_attribute(f"mcp.args.{param_name}", "[REDACTED]")
        elif param_name == 'ctx':
            session_id = getattr(value, 'session_id', None)
            if session_id:
                span.set_attribute("mcp.session.id", str(session_id))
        else:
            value_str = str(value)
            if len(value_str) <= 200:
                span.set_attribute(f"mcp.args.{param_name}", value_str)
            else:
                span.set_attribute(f"mcp.args.{param_name}_size", len(value_str))
