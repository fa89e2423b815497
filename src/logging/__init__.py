"""
Logging utilities for the Axiom MCP server.
"""

from .mcp_logger import (
    get_logger,
    set_session_context,
    log_tool_call,
    server_logger,
    tool_logger
)

__all__ = [
    'get_logger',
    'set_session_context',
    'log_tool_call',
    'server_logger',
    'tool_logger'
]
