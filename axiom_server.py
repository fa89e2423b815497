#!/usr/bin/env python3
"""
Axiom MCP Server
A Model Context Protocol server that lets agents run APL queries against Axiom,
list datasets, and read dataset schemas.
"""

import argparse
import os
import sys
from importlib.metadata import version, PackageNotFoundError
from typing import Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastmcp import FastMCP, Context

from src.axiom import (
    query_apl as axiom_query_apl,
    list_datasets as axiom_list_datasets,
    get_dataset_info as axiom_get_dataset_info,
    load_config_file,
    validate_axiom_config,
    create_rate_limiters,
    RateLimiter,
)
from src.logging import log_tool_call, server_logger
from src.telemetry import initialize_telemetry, shutdown_telemetry, trace_mcp_tool


try:
    SERVER_VERSION = version("axiom-mcp")
except PackageNotFoundError:
    SERVER_VERSION = "dev"

mcp = FastMCP(name="axiom-mcp", version=SERVER_VERSION)

_rate_limiters: Dict[str, RateLimiter] = {}


def get_rate_limiter(name: str) -> RateLimiter:
    """Return the named limiter, creating the limiters from the environment on first use."""
    if not _rate_limiters:
        _rate_limiters.update(create_rate_limiters())
    return _rate_limiters[name]


def reset_rate_limiters() -> None:
    """Drop the current limiters so the next call rebuilds them from the environment."""
    _rate_limiters.clear()


def _session_id(ctx: Optional[Context]) -> Optional[str]:
    return getattr(ctx, "session_id", None) if ctx is not None else None


@mcp.tool()
@trace_mcp_tool(tool_name="query_apl", record_args=True, record_result=False)
async def query_apl(ctx: Context, query: str, start_time: Optional[str] = None, end_time: Optional[str] = None) -> str:
    """
    Query Axiom datasets using Axiom Processing Language (APL).

    Instructions:
    1. Query must be a valid APL query string
    2. Get schema first by getting a single event and projecting all fields
    3. Maximum 65000 rows per query
    4. Prefer aggregations when possible
    5. Be selective with projections
    6. Always restrict time range
    7. Never guess schema

    Args:
        query: The APL query to run
        start_time: Optional RFC3339 start of the time range (e.g. "2024-01-01T00:00:00Z")
        end_time: Optional RFC3339 end of the time range
    """
    log_tool_call("query_apl", _session_id(ctx), query=query, start_time=start_time, end_time=end_time)

    if not get_rate_limiter("query").try_remove_tokens(1):
        return "Error: Rate limit exceeded for queries"

    return await axiom_query_apl(query, start_time=start_time, end_time=end_time)


@mcp.tool()
@trace_mcp_tool(tool_name="list_datasets")
async def list_datasets(ctx: Context) -> str:
    """
    List all available Axiom datasets.
    """
    log_tool_call("list_datasets", _session_id(ctx))

    if not get_rate_limiter("datasets").try_remove_tokens(1):
        return "Error: Rate limit exceeded for dataset operations"

    return await axiom_list_datasets()


@mcp.tool()
@trace_mcp_tool(tool_name="get_dataset_info_and_schema")
async def get_dataset_info_and_schema(ctx: Context, dataset: str) -> str:
    """
    Get information about an Axiom dataset, including its schema.

    The "fields" value of the result is a type-like description of every
    field in the dataset, with dotted field names shown as nested objects.
    Use it to find exact field names before writing an APL query.

    Args:
        dataset: The name of the dataset
    """
    log_tool_call("get_dataset_info_and_schema", _session_id(ctx), dataset=dataset)

    if not get_rate_limiter("datasets").try_remove_tokens(1):
        return "Error: Rate limit exceeded for dataset operations"

    return await axiom_get_dataset_info(dataset)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Axiom MCP server")
    parser.add_argument("config_file", nargs="?", help="Optional JSON file whose keys are exported as AXIOM_<KEY>")
    parser.add_argument("--transport", choices=["streamable-http", "stdio"], default="streamable-http",
                        help="MCP transport (default: streamable-http)")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Bind address for HTTP transport")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")), help="Port for HTTP transport")
    return parser.parse_args(argv)


def main(argv=None):
    import atexit
    import signal

    args = parse_args(argv)

    if args.config_file:
        try:
            exported = load_config_file(args.config_file)
        except (OSError, ValueError) as e:
            print(f"Error reading config file: {e}", file=sys.stderr)
            sys.exit(1)
        server_logger.info(f"config file loaded | path:{args.config_file} | keys:{len(exported)}")

    config_error = validate_axiom_config()
    if config_error:
        server_logger.error(config_error)
        sys.exit(1)

    reset_rate_limiters()
    get_rate_limiter("query")

    if initialize_telemetry(service_version=SERVER_VERSION):
        atexit.register(shutdown_telemetry)

    def handle_shutdown(signum, frame):
        server_logger.info("gracefully shutting down")
        sys.exit(0)

    signal.signal(signal.SIGTERM, handle_shutdown)
    signal.signal(signal.SIGINT, handle_shutdown)

    if args.transport == "stdio":
        server_logger.info(f"MCP server starting | transport:stdio | version:{SERVER_VERSION}")
        mcp.run(transport="stdio")
    else:
        server_logger.info(f"MCP server listening at http://{args.host}:{args.port}")
        mcp.run(transport="streamable-http", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
