"""
Axiom query operations

Provides the function for running APL (Axiom Processing Language) queries
with optional time bounds.
"""

import json
from typing import Any, Dict, Optional

from src.logging import get_logger

from .client import make_axiom_request_strict, AxiomAPIError
from .config import validate_axiom_config

logger = get_logger('QUERY')


async def query_apl(
    query: str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    timeout: float = 60.0
) -> str:
    """
    Execute an APL query.

    Args:
        query: The APL query to run
        start_time: Optional start time in RFC3339 format (e.g., "2024-01-01T00:00:00Z")
        end_time: Optional end time in RFC3339 format
        timeout: Request timeout in seconds

    Returns:
        Query result as a JSON string, or an error message

    Examples:
        query_apl("['http-logs'] | where status >= 500 | summarize count() by bin_auto(_time)")
    """
    config_error = validate_axiom_config()
    if config_error:
        return config_error

    if not query or not query.strip():
        return "Error: Query must not be empty"

    payload: Dict[str, Any] = {"apl": query}
    if start_time:
        payload["startTime"] = start_time
    if end_time:
        payload["endTime"] = end_time

    logger.info(f"executing APL query | size:{len(query)}")
    logger.debug(f"executing query | query:{query} | start:{start_time} | end:{end_time}")

    try:
        result = await make_axiom_request_strict(
            method="POST",
            endpoint="v1/datasets/_apl",
            params={"format": "legacy"},
            json_data=payload,
            timeout=timeout
        )
    except AxiomAPIError as e:
        logger.error(f"APL query failed | status:{e.status_code} | error:{e}")
        return f"Error executing APL query: {e}"

    if isinstance(result, dict) and "matches" in result:
        logger.info(f"APL query complete | matches:{len(result.get('matches') or [])}")

    return json.dumps(result)
