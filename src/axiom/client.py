"""
Axiom API HTTP client

Provides the base HTTP client functionality for making requests to the Axiom API
with error handling, logging, and response processing.
"""

import json
from typing import Dict, Any, Optional
from src.logging import get_logger

logger = get_logger('HTTP')
import httpx

from src.telemetry.decorators import trace_axiom_api_call
from .config import get_axiom_base_url, get_axiom_headers, validate_axiom_config


class AxiomAPIError(Exception):
    """Custom exception for Axiom API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


@trace_axiom_api_call(operation="http_request")
async def make_axiom_request(
    method: str,
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    json_data: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0
) -> Any:
    """
    Make a request to the Axiom API.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: API endpoint (without base URL)
        params: Query parameters
        json_data: JSON data for POST requests
        headers: Additional headers (merged with the default headers)
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON body, or an error dictionary with ``error: True``

    Raises:
        ValueError: If the Axiom API is not configured
    """
    config_error = validate_axiom_config()
    if config_error:
        raise ValueError(config_error)

    url = f"{get_axiom_base_url()}/{endpoint.lstrip('/')}"
    request_headers = get_axiom_headers(headers)

    logger.debug(f"{method} {url} | params:{params} | headers:{_sanitize_headers_for_logging(request_headers)} | data_size:{len(json.dumps(json_data)) if json_data else 0}")

    async with httpx.AsyncClient() as client:
        try:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=request_headers,
                timeout=timeout
            )

            if response.status_code >= 400:
                logger.warning(f"response {response.status_code} | size:{len(response.text)}")
            else:
                logger.debug(f"response {response.status_code} | size:{len(response.text)}")

            return _process_response(response)

        except httpx.HTTPError as e:
            logger.error(f"HTTP error: {str(e)}")
            return {
                "error": True,
                "message": f"HTTP error: {str(e)}"
            }


def _process_response(response: httpx.Response) -> Any:
    """
    Process HTTP response and return appropriate data structure.

    Args:
        response: HTTP response object

    Returns:
        Processed response data
    """
    if response.status_code >= 400:
        logger.warning(f"API error {response.status_code}: {response.text[:200]}")

        # Axiom error bodies look like {"code": 400, "message": "..."}
        try:
            error_json = response.json()
            actual_error = error_json.get("message", response.text) if isinstance(error_json, dict) else response.text
        except json.JSONDecodeError:
            actual_error = response.text

        return {
            "error": True,
            "status_code": response.status_code,
            "message": actual_error
        }

    content_type = response.headers.get("Content-Type", "")

    if content_type.startswith("application/json"):
        try:
            return response.json()
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode failed: {e}")
            return {
                "error": True,
                "message": f"Invalid JSON response: {str(e)}",
                "raw_content": response.text
            }

    return {
        "data": response.text,
        "content_type": content_type,
        "headers": dict(response.headers)
    }


def _sanitize_headers_for_logging(headers: Dict[str, str]) -> Dict[str, str]:
    """Redact credentials before headers reach the log."""
    sanitized = {}
    sensitive_keys = {"authorization", "cookie", "x-api-key", "x-auth-token"}

    for key, value in headers.items():
        if key.lower() in sensitive_keys:
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value

    return sanitized


async def make_axiom_request_strict(
    method: str,
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    json_data: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0
) -> Any:
    """
    Make a request to the Axiom API with strict error handling.

    Unlike make_axiom_request, this function raises exceptions for errors
    instead of returning error dictionaries.

    Raises:
        AxiomAPIError: For API and transport errors
        ValueError: If the Axiom API is not configured
    """
    response = await make_axiom_request(
        method=method,
        endpoint=endpoint,
        params=params,
        json_data=json_data,
        headers=headers,
        timeout=timeout
    )

    if isinstance(response, dict) and response.get("error") is True:
        raise AxiomAPIError(
            message=response.get("message", "Unknown API error"),
            status_code=response.get("status_code"),
            response_data=response
        )

    return response
