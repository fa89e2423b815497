"""
Axiom API configuration

Handles environment variables, the optional JSON config file, authentication
headers, and base URL configuration for the Axiom platform API.
"""

import json
import math
import os
from typing import Any, Dict, Optional


DEFAULT_AXIOM_URL = "https://api.axiom.co"


def load_config_file(path: str) -> Dict[str, str]:
    """
    Export the keys of a JSON config file as AXIOM_* environment variables.

    A key such as ``query_rate`` becomes ``AXIOM_QUERY_RATE``. Values are
    stored as strings, so they are parsed the same way as values set in the
    environment directly.

    Args:
        path: Path to a JSON file holding a single object

    Returns:
        Mapping of the environment variables that were set

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a JSON object or a value is null.
            Nothing is exported in that case.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    exported = {}
    for key, value in data.items():
        if value is None:
            raise ValueError(f"Config file {path}: value for '{key}' must not be null")
        # non-strings keep their JSON spelling, so true stays "true"
        exported[f"AXIOM_{key.upper()}"] = value if isinstance(value, str) else json.dumps(value)

    os.environ.update(exported)

    return exported


def get_axiom_config() -> Dict[str, Any]:
    """
    Get Axiom API configuration from environment variables.

    Returns:
        Dictionary with raw configuration values. Rate and burst values are
        left as strings and parsed by get_rate_limit_config.
    """
    return {
        "token": os.getenv("AXIOM_TOKEN", ""),
        "url": os.getenv("AXIOM_URL", "") or DEFAULT_AXIOM_URL,
        "org_id": os.getenv("AXIOM_ORG_ID", ""),
        "query_rate": os.getenv("AXIOM_QUERY_RATE", "1"),
        "query_burst": os.getenv("AXIOM_QUERY_BURST", "1"),
        "datasets_rate": os.getenv("AXIOM_DATASETS_RATE", "1"),
        "datasets_burst": os.getenv("AXIOM_DATASETS_BURST", "1"),
    }


def get_rate_limit_config() -> Dict[str, Dict[str, float]]:
    """
    Parse the rate limiter settings.

    Returns:
        ``{"query": {"rate", "burst"}, "datasets": {"rate", "burst"}}``

    Raises:
        ValueError: If a value is not numeric or not positive
    """
    config = get_axiom_config()
    limits = {}

    for name in ("query", "datasets"):
        rate = float(config[f"{name}_rate"])
        burst = int(config[f"{name}_burst"])
        if not math.isfinite(rate):
            raise ValueError(f"AXIOM_{name.upper()}_RATE must be a finite number")
        if rate <= 0 or burst <= 0:
            raise ValueError(f"AXIOM_{name.upper()}_RATE and AXIOM_{name.upper()}_BURST must be positive")
        limits[name] = {"rate": rate, "burst": burst}

    return limits


def validate_axiom_config() -> Optional[str]:
    """
    Validate Axiom API configuration.

    Returns:
        Error message if configuration is invalid, None if valid
    """
    config = get_axiom_config()

    if not config["token"]:
        return "Error: Axiom token must be provided via AXIOM_TOKEN environment variable"

    try:
        get_rate_limit_config()
    except ValueError as e:
        return f"Error: Invalid rate limit configuration: {e}"

    return None


def is_axiom_configured() -> bool:
    """
    Check if the Axiom API is properly configured.

    Returns:
        True if the token is set and the rate limits parse
    """
    return validate_axiom_config() is None


def get_axiom_base_url() -> str:
    """Base URL for Axiom API requests, without a trailing slash."""
    return get_axiom_config()["url"].rstrip("/")


def get_axiom_headers(additional_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Get Axiom API headers with optional additional headers.

    Args:
        additional_headers: Optional additional headers to merge

    Returns:
        Complete headers dictionary for API requests
    """
    config = get_axiom_config()
    headers = {
        "Authorization": f"Bearer {config['token']}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    if config["org_id"]:
        headers["X-Axiom-Org-Id"] = config["org_id"]

    if additional_headers:
        headers.update(additional_headers)

    return headers
