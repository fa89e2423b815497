"""
Axiom dataset operations

Provides functions for listing datasets and retrieving dataset information,
with the dataset's field list flattened into a readable schema.
"""

import json
from typing import Any, Dict
from urllib.parse import quote

from src.logging import get_logger

from .client import make_axiom_request_strict, AxiomAPIError
from .config import validate_axiom_config
from .schema import convert_fields_to_schema, SchemaValidationError

logger = get_logger('DATASETS')


async def list_datasets() -> str:
    """
    List available datasets in Axiom.

    Returns:
        JSON array of dataset objects, or an error message
    """
    config_error = validate_axiom_config()
    if config_error:
        return config_error

    try:
        logger.debug("requesting datasets")
        datasets = await make_axiom_request_strict(method="GET", endpoint="v1/datasets")
    except AxiomAPIError as e:
        logger.error(f"listing datasets failed | status:{e.status_code} | error:{e}")
        return f"Error listing datasets: {e}"

    if not isinstance(datasets, list):
        return f"Unexpected response format: {type(datasets).__name__}. Expected a list of datasets."

    logger.info(f"datasets listed | count:{len(datasets)}")
    return json.dumps(datasets)


async def get_dataset_info(dataset_id: str) -> str:
    """
    Get information about a dataset with its fields rendered as a schema.

    Args:
        dataset_id: Name or ID of the dataset

    Returns:
        JSON object from the dataset info endpoint where ``fields`` has been
        replaced by the rendered schema text, or an error message
    """
    config_error = validate_axiom_config()
    if config_error:
        return config_error

    if not dataset_id or not dataset_id.strip():
        return "Error: Dataset must not be empty"

    try:
        logger.debug(f"requesting dataset info | id:{dataset_id}")
        info = await make_axiom_request_strict(
            method="GET",
            endpoint=f"v1/datasets/{quote(dataset_id, safe='')}/info"
        )
    except AxiomAPIError as e:
        logger.error(f"dataset info failed | id:{dataset_id} | status:{e.status_code} | error:{e}")
        return f"Error getting dataset info: {e}"

    if not isinstance(info, dict):
        return f"Unexpected response format: {type(info).__name__}. Expected a dictionary."

    try:
        return json.dumps(_with_flattened_fields(info))
    except SchemaValidationError as e:
        return f"Error processing dataset schema: {e}"


def _with_flattened_fields(info: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``info`` with its ``fields`` array rendered as schema text."""
    fields = info.get("fields")
    if not isinstance(fields, list):
        logger.debug(f"dataset info has no field list | keys:{list(info.keys())}")
        return info

    result = dict(info)
    result["fields"] = convert_fields_to_schema(fields)
    logger.info(f"dataset schema rendered | fields:{len(fields)}")
    return result
