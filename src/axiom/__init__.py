"""
Axiom API client package

Provides organized modules for interacting with the Axiom platform API,
including dataset, query, schema and rate limiting operations.
"""

from .client import make_axiom_request, make_axiom_request_strict, AxiomAPIError
from .config import (
    get_axiom_config,
    get_rate_limit_config,
    validate_axiom_config,
    get_axiom_headers,
    get_axiom_base_url,
    is_axiom_configured,
    load_config_file,
)
from .datasets import list_datasets, get_dataset_info
from .queries import query_apl
from .rate_limit import RateLimiter, create_rate_limiters
from .schema import (
    FieldDescriptor,
    SchemaBranch,
    SchemaLeaf,
    SchemaValidationError,
    validate_fields,
    build_schema_tree,
    render_schema,
    convert_fields_to_schema,
)

__all__ = [
    # Client functions
    'make_axiom_request',
    'make_axiom_request_strict',
    'AxiomAPIError',

    # Configuration
    'get_axiom_config',
    'get_rate_limit_config',
    'validate_axiom_config',
    'get_axiom_headers',
    'get_axiom_base_url',
    'is_axiom_configured',
    'load_config_file',

    # Dataset operations
    'list_datasets',
    'get_dataset_info',

    # Query operations
    'query_apl',

    # Rate limiting
    'RateLimiter',
    'create_rate_limiters',

    # Schema flattening
    'FieldDescriptor',
    'SchemaBranch',
    'SchemaLeaf',
    'SchemaValidationError',
    'validate_fields',
    'build_schema_tree',
    'render_schema',
    'convert_fields_to_schema',
]
