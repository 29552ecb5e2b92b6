"""
OpenAPI Introspection Module

Discovers which paths carry given fields in their request/response schemas.
Supports:
- Recursive field discovery with conservative matching of open schemas
- Bounded recursion for cyclic schemas
- Manual $ref resolution for documents that were not dereferenced
- Grouping paths by operation tags
"""

from .field_finder import SchemaFieldFinder, find_fields_in_schema
from .operation_scanner import (
    DEFAULT_GROUP,
    OperationScanner,
    extract_request_field_paths,
    extract_response_field_paths,
)
from .path_grouper import extract_group_paths
from .ref_resolver import resolve

__all__ = [
    "DEFAULT_GROUP",
    "OperationScanner",
    "SchemaFieldFinder",
    "extract_group_paths",
    "extract_request_field_paths",
    "extract_response_field_paths",
    "find_fields_in_schema",
    "resolve",
]
