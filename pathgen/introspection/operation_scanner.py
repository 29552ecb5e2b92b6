"""
Operation Scanner - Aggregates field findings over an OpenAPI document.

For every path and supported HTTP method, the scanner runs the
SchemaFieldFinder against each media-type schema of the operation's
responses (all status codes) or of its request body, and records the path
under each found field, overall and per tag group.

All path lists are sorted lexicographically so the output does not depend
on mapping iteration order.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from pathgen.introspection.field_finder import DEFAULT_MAX_DEPTH, SchemaFieldFinder
from pathgen.introspection.ref_resolver import resolve
from pathgen.schema.models import (
    HTTP_METHODS,
    FieldPathResult,
    FindingReporter,
    ScanContext,
    ScanLocation,
)

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


def iter_operations(document: Any) -> Iterator[Tuple[str, str, Dict[str, Any]]]:
    """
    Yield (path, method, operation) for every supported operation

    Missing or malformed `paths`, path items and operations are skipped.
    """
    if not isinstance(document, dict):
        return
    paths = document.get("paths")
    if not isinstance(paths, dict):
        return

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield path, method, operation


def operation_groups(operation: Dict[str, Any], default_group: str = DEFAULT_GROUP) -> List[str]:
    """Return the operation's tags, or the default group when it has none."""
    tags = operation.get("tags")
    if isinstance(tags, list):
        groups = [tag for tag in tags if isinstance(tag, str) and tag]
        if groups:
            return groups
    return [default_group]


class OperationScanner:
    """
    Scans operations for request/response schemas containing target fields

    Usage:
    ```python
    scanner = OperationScanner(spec)
    result = scanner.scan_responses(["email"])
    result.field_paths["email"]           # ["/user/{id}"]
    result.group_field_paths["email"]     # {"users": ["/user/{id}"]}
    ```
    """

    def __init__(
        self,
        document: Dict[str, Any],
        default_group: str = DEFAULT_GROUP,
        max_depth: int = DEFAULT_MAX_DEPTH,
        dereferenced: bool = False,
        reporter: Optional[FindingReporter] = None,
    ):
        """
        Initialize the scanner

        Args:
            document: Parsed OpenAPI document (never modified)
            default_group: Group name for operations without tags
            max_depth: Recursion ceiling handed to the field finder
            dereferenced: True if $ref nodes were already replaced upstream
            reporter: Optional sink for direct field findings
        """
        self.document = document
        self.default_group = default_group
        self.dereferenced = dereferenced
        self.finder = SchemaFieldFinder(
            max_depth=max_depth,
            document=None if dereferenced else document,
            reporter=reporter,
        )

    def scan_responses(self, target_fields: Iterable[str]) -> FieldPathResult:
        """Find paths whose responses contain the target fields."""
        return self._scan(target_fields, ScanLocation.RESPONSE)

    def scan_requests(self, target_fields: Iterable[str]) -> FieldPathResult:
        """Find paths whose request bodies contain the target fields."""
        return self._scan(target_fields, ScanLocation.REQUEST)

    def _scan(self, target_fields: Iterable[str], location: ScanLocation) -> FieldPathResult:
        targets = list(dict.fromkeys(target_fields))
        if not targets:
            return FieldPathResult()

        field_paths: Dict[str, Set[str]] = {name: set() for name in targets}
        group_field_paths: Dict[str, Dict[str, Set[str]]] = {name: {} for name in targets}

        for path, method, operation in iter_operations(self.document):
            groups = operation_groups(operation, self.default_group)
            context = ScanContext(path=path, method=method, location=location)

            for schema in self._operation_schemas(operation, location):
                for found in self.finder.find(schema, targets, context):
                    field_paths[found].add(path)
                    for group in groups:
                        group_field_paths[found].setdefault(group, set()).add(path)

        result = FieldPathResult(
            field_paths={name: sorted(paths) for name, paths in field_paths.items()},
            group_field_paths={
                name: {group: sorted(groups[group]) for group in sorted(groups)}
                for name, groups in group_field_paths.items()
            },
        )

        for name in targets:
            logger.debug(f"{location.value} field '{name}': {len(result.field_paths[name])} paths")
        return result

    def _operation_schemas(self, operation: Dict[str, Any], location: ScanLocation) -> Iterator[Any]:
        """Yield every media-type schema of the scanned operation part."""
        if location == ScanLocation.REQUEST:
            bodies = [operation.get("requestBody")]
        else:
            responses = operation.get("responses")
            bodies = list(responses.values()) if isinstance(responses, dict) else []

        for body in bodies:
            body = self._resolve_object(body)
            if not isinstance(body, dict):
                continue
            content = body.get("content")
            if not isinstance(content, dict):
                continue
            for media_type in content.values():
                if isinstance(media_type, dict) and media_type.get("schema") is not None:
                    yield media_type["schema"]

    def _resolve_object(self, obj: Any) -> Any:
        """Follow a $ref on a request body or response object."""
        if self.dereferenced or not isinstance(obj, dict):
            return obj
        ref = obj.get("$ref")
        if isinstance(ref, str):
            return resolve(self.document, ref)
        return obj


def extract_response_field_paths(
    document: Dict[str, Any],
    target_fields: Iterable[str],
    default_group: str = DEFAULT_GROUP,
    dereferenced: bool = False,
) -> FieldPathResult:
    """Scan responses of every operation for target fields."""
    scanner = OperationScanner(document, default_group=default_group, dereferenced=dereferenced)
    return scanner.scan_responses(target_fields)


def extract_request_field_paths(
    document: Dict[str, Any],
    target_fields: Iterable[str],
    default_group: str = DEFAULT_GROUP,
    dereferenced: bool = False,
) -> FieldPathResult:
    """Scan request bodies of every operation for target fields."""
    scanner = OperationScanner(document, default_group=default_group, dereferenced=dereferenced)
    return scanner.scan_requests(target_fields)
