"""
Schema Field Finder - Discovers which target fields a schema can contain.

Walks a JSON-Schema-like node recursively and reports every target field
name reachable from it:
- Direct and nested properties
- Array items
- allOf / oneOf / anyOf members
- additionalProperties / patternProperties schemas
- Local $ref targets (when the document was not dereferenced)

Open schemas are matched conservatively. A free-form object, an
additionalProperties of true or a discriminator mapping cannot rule any
field out, so every target field is reported for them. This favours recall
over precision on purpose.

Recursion stops past a fixed depth, and a node already on the current
descent path is not entered again, so cyclic schemas always terminate.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from pathgen.introspection.ref_resolver import resolve
from pathgen.schema.models import FieldFinding, FindingReporter, ScanContext

logger = logging.getLogger(__name__)

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")
DEFAULT_MAX_DEPTH = 10


class SchemaFieldFinder:
    """
    Finds target field names in OpenAPI schema objects

    Usage:
    ```python
    finder = SchemaFieldFinder(document=spec)
    finder.find({"properties": {"email": {"type": "string"}}}, ["email", "id"])
    # {"email"}
    ```
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        document: Optional[Dict[str, Any]] = None,
        reporter: Optional[FindingReporter] = None,
    ):
        """
        Initialize the finder

        Args:
            max_depth: Deepest level that is still inspected (root is 0)
            document: Root document used to resolve $ref; None disables resolution
            reporter: Optional sink notified of every direct property match
        """
        self.max_depth = max_depth
        self.document = document
        self.reporter = reporter

    def find(
        self,
        schema: Any,
        target_fields: Iterable[str],
        context: Optional[ScanContext] = None,
    ) -> Set[str]:
        """
        Return the subset of target_fields reachable from schema

        Args:
            schema: Schema node; anything that is not a mapping matches nothing
            target_fields: Field names to look for
            context: Operation being scanned, only used for finding reports

        Returns:
            Set of found field names
        """
        targets = list(dict.fromkeys(target_fields))
        if not targets:
            return set()
        return self._find(schema, targets, 0, context, set())

    def _find(
        self,
        schema: Any,
        targets: List[str],
        depth: int,
        context: Optional[ScanContext],
        active: Set[int],
    ) -> Set[str]:
        if not isinstance(schema, dict) or depth > self.max_depth:
            return set()

        # Re-entering a node already being walked cannot add anything new
        node_id = id(schema)
        if node_id in active:
            return set()

        active.add(node_id)
        try:
            return self._match(schema, targets, depth, context, active)
        finally:
            active.discard(node_id)

    def _match(
        self,
        schema: Dict[str, Any],
        targets: List[str],
        depth: int,
        context: Optional[ScanContext],
        active: Set[int],
    ) -> Set[str]:
        found: Set[str] = set()

        def descend(child: Any) -> None:
            found.update(self._find(child, targets, depth + 1, context, active))

        ref = schema.get("$ref")
        if isinstance(ref, str) and self.document is not None:
            resolved = resolve(self.document, ref)
            if resolved is not None:
                descend(resolved)

        properties = schema.get("properties")
        if isinstance(properties, dict):
            for name in targets:
                if name in properties:
                    found.add(name)
                    self._report(name, depth, context)
            for prop_schema in properties.values():
                descend(prop_schema)

        items = schema.get("items")
        if isinstance(items, list):
            for item_schema in items:
                descend(item_schema)
        else:
            descend(items)

        is_object = _declares_object(schema)

        # Dynamic object without declared properties
        if is_object and schema.get("properties") is None:
            found.update(targets)

        additional = schema.get("additionalProperties")
        if additional is True:
            found.update(targets)
        elif isinstance(additional, dict):
            descend(additional)

        for keyword in COMPOSITION_KEYWORDS:
            members = schema.get(keyword)
            if isinstance(members, list):
                for member in members:
                    descend(member)

        # Pattern names are not matched against the field names
        pattern_properties = schema.get("patternProperties")
        if isinstance(pattern_properties, dict):
            for pattern_schema in pattern_properties.values():
                descend(pattern_schema)

        discriminator = schema.get("discriminator")
        if isinstance(discriminator, dict) and discriminator.get("mapping") is not None:
            found.update(targets)

        # Free-form object fallback
        if is_object and not any(
            key in schema for key in ("properties", "additionalProperties", "patternProperties")
        ):
            found.update(targets)

        return found

    def _report(self, field_name: str, depth: int, context: Optional[ScanContext]) -> None:
        if self.reporter is None or context is None:
            return
        self.reporter(
            FieldFinding(
                path=context.path,
                method=context.method,
                field=field_name,
                location=context.location,
                nested=depth > 0,
            )
        )


def _declares_object(schema: Dict[str, Any]) -> bool:
    """Check for type "object", including OpenAPI 3.1 type lists."""
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        return "object" in schema_type
    return schema_type == "object"


def find_fields_in_schema(
    schema: Any,
    target_fields: Iterable[str],
    document: Optional[Dict[str, Any]] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Set[str]:
    """Convenience wrapper around SchemaFieldFinder.find."""
    return SchemaFieldFinder(max_depth=max_depth, document=document).find(schema, target_fields)
