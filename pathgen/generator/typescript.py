"""
TypeScript Generator - Renders grouped paths and field lookups as TypeScript.

Two output styles:
- grouped: per-path constants, exported `as const` arrays per group, field
  lookup objects and derived types
- simple: plain arrays per group and per field plus `Set` lookups
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pathgen.generator.naming import (
    is_js_identifier,
    path_to_constant_name,
    to_camel_case,
    to_pascal_case,
    to_upper_snake,
    to_valid_identifier,
)
from pathgen.schema.models import FieldPathResult

logger = logging.getLogger(__name__)

SECTION_RULE = "// ============================================"


class OutputStyle(str, Enum):
    """Supported output styles."""

    GROUPED = "grouped"
    SIMPLE = "simple"


def _key(name: str) -> str:
    """Object key, quoted when it is not a plain identifier."""
    return name if is_js_identifier(name) else json.dumps(name)


def _member(obj: str, name: str) -> str:
    """Property access expression for name on obj."""
    return f"{obj}.{name}" if is_js_identifier(name) else f"{obj}[{json.dumps(name)}]"


def _single_quoted(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _unique(name: str, used: Dict[str, int]) -> str:
    """Return name, suffixed when it was already taken."""
    if name not in used:
        used[name] = 1
        return name
    used[name] += 1
    candidate = f"{name}_{used[name]}"
    while candidate in used:
        used[name] += 1
        candidate = f"{name}_{used[name]}"
    used[candidate] = 1
    return candidate


class TypeScriptGenerator:
    """
    Generates TypeScript path constants

    Usage:
    ```python
    generator = TypeScriptGenerator()
    code = generator.generate(group_paths, response_result, request_result, style="grouped")
    ```
    """

    def __init__(self, generated_at: Optional[datetime] = None):
        """
        Initialize TypeScriptGenerator

        Args:
            generated_at: Timestamp written to the header (defaults to now, UTC)
        """
        self.generated_at = generated_at

    def _timestamp(self) -> str:
        moment = self.generated_at or datetime.now(timezone.utc)
        return moment.isoformat()

    def generate(
        self,
        group_paths: Dict[str, List[str]],
        response_fields: Optional[FieldPathResult] = None,
        request_fields: Optional[FieldPathResult] = None,
        style: str = OutputStyle.GROUPED.value,
    ) -> str:
        """Render code in the requested style."""
        response_fields = response_fields or FieldPathResult()
        request_fields = request_fields or FieldPathResult()

        if OutputStyle(style) == OutputStyle.SIMPLE:
            return self.generate_simple(group_paths, response_fields, request_fields)
        return self.generate_grouped(group_paths, response_fields, request_fields)

    # ------------------------------------------------------------------
    # Grouped style
    # ------------------------------------------------------------------

    def generate_grouped(
        self,
        group_paths: Dict[str, List[str]],
        response_fields: FieldPathResult,
        request_fields: FieldPathResult,
    ) -> str:
        """
        Render individual path constants, group arrays, field lookups and types

        A path listed in several groups gets one constant per group; field
        lookups refer to the constant of the last group it appeared in.
        """
        lines: List[str] = [
            "// AUTO-GENERATED FILE. DO NOT EDIT.",
            "",
            f"// Generated on: {self._timestamp()}",
            "",
            "// This file provides reusable path constants organized by categories",
            "",
        ]

        lines += [SECTION_RULE, "// INDIVIDUAL PATH CONSTANTS (Internal Use)", SECTION_RULE, ""]

        used_names: Dict[str, int] = {}
        group_constants: Dict[str, List[str]] = {}
        path_constants: Dict[str, str] = {}

        for group, paths in group_paths.items():
            lines.append(f"// {group[:1].upper() + group[1:]} Paths")
            group_constants[group] = []
            for path in paths:
                constant = _unique(path_to_constant_name(path, group), used_names)
                group_constants[group].append(constant)
                path_constants[path] = constant
                lines.append(f"const {constant} = {json.dumps(path)};")
            lines.append("")

        lines += [SECTION_RULE, "// EXPORTED PATH ARRAYS", SECTION_RULE, ""]
        lines.append("// Individual category path arrays")

        array_names: Dict[str, str] = {}
        for group in group_paths:
            array_name = _unique(to_pascal_case(group) + "Paths", used_names)
            array_names[group] = array_name
            lines.append(f"export const {array_name} = [")
            lines += [f"  {constant}," for constant in group_constants[group]]
            lines += ["] as const;", ""]

        lines.append("// Combined list of all paths")
        lines.append("export const AllPaths = [")
        lines += [f"  ...{array_names[group]}," for group in group_paths]
        lines += ["] as const;", ""]

        if not response_fields.is_empty():
            lines += self._field_lookup(
                response_fields,
                path_constants,
                title="RESPONSE FIELD PATHS",
                object_name="PathsReturningField",
                all_name="AllPathsReturningField",
                description="return specific fields in response",
            )

        if not request_fields.is_empty():
            lines += self._field_lookup(
                request_fields,
                path_constants,
                title="REQUEST FIELD PATHS",
                object_name="PathsExpectingField",
                all_name="AllPathsExpectingField",
                description="expect specific fields in request body",
            )

        lines += [SECTION_RULE, "// EXPORTED TYPES (Derived from Constants)", SECTION_RULE, ""]
        lines.append("// All paths type derived from AllPaths array")
        lines.append("type AllPathsAsType = typeof AllPaths;")
        lines += ["export type AllPaths = AllPathsAsType[number];", ""]

        lines.append("// Individual group path types")
        for group in group_paths:
            array_name = array_names[group]
            lines.append(f"type {array_name}AsType = typeof {array_name};")
            lines.append(f"export type {array_name} = {array_name}AsType[number];")
        lines.append("")

        if not response_fields.is_empty():
            lines += self._field_types("Response", "PathsReturningField", "AllPathsReturningField")
        if not request_fields.is_empty():
            lines += self._field_types("Request", "PathsExpectingField", "AllPathsExpectingField")

        return "\n".join(lines) + "\n"

    def _field_lookup(
        self,
        result: FieldPathResult,
        path_constants: Dict[str, str],
        title: str,
        object_name: str,
        all_name: str,
        description: str,
    ) -> List[str]:
        lines = [SECTION_RULE, f"// {title}", SECTION_RULE, ""]
        group_keys = self._group_keys(result)

        lines.append(f"// Paths that {description} (organized by field and group)")
        lines.append(f"export const {object_name} = {{")
        for field_name, groups in result.group_field_paths.items():
            lines.append(f"  {_key(field_name)}: {{")
            for group, paths in groups.items():
                lines.append(f"    {_key(group_keys[group])}: [")
                for path in paths:
                    lines.append(f"      {path_constants.get(path, json.dumps(path))},")
                lines.append("    ],")
            lines.append("  },")
        lines += ["} as const;", ""]

        lines.append(f"// All paths that {description} (organized by field)")
        lines.append(f"export const {all_name} = {{")
        for field_name in result.field_paths:
            lines.append(f"  {_key(field_name)}: [")
            for group in result.group_field_paths.get(field_name, {}):
                access = _member(_member(object_name, field_name), group_keys[group])
                lines.append(f"    ...{access},")
            lines.append("  ],")
        lines += ["} as const;", ""]
        return lines

    @staticmethod
    def _group_keys(result: FieldPathResult) -> Dict[str, str]:
        """Map each group to a lookup key, suffixed when two groups share an identifier."""
        used: Dict[str, int] = {}
        keys: Dict[str, str] = {}
        for groups in result.group_field_paths.values():
            for group in groups:
                if group not in keys:
                    keys[group] = _unique(to_valid_identifier(group), used)
        return keys

    @staticmethod
    def _field_types(kind: str, object_name: str, all_name: str) -> List[str]:
        return [
            f"// {kind} field types derived from {object_name}",
            f"type {object_name}AsType = typeof {object_name};",
            f"export type {kind}Fields = keyof {object_name}AsType;",
            f"export type {kind}FieldGroups<Field extends {kind}Fields> =",
            f"  keyof {object_name}AsType[Field];",
            f"export type {kind}FieldGroupPaths<",
            f"  Field extends {kind}Fields,",
            f"  Group extends keyof {object_name}AsType[Field],",
            f"> = {object_name}AsType[Field][Group];",
            "",
            f"// {all_name} type",
            f"type {all_name}AsType = typeof {all_name};",
            f"export type {all_name}<Field extends {kind}Fields> = {all_name}AsType[Field][number];",
            "",
        ]

    # ------------------------------------------------------------------
    # Simple style
    # ------------------------------------------------------------------

    def generate_simple(
        self,
        group_paths: Dict[str, List[str]],
        response_fields: FieldPathResult,
        request_fields: FieldPathResult,
    ) -> str:
        """Render plain path arrays and Set lookups."""
        lines: List[str] = [
            "// AUTO-GENERATED FILE. DO NOT EDIT.",
            f"// Generated on: {self._timestamp()}",
            "",
        ]

        used_names: Dict[str, int] = {}
        sets: List[str] = []

        if group_paths:
            lines.append("// Path arrays by group")
            array_names = []
            for group, paths in group_paths.items():
                const_name = _unique(to_upper_snake(group) + "_PATHS", used_names)
                set_name = _unique(to_camel_case(group) + "Paths", used_names)
                array_names.append(const_name)
                sets.append(f"export const {set_name} = new Set({const_name});")
                lines += self._simple_array(const_name, paths)

            lines.append("// All paths combined")
            lines.append("export const ALL_PATHS = [")
            lines += [f"  ...{name}," for name in array_names]
            lines += ["];", ""]
            sets.append("export const allPaths = new Set(ALL_PATHS);")

        for result, suffix, heading in (
            (response_fields, "Response", "// Paths that return specific fields in response"),
            (request_fields, "Request", "// Paths that accept specific fields in request"),
        ):
            if result.is_empty():
                continue
            lines.append(heading)
            for field_name, paths in result.field_paths.items():
                if not paths:
                    continue
                const_name = _unique(f"{to_upper_snake(field_name)}_{suffix.upper()}_PATHS", used_names)
                set_name = _unique(f"{to_camel_case(field_name)}{suffix}Paths", used_names)
                sets.append(f"export const {set_name} = new Set({const_name});")
                lines += self._simple_array(const_name, paths)

        lines.append("// Sets for fast lookup")
        lines += sets

        return "\n".join(lines) + "\n"

    @staticmethod
    def _simple_array(const_name: str, paths: List[str]) -> List[str]:
        lines = [f"export const {const_name} = ["]
        lines += [f"  {_single_quoted(path)}," for path in paths]
        lines += ["];", ""]
        return lines
