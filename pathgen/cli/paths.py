"""Input/output path rules and command line argument parsing."""
import json
import os
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import List, Optional

import click

from pathgen.loader.spec_loader import is_url

SIMPLE_STYLE = "simple"


@dataclass
class GenerationArgs:
    """Resolved arguments for one generation run."""

    input_file: str
    output_file: str
    response_fields: List[str] = field(default_factory=list)
    request_fields: List[str] = field(default_factory=list)
    style: str = "grouped"
    interactive: bool = False


def _has_directory(value: str) -> bool:
    return "/" in value or "\\" in value


def normalize_input_name(input_name: str, style: str = "grouped") -> str:
    """Simple style accepts input names without the .yaml extension."""
    if style == SIMPLE_STYLE and not is_url(input_name) and not PurePath(input_name).suffix:
        return f"{input_name}.yaml"
    return input_name


def resolve_input_path(input_path: str, spec_dir: str) -> str:
    """Bare file names are looked up in spec_dir; paths and URLs are kept."""
    if is_url(input_path) or _has_directory(input_path):
        return input_path
    return os.path.join(spec_dir, input_path)


def resolve_output_path(output_path: str, gen_dir: str) -> str:
    """Bare file names are written to gen_dir; paths are kept."""
    if _has_directory(output_path):
        return output_path
    return os.path.join(gen_dir, output_path)


def generate_output_file_name(input_path: str, style: str = "grouped") -> str:
    """Derive "<name>.path.ts" (or "simple-<name>.path.ts") from the input name."""
    name = input_path.rstrip("/").replace("\\", "/").split("/")[-1]
    stem = name.rsplit(".", 1)[0] if "." in name else name
    prefix = "simple-" if style == SIMPLE_STYLE else ""
    return f"{prefix}{stem}.path.ts"


def split_field_list(value: str) -> List[str]:
    """Split a comma-separated field list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_json_array(value: Optional[str]) -> Optional[List[str]]:
    """
    Parse a JSON array of field names

    Raises:
        click.BadParameter: If value is not a JSON array of strings
    """
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = None

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise click.BadParameter('Invalid JSON array format. Expected format: ["field1", "field2"]')
    return parsed


def json_array_option(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[List[str]]:
    """click callback for JSON array options."""
    return parse_json_array(value)


def build_args(
    input_name: str,
    output_name: Optional[str],
    spec_dir: str,
    gen_dir: str,
    response_fields: Optional[List[str]] = None,
    request_fields: Optional[List[str]] = None,
    style: str = "grouped",
    interactive: bool = False,
) -> GenerationArgs:
    """Apply the path rules and build GenerationArgs."""
    input_name = normalize_input_name(input_name, style)
    output_name = output_name or generate_output_file_name(input_name, style)

    return GenerationArgs(
        input_file=resolve_input_path(input_name, spec_dir),
        output_file=resolve_output_path(output_name, gen_dir),
        response_fields=list(response_fields or []),
        request_fields=list(request_fields or []),
        style=style,
        interactive=interactive,
    )


def equivalent_command(
    input_name: str,
    output_name: Optional[str],
    response_fields: List[str],
    request_fields: List[str],
    style: str = "grouped",
) -> str:
    """Command line that reproduces an interactive session."""
    command = f"pathgen -i {input_name}"
    if output_name:
        command += f" -o {output_name}"
    if style != "grouped":
        command += f" --style {style}"
    if response_fields:
        command += f" --response-fields '{json.dumps(response_fields)}'"
    if request_fields:
        command += f" --request-fields '{json.dumps(request_fields)}'"
    return command
