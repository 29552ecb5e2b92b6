"""Command line interface for the path generator."""
import logging
from pathlib import Path
from typing import Optional

import click
from colorama import Fore, Style, init

from pathgen import __version__
from pathgen.cli.interactive import InteractivePrompt
from pathgen.cli.paths import GenerationArgs, build_args, json_array_option
from pathgen.config import AppConfig
from pathgen.generator.typescript import OutputStyle, TypeScriptGenerator
from pathgen.introspection.operation_scanner import OperationScanner
from pathgen.introspection.path_grouper import extract_group_paths
from pathgen.loader.spec_loader import SpecLoadError, load_openapi
from pathgen.schema.models import FieldFinding, FieldPathResult

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Configure root logging once for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def log_finding(finding: FieldFinding) -> None:
    """Write a field finding to the debug log."""
    where = "nested in" if finding.nested else "in"
    logger.debug(
        f"{finding.method.upper()} {finding.path}: '{finding.field}' found {where} {finding.location.value} schema"
    )


def generate(args: GenerationArgs, config: AppConfig, dereference: bool = True, verbose: bool = False) -> dict:
    """
    Run one generation: load, group, scan, render and write.

    Returns:
        dict: Group paths and field results that were rendered
    """
    click.echo(f"{Fore.BLUE}🔄 Reading OpenAPI specification from: {Fore.CYAN}{args.input_file}")
    spec = load_openapi(args.input_file, dereference=dereference, timeout=config.http_timeout)
    click.echo(f"{Fore.GREEN}✅ Successfully loaded OpenAPI specification ({spec.path_count} paths)")

    group_paths = extract_group_paths(spec.document, default_group=config.default_group)

    scanner = OperationScanner(
        spec.document,
        default_group=config.default_group,
        max_depth=config.max_depth,
        dereferenced=spec.dereferenced,
        reporter=log_finding if verbose else None,
    )

    response_result = FieldPathResult()
    if args.response_fields:
        click.echo(f"{Fore.YELLOW}🔍 Analyzing response fields: {Fore.CYAN}{', '.join(args.response_fields)}")
        response_result = scanner.scan_responses(args.response_fields)

    request_result = FieldPathResult()
    if args.request_fields:
        click.echo(f"{Fore.YELLOW}🔍 Analyzing request fields: {Fore.CYAN}{', '.join(args.request_fields)}")
        request_result = scanner.scan_requests(args.request_fields)

    click.echo(f"{Fore.BLUE}⚒️  Generating {args.style} TypeScript code...")
    code = TypeScriptGenerator().generate(group_paths, response_result, request_result, style=args.style)

    output_file = Path(args.output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(code, encoding="utf-8")

    click.echo(f"{Fore.GREEN}✅ Successfully generated constants in: {Fore.CYAN}{output_file}")
    click.echo(f"{Fore.MAGENTA}📦 Generated constants for {Style.BRIGHT}{len(group_paths)}{Style.NORMAL} categories")

    click.echo(f"{Fore.BLUE}📊 Processing Statistics:")
    for group, paths in group_paths.items():
        click.echo(f'  {Fore.CYAN}"{group}"{Style.RESET_ALL} → {Fore.YELLOW}{len(paths)}{Style.RESET_ALL} paths')

    if args.response_fields:
        click.echo(f"{Fore.GREEN}🎯 Generated response field constants for: {Fore.CYAN}{', '.join(args.response_fields)}")
    if args.request_fields:
        click.echo(f"{Fore.GREEN}📝 Generated request field constants for: {Fore.CYAN}{', '.join(args.request_fields)}")

    return {
        "group_paths": group_paths,
        "response": response_result,
        "request": request_result,
    }


EPILOG = """\b
Examples:
  pathgen                                    # Interactive mode (default)
  pathgen -i my-api.yaml                     # Output: ./gen/my-api.path.ts
  pathgen -i my-api.yaml -o custom.ts        # Output: ./gen/custom.ts
  pathgen -i my-api --style simple           # Output: ./gen/simple-my-api.path.ts
  pathgen -i my-api.yaml --response-fields '["email", "name"]'

\b
File Path Rules:
  Input files without a directory  -> ./spec/{filename}
  Output files without a directory -> ./gen/{filename}
  Paths containing / or \\ and URLs are used as-is
"""


@click.command(epilog=EPILOG)
@click.version_option(version=__version__)
@click.option("-i", "--input", "input_name", default=None, help="Input OpenAPI file or URL")
@click.option("-o", "--output", "output_name", default=None, help="Output TypeScript file (default: from input name)")
@click.option(
    "-rf",
    "--response-fields",
    callback=json_array_option,
    help="Response fields to analyze (JSON array)",
)
@click.option(
    "-reqf",
    "--request-fields",
    callback=json_array_option,
    help="Request fields to analyze (JSON array)",
)
@click.option(
    "--style",
    type=click.Choice([style.value for style in OutputStyle]),
    default=OutputStyle.GROUPED.value,
    show_default=True,
    help="Output style",
)
@click.option("--dereference/--no-dereference", default=True, help="Resolve $ref nodes before scanning")
@click.option("--interactive", is_flag=True, help="Run in interactive mode")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    input_name: Optional[str],
    output_name: Optional[str],
    response_fields,
    request_fields,
    style: str,
    dereference: bool,
    interactive: bool,
    verbose: bool,
):
    """Generate TypeScript path constants from OpenAPI specifications."""
    configure_logging(verbose)
    try:
        config = AppConfig.from_env()
    except ValueError as e:
        click.echo(f"{Fore.RED}❌ Invalid configuration: {e}", err=True)
        raise SystemExit(1)

    has_relevant_args = bool(input_name or output_name) or response_fields is not None or request_fields is not None
    if interactive or not has_relevant_args:
        args = InteractivePrompt(config, style=style).run()
    else:
        args = build_args(
            input_name or config.default_input,
            output_name,
            spec_dir=config.spec_dir,
            gen_dir=config.gen_dir,
            response_fields=response_fields,
            request_fields=request_fields,
            style=style,
        )

    try:
        generate(args, config, dereference=dereference, verbose=verbose)
    except (SpecLoadError, OSError) as e:
        click.echo(f"{Fore.RED}❌ Error generating paths: {e}", err=True)
        raise SystemExit(1)


def main():
    """Console script entry point."""
    init(autoreset=True)
    cli()
