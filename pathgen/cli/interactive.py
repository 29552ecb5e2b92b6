"""Interactive prompts for path generation settings."""
from typing import Any, List, Optional

import click
import questionary
from colorama import Fore, Style

from pathgen.cli.paths import (
    GenerationArgs,
    build_args,
    equivalent_command,
    generate_output_file_name,
    normalize_input_name,
    split_field_list,
)
from pathgen.config import AppConfig


def _not_empty(label: str):
    def validate(value: str) -> Any:
        return bool(value.strip()) or f"{label} cannot be empty"
    return validate


class InteractivePrompt:
    """Asks for generation settings with questionary."""

    def __init__(self, config: AppConfig, style: str = "grouped"):
        """Initialize prompt."""
        self.config = config
        self.style = style

    def print_header(self, title: str):
        """Print a section header."""
        click.echo(f"\n{Fore.BLUE}{Style.BRIGHT}🎛️  {title}{Style.RESET_ALL}\n")
        click.echo(f"{Fore.WHITE}{Style.DIM}Configure your OpenAPI path generation settings:{Style.RESET_ALL}\n")

    @staticmethod
    def _ask(question: Any) -> Any:
        """Run a question; Ctrl-C aborts the command."""
        answer = question.ask()
        if answer is None:
            raise click.Abort()
        return answer

    def _ask_fields(self, message: str) -> List[str]:
        return split_field_list(self._ask(questionary.text(message, default="")))

    def run(self) -> GenerationArgs:
        """
        Prompt for input, output and field lists.

        Returns:
            GenerationArgs: Resolved arguments, flagged as interactive
        """
        self.print_header("Interactive Mode")

        input_name = self._ask(
            questionary.text(
                "OpenAPI input file:",
                default=self.config.default_input,
                validate=_not_empty("Input file"),
            )
        ).strip()

        suggested = generate_output_file_name(normalize_input_name(input_name, self.style), self.style)
        output_name: Optional[str] = self._ask(
            questionary.text(f"TypeScript output file (leave empty for {suggested}):", default="")
        ).strip() or None

        response_fields = self._ask_fields("Response fields to analyze (comma-separated, leave empty to skip):")
        request_fields = self._ask_fields("Request fields to analyze (comma-separated, leave empty to skip):")

        click.echo(f"\n{Fore.BLUE}📋 Equivalent command for reuse:")
        click.echo(
            f"{Fore.CYAN}"
            + equivalent_command(input_name, output_name, response_fields, request_fields, self.style)
        )
        click.echo("")

        return build_args(
            input_name,
            output_name,
            spec_dir=self.config.spec_dir,
            gen_dir=self.config.gen_dir,
            response_fields=response_fields,
            request_fields=request_fields,
            style=self.style,
            interactive=True,
        )
