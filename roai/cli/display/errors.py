"""Error formatting and display utilities."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ...exceptions import ConfigurationError, InvalidInputError, get_error_code
from ..context import CommandContext


class CLIError(Exception):
    """Base exception for CLI errors with exit code support."""

    def __init__(self, message: str, exit_code: int = 1, suggestions: list[str] | None = None) -> None:
        """Initialize CLI error.

        Args:
            message: Error message
            exit_code: Exit code to use (1 for errors, 2 for config errors)
            suggestions: Optional list of suggested fixes
        """
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.suggestions = suggestions or []


def format_error(error: Exception, include_suggestions: bool = True) -> Panel:
    """Format an error for Rich display."""
    error_text = Text()
    error_text.append("✗ ", style="bold red")
    error_text.append(str(error), style="red")

    if type(error).__name__ != "Exception":
        error_text.append(f"\n\nType: {type(error).__name__}", style="dim")

    code = get_error_code(error)
    if code is not None:
        error_text.append(f"\nCode: {code}", style="dim")

    if isinstance(error, InvalidInputError) and error.violations:
        error_text.append("\n\nViolations:", style="bold red")
        for violation in error.violations:
            error_text.append(f"\n  • {violation}", style="red")

    suggestions: list[str] = []
    if isinstance(error, CLIError) and error.suggestions:
        suggestions = error.suggestions
    elif include_suggestions:
        if isinstance(error, ConfigurationError):
            suggestions = [
                "Verify config/base.yaml syntax",
                "Check ROAI__* environment variable overrides",
                "Run with --verbose for detailed error messages",
            ]
        elif isinstance(error, InvalidInputError):
            suggestions = [
                "Check probabilities are within [0, 1] and risk ratings within 1-5",
                "Check every line item has a label, category, year and non-negative amount",
            ]

    if suggestions:
        suggestion_text = Text("\n\nSuggested fixes:", style="bold yellow")
        for i, suggestion in enumerate(suggestions, 1):
            suggestion_text.append(f"\n  {i}. {suggestion}", style="yellow")
        error_text.append(suggestion_text)

    return Panel(error_text, title="Error", border_style="red")


def handle_error(
    error: Exception,
    context: CommandContext | None = None,
    exit_code: int | None = None,
) -> None:
    """Display an error, then exit.

    Args:
        error: Exception to handle
        context: Optional command context
        exit_code: Override exit code (uses error.exit_code if CLIError)
    """
    console = context.console if context else Console()
    console.print(format_error(error))

    if exit_code is not None:
        code = exit_code
    elif isinstance(error, CLIError):
        code = error.exit_code
    elif isinstance(error, ConfigurationError):
        code = 2
    else:
        code = 1

    raise typer.Exit(code=code)
