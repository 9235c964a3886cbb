"""Main CLI application entry point for the RoAI valuation engine.

This module provides the Typer application instance and command registration.
"""

from __future__ import annotations

import typer
from rich.console import Console

from ..utils.logging_config import configure_logging_from_config
from .display.errors import handle_error

app = typer.Typer(
    name="roai",
    help="Return-on-AI valuation engine",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Return-on-AI valuation engine.

    Scores AI initiatives on NPV, IRR, payback and benefit-cost ratio and
    recommends whether to expand, pilot or halt them.
    """
    try:
        from .context import CommandContext

        ctx.obj = CommandContext.create()
        configure_logging_from_config(ctx.obj.config, level="DEBUG" if verbose else None)

        if ctx.invoked_subcommand is None:
            console.print(app.info.help)
            raise typer.Exit(code=0)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, exit_code=2)


from .commands import evaluate  # noqa: E402

evaluate.register_command(app)


if __name__ == "__main__":
    app()
