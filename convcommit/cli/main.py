"""Root CLI callback and informational commands."""

import typer

from convcommit import __version__
from convcommit.grammar import TYPE_DESCRIPTIONS
from convcommit.cli.utils import configure_logging


def main_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging on stderr",
    ),
    show_version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
    ),
) -> None:
    """Parse, lint and classify Conventional Commit messages."""
    configure_logging(verbose)

    if show_version:
        typer.echo(f"convcommit {__version__}")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def types_command() -> None:
    """List the Conventional Commit types."""
    typer.echo("Commit types:")
    typer.echo()
    for commit_type, description in TYPE_DESCRIPTIONS.items():
        typer.echo(f"  {commit_type.value:<10} - {description}")
