"""CLI command for initializing convcommit configuration."""

from pathlib import Path

import typer

from convcommit.exceptions import ConfigError
from convcommit.user_config import get_config_file, write_default_config


def init_config(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write the default configuration to .convcommit/config.yaml."""
    root = Path.cwd()
    config_file = get_config_file(root)

    if config_file.exists() and not force:
        typer.echo(f"Configuration already exists at {config_file}.", err=True)
        typer.echo("Use --force to overwrite it.", err=True)
        raise typer.Exit(1)

    try:
        written = write_default_config(root)
    except ConfigError as e:
        typer.echo(f"Error saving configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Configuration saved to {written}")
