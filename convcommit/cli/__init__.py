"""CLI entry point for convcommit.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from convcommit.cli.bump import bump_command
from convcommit.cli.init import init_config
from convcommit.cli.lint import format_command, lint_command
from convcommit.cli.main import main_command, types_command
from convcommit.cli.suggest import suggest_command

# Main application
app = typer.Typer(
    name="convcommit",
    help="convcommit: Conventional Commit message engine",
    add_completion=False,
)

# Add individual commands
app.command("lint")(lint_command)
app.command("format")(format_command)
app.command("suggest")(suggest_command)
app.command("bump")(bump_command)
app.command("types")(types_command)
app.command("init")(init_config)

# Root callback for --verbose and --version
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "lint_command",
    "format_command",
    "suggest_command",
    "bump_command",
    "types_command",
    "init_config",
    "main_command",
]
