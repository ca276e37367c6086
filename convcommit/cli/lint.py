"""CLI commands for checking and formatting a single commit message."""

from pathlib import Path
from typing import Optional

import typer

from convcommit.exceptions import ConfigError, ParseError
from convcommit.parser import parse
from convcommit.serializer import serialize
from convcommit.validation import (
    EXIT_CONFIG_ERROR,
    EXIT_OK,
    EXIT_PARSE_ERROR,
    Severity,
    exit_code_for,
    load_rule_config_from_dict,
    validate,
)
from convcommit.cli.utils import (
    format_parse_error,
    format_violation,
    get_effective_config,
    read_text,
)


def lint_command(
    file: Optional[Path] = typer.Argument(
        None,
        help="Commit message file (e.g. .git/COMMIT_EDITMSG); reads stdin when omitted or '-'",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest .convcommit/config.yaml)",
    ),
    strip_comments: bool = typer.Option(
        False,
        "--strip-comments",
        help="Ignore lines starting with '#', as git does for editor messages",
    ),
    warn_only: bool = typer.Option(
        False,
        "--warn-only",
        help="Report error-severity violations without failing",
    ),
) -> None:
    """Check a commit message against the grammar and the style rules.

    Exit codes: 0 = no errors, 1 = error-severity violations, 2 = parse failure,
    3 = invalid config file.
    """
    raw = read_text(file)

    try:
        rule_config = load_rule_config_from_dict(get_effective_config(config))
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    try:
        message = parse(raw, strip_comments=strip_comments)
    except ParseError as e:
        typer.echo(f"Parse error: {format_parse_error(e)}", err=True)
        raise typer.Exit(EXIT_PARSE_ERROR)

    violations = validate(message, rule_config)
    for violation in violations:
        typer.echo(format_violation(violation), err=True)

    errors = sum(1 for v in violations if v.severity == Severity.ERROR)
    warnings = len(violations) - errors
    if violations:
        typer.echo(f"{errors} error(s), {warnings} warning(s)", err=True)
    else:
        typer.echo("✓ Commit message is valid", err=True)

    exit_code = exit_code_for(violations)
    if exit_code != EXIT_OK and not warn_only:
        raise typer.Exit(exit_code)


def format_command(
    file: Optional[Path] = typer.Argument(
        None,
        help="Commit message file; reads stdin when omitted or '-'",
    ),
    strip_comments: bool = typer.Option(
        False,
        "--strip-comments",
        help="Ignore lines starting with '#'",
    ),
) -> None:
    """Print a commit message in canonical form."""
    raw = read_text(file)

    try:
        message = parse(raw, strip_comments=strip_comments)
    except ParseError as e:
        typer.echo(f"Parse error: {format_parse_error(e)}", err=True)
        raise typer.Exit(EXIT_PARSE_ERROR)

    typer.echo(serialize(message))
