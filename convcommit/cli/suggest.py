"""CLI command for suggesting a commit type and scope from changed files."""

import json
from pathlib import Path
from typing import Optional

import typer

from convcommit.classifier import FileChange, classify, load_classifier_config_from_dict
from convcommit.exceptions import ConfigError
from convcommit.validation import EXIT_CONFIG_ERROR
from convcommit.cli.utils import get_effective_config, parse_numstat, read_text


def suggest_command(
    paths: Optional[list[str]] = typer.Argument(
        None,
        help="Changed file paths (line counts are taken as 0)",
    ),
    numstat: Optional[Path] = typer.Option(
        None,
        "--numstat",
        "-n",
        help="Read 'git diff --numstat' output from a file ('-' for stdin)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: nearest .convcommit/config.yaml)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print suggestions as JSON",
    ),
) -> None:
    """Suggest commit types and scopes for a set of changed files."""
    if numstat is not None:
        changes = parse_numstat(read_text(numstat))
    else:
        changes = [FileChange(path=p) for p in paths or []]

    try:
        classifier_config = load_classifier_config_from_dict(get_effective_config(config))
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)

    suggestions = classify(changes, classifier_config)

    if as_json:
        typer.echo(json.dumps([s.model_dump(mode="json") for s in suggestions], indent=2))
        return

    if not suggestions:
        typer.echo("No suggestion for these changes.")
        return

    for suggestion in suggestions:
        label = suggestion.type.value
        if suggestion.scope:
            label += f"({suggestion.scope})"
        typer.echo(f"{label:<30} {suggestion.confidence:.0%}")
