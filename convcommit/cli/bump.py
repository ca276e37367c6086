"""CLI command for computing the version bump of a batch of commits."""

from pathlib import Path
from typing import Optional

import structlog
import typer

from convcommit.bump import bump, next_version
from convcommit.exceptions import ParseError
from convcommit.parser import parse
from convcommit.cli.utils import read_text

logger = structlog.get_logger(__name__)


def bump_command(
    files: Optional[list[Path]] = typer.Argument(
        None,
        help="Commit message files, one message each; reads NUL-separated messages from stdin when omitted",
    ),
    current: Optional[str] = typer.Option(
        None,
        "--current",
        help="Current version; also print the next version",
    ),
) -> None:
    """Compute the semantic version bump implied by a set of commit messages.

    Feed it a commit range with: git log -z --format=%B v1.2.0..HEAD
    """
    if files:
        raw_messages = [read_text(f) for f in files]
    else:
        raw_messages = [m for m in read_text(None).split("\0") if m.strip()]

    messages = []
    for raw in raw_messages:
        try:
            messages.append(parse(raw))
        except ParseError as e:
            header = raw.strip().splitlines()[0] if raw.strip() else ""
            logger.warning("Skipping non-conventional commit", header=header, error=str(e))

    level = bump(messages)
    typer.echo(level.name.lower())

    if current is not None:
        try:
            typer.echo(next_version(current, level))
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
