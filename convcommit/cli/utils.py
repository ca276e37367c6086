"""Shared utility functions for CLI commands."""

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
import typer

from convcommit.classifier import FileChange
from convcommit.exceptions import ConfigError, ParseError
from convcommit.user_config import find_config_file, load_config
from convcommit.validation import EXIT_CONFIG_ERROR, Violation


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Looked up per call so a swapped sys.stderr (pagers, test runners) is honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to stderr so it never mixes with command output.

    Args:
        verbose: Log debug messages too; otherwise warnings and above only.
    """
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def read_text(file: Optional[Path]) -> str:
    """Read a file, or stdin when file is None or '-'.

    Args:
        file: Path to read.

    Returns:
        The text content.
    """
    if file is None or str(file) == "-":
        return sys.stdin.read()
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {file}: {e}", err=True)
        raise typer.Exit(2)


def get_effective_config(config_path: Optional[Path]) -> dict:
    """Load the config file given on the command line, or the nearest one.

    Args:
        config_path: Explicit config file, if any.

    Returns:
        Configuration dictionary (empty when no file is found).
    """
    if config_path is None:
        config_path = find_config_file(Path.cwd())
        if config_path is None:
            return {}

    try:
        return load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(EXIT_CONFIG_ERROR)


def format_parse_error(error: ParseError) -> str:
    """Format a parse error as ``line:column: expected X, found Y``."""
    return f"{error.line}:{error.column}: expected {error.expected}, found {error.found!r}"


def format_violation(violation: Violation) -> str:
    """Format a violation for terminal output."""
    return f"{violation.severity.value}: [{violation.rule_id}] {violation.message} ({violation.location})"


def parse_numstat(text: str) -> list[FileChange]:
    """Parse ``git diff --numstat`` output into FileChange entries.

    Binary files report '-' for both counts; they count as 0. Renames
    (``old => new``) use the new path.

    Args:
        text: numstat output, one ``added<TAB>removed<TAB>path`` per line.

    Returns:
        List of FileChange objects.
    """
    changes = []
    for line in text.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        added, removed, path = parts[0], parts[1], "\t".join(parts[2:])
        if " => " in path:
            path = _resolve_rename(path)
        changes.append(
            FileChange(
                path=path,
                lines_added=int(added) if added.isdigit() else 0,
                lines_removed=int(removed) if removed.isdigit() else 0,
            )
        )
    return changes


def _resolve_rename(path: str) -> str:
    """Resolve ``src/{old => new}/file.py`` or ``old.py => new.py`` to the new path."""
    if "{" in path and "}" in path:
        head, _, rest = path.partition("{")
        inner, _, tail = rest.partition("}")
        new = inner.split(" => ", 1)[1]
        return (head + new + tail).replace("//", "/")
    return path.split(" => ", 1)[1]
