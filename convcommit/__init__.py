"""Conventional Commit message engine.

Parse, validate, serialize and classify commit messages, and aggregate a
semantic version bump over a batch of them.
"""

from importlib.metadata import version, PackageNotFoundError

from convcommit.bump import BumpLevel, bump, bump_level
from convcommit.classifier import FileChange, Suggestion, classify
from convcommit.exceptions import CommitGrammarError, ConfigError, ParseError
from convcommit.grammar import CommitMessage, CommitType, Footer
from convcommit.parser import parse
from convcommit.serializer import serialize
from convcommit.validation import RuleConfig, Severity, Violation, validate

try:
    __version__ = version("convcommit")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"


__all__ = [
    # Operations
    "parse",
    "serialize",
    "validate",
    "classify",
    "bump",
    "bump_level",
    # Models
    "CommitMessage",
    "CommitType",
    "Footer",
    "Violation",
    "Severity",
    "RuleConfig",
    "FileChange",
    "Suggestion",
    "BumpLevel",
    # Errors
    "CommitGrammarError",
    "ParseError",
    "ConfigError",
]
