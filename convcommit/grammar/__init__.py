"""Grammar model for Conventional Commit messages.

This package provides the in-memory representation of a commit message:
- constants: CommitType enum, TYPE_DESCRIPTIONS, BREAKING_TOKEN, grammar regexes
- models: Footer, CommitMessage
"""

# Constants
from convcommit.grammar.constants import (
    BREAKING_TOKEN,
    DEFAULT_TYPES,
    SCOPE_PATTERN,
    TYPE_DESCRIPTIONS,
    CommitType,
    match_footer,
)

# Models
from convcommit.grammar.models import (
    CommitMessage,
    Footer,
)


__all__ = [
    # Constants
    "CommitType",
    "TYPE_DESCRIPTIONS",
    "DEFAULT_TYPES",
    "BREAKING_TOKEN",
    "SCOPE_PATTERN",
    "match_footer",
    # Models
    "CommitMessage",
    "Footer",
]
