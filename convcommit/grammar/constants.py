"""Constants for the convcommit grammar.

Contains:
- CommitType: The closed set of Conventional Commit types
- TYPE_DESCRIPTIONS: One-line descriptions for each type (for help/display)
- BREAKING_TOKEN: The footer token that marks a breaking change
- SCOPE_PATTERN / FOOTER_PATTERN: Regexes shared by the parser and the model
"""

import re
from enum import Enum


class CommitType(str, Enum):
    """Available Conventional Commit types."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"


# Ordered as they are usually presented to a user picking a type
TYPE_DESCRIPTIONS = {
    CommitType.FEAT: "New feature",
    CommitType.FIX: "Bug fix",
    CommitType.DOCS: "Documentation",
    CommitType.STYLE: "Code formatting",
    CommitType.REFACTOR: "Code refactor",
    CommitType.PERF: "Performance",
    CommitType.TEST: "Tests",
    CommitType.BUILD: "Build system",
    CommitType.CI: "CI configuration",
    CommitType.CHORE: "Other changes",
    CommitType.REVERT: "Revert commit",
}

DEFAULT_TYPES = [t.value for t in CommitType]

BREAKING_TOKEN = "BREAKING CHANGE"

# api, @scope/pkg, pkg:module
SCOPE_PATTERN = re.compile(r"@?[A-Za-z0-9_-]+(?:[/:][A-Za-z0-9_-]+)*")

FOOTER_TOKEN_PATTERN = re.compile(r"BREAKING CHANGE|[A-Za-z-]+")

# "Token: value", "BREAKING CHANGE: value" or the git trailer form "Token #value"
FOOTER_PATTERN = re.compile(
    r"(?P<token>BREAKING CHANGE|[A-Za-z-]+)"
    r"(?P<separator>: | (?=#))"
    r"(?P<value>.*)"
)

FOOTER_SEPARATORS = (": ", " ")


def match_footer(line: str) -> tuple[str, str, str] | None:
    """Match a line against the footer grammar.

    A bare ``BREAKING CHANGE:`` (editors strip the trailing space) is read
    as a breaking-change footer with an empty value.

    Args:
        line: A single line of text.

    Returns:
        A (token, separator, value) tuple, or None if the line is not a footer.
    """
    if line == f"{BREAKING_TOKEN}:":
        return BREAKING_TOKEN, ": ", ""
    match = FOOTER_PATTERN.fullmatch(line)
    if match is None:
        return None
    return match.group("token"), match.group("separator"), match.group("value")
