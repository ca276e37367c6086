"""Semantic version bump aggregation.

The bump level of a single commit:
- MAJOR if it is a breaking change (``!`` marker or BREAKING CHANGE footer)
- MINOR for feat
- PATCH for fix and perf
- NONE otherwise

Levels form a total order NONE < PATCH < MINOR < MAJOR and a batch takes
the maximum. The maximum is associative and commutative, so a long commit
range can be split into chunks, each chunk reduced with bump(), and the
partial results merged with combine() in any order.
"""

import re
from enum import IntEnum
from typing import Iterable

from convcommit.grammar import CommitMessage, CommitType

MINOR_TYPES = frozenset({CommitType.FEAT})
PATCH_TYPES = frozenset({CommitType.FIX, CommitType.PERF})

_VERSION_PATTERN = re.compile(
    r"(?P<prefix>v?)(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"
)


class BumpLevel(IntEnum):
    """Semantic version bump levels, lowest first."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


def bump_level(message: CommitMessage) -> BumpLevel:
    """Get the bump level implied by a single commit."""
    if message.breaking:
        return BumpLevel.MAJOR
    if message.type in MINOR_TYPES:
        return BumpLevel.MINOR
    if message.type in PATCH_TYPES:
        return BumpLevel.PATCH
    return BumpLevel.NONE


def combine(levels: Iterable[BumpLevel]) -> BumpLevel:
    """Join bump levels (their maximum). An empty input gives NONE."""
    return max(levels, default=BumpLevel.NONE)


def bump(messages: Iterable[CommitMessage]) -> BumpLevel:
    """Get the bump level for a batch of commits.

    Args:
        messages: Parsed commit messages, in any order.

    Returns:
        The highest bump level among the messages, NONE when empty.
    """
    return combine(bump_level(m) for m in messages)


def next_version(current: str, level: BumpLevel) -> str:
    """Apply a bump level to a ``MAJOR.MINOR.PATCH`` version.

    A leading ``v`` is kept; pre-release and build suffixes are dropped.

    Args:
        current: The current version (e.g., "1.4.2" or "v1.4.2").
        level: The bump to apply.

    Returns:
        The next version string.

    Raises:
        ValueError: If current is not a semantic version.
    """
    match = _VERSION_PATTERN.fullmatch(current.strip())
    if match is None:
        raise ValueError(f"Not a semantic version: {current!r}")

    prefix = match.group("prefix")
    major, minor, patch = (int(match.group(k)) for k in ("major", "minor", "patch"))

    if level == BumpLevel.MAJOR:
        major, minor, patch = major + 1, 0, 0
    elif level == BumpLevel.MINOR:
        minor, patch = minor + 1, 0
    elif level == BumpLevel.PATCH:
        patch += 1

    return f"{prefix}{major}.{minor}.{patch}"
