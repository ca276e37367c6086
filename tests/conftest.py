"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI commands between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_full_message():
    """A commit message using every part of the grammar."""
    return """feat(api)!: add pagination to list endpoints

List endpoints now return a page of results together with a
cursor for the next page.

Clients that relied on receiving every record must follow the
cursor until it is empty.

Refs: PROJ-123
Co-Authored-By: Jane Doe <jane@example.com>
Closes #42
BREAKING CHANGE: list endpoints return at most 100 records"""


# Messages covering the grammar's shapes; all parse and all are canonical
VALID_MESSAGES = [
    "fix(api): handle null response",
    "feat: add x",
    "docs: x",
    "refactor!: drop python 3.8 support",
    "feat(@acme/web-ui): add dark mode toggle",
    "build(pkg:module): bump dependency pins",
    "perf(parser)!: stream blocks instead of buffering",
    "chore: update deps\n\nCloses #1\nCloses #2",
    "feat: add x\n\nBREAKING CHANGE: api shape changed",
    "fix: correct rounding\n\nRounding used banker's rules.\nNow it rounds half up.",
    "fix: correct rounding\n\nFirst paragraph.\n\nSecond paragraph.\n\nRefs: 12",
    "ci: cache wheels\n\nRefs: PROJ-1\n  continued on a second line\nReviewed-by: Sam",
    "revert: undo the cache change\n\nThis reverts commit 1a2b3c4.",
    "test: cover footers\n\nRefs: ",
    "style: reformat\n\nBREAKING CHANGE: ",
]


@pytest.fixture(params=VALID_MESSAGES)
def valid_message_text(request):
    """Each canonical message text in turn."""
    return request.param


@pytest.fixture
def valid_messages():
    """The whole canonical message corpus, in order."""
    return list(VALID_MESSAGES)
