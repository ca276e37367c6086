"""Tests for convcommit.bump module."""

import pytest

from convcommit import parse
from convcommit.bump import BumpLevel, bump, bump_level, combine, next_version
from convcommit.grammar import CommitMessage


class TestBumpLevel:
    """Tests for bump_level function."""

    @pytest.mark.parametrize(
        "header, expected",
        [
            ("feat: add x", BumpLevel.MINOR),
            ("fix: x", BumpLevel.PATCH),
            ("perf: x", BumpLevel.PATCH),
            ("docs: x", BumpLevel.NONE),
            ("chore: x", BumpLevel.NONE),
            ("refactor: x", BumpLevel.NONE),
            ("revert: x", BumpLevel.NONE),
            ("docs!: x", BumpLevel.MAJOR),
            ("fix(api)!: x", BumpLevel.MAJOR),
        ],
    )
    def test_single_commit(self, header, expected):
        """Test the level of each commit shape."""
        assert bump_level(parse(header)) == expected

    def test_breaking_footer(self):
        """Test that a BREAKING CHANGE footer is major."""
        assert bump_level(parse("chore: x\n\nBREAKING CHANGE: config moved")) == BumpLevel.MAJOR

    def test_order(self):
        """Test the total order of levels."""
        assert BumpLevel.NONE < BumpLevel.PATCH < BumpLevel.MINOR < BumpLevel.MAJOR


class TestBump:
    """Tests for bump and combine functions."""

    def test_empty_batch(self):
        """Test that no commits give NONE."""
        assert bump([]) == BumpLevel.NONE
        assert combine([]) == BumpLevel.NONE

    def test_breaking_dominates(self):
        """Test a batch with a breaking change."""
        messages = [parse("feat(api)!: drop v1 routes"), parse("fix: handle null response")]
        assert bump(messages) == BumpLevel.MAJOR

    def test_breaking_footer_batch(self):
        """Test a single commit declaring a breaking change in its footer."""
        assert bump([parse("feat: add x\n\nBREAKING CHANGE: api shape changed")]) == BumpLevel.MAJOR

    def test_feature_batch(self):
        """Test a batch whose highest commit is a feature."""
        messages = [parse("fix: x"), parse("feat: add x"), parse("docs: x")]
        assert bump(messages) == BumpLevel.MINOR

    def test_accepts_generators(self):
        """Test that any iterable works."""
        assert bump(parse(text) for text in ["fix: a", "perf: b"]) == BumpLevel.PATCH

    def test_order_does_not_matter(self, valid_messages):
        """Test commutativity over the message corpus."""
        messages = [parse(text) for text in valid_messages]
        assert bump(messages) == bump(list(reversed(messages)))

    def test_chunks_combine(self, valid_messages):
        """Test that splitting a batch and combining the parts gives the same result."""
        messages = [parse(text) for text in valid_messages]
        whole = bump(messages)
        for split in range(len(messages) + 1):
            assert combine([bump(messages[:split]), bump(messages[split:])]) == whole

    def test_adding_commits_never_lowers(self, valid_messages):
        """Test monotonicity as commits are appended."""
        messages = [parse(text) for text in valid_messages]
        levels = [bump(messages[:n]) for n in range(len(messages) + 1)]
        assert levels == sorted(levels)

    def test_built_messages(self):
        """Test bump over models built without parsing."""
        messages = [CommitMessage.build("fix", "x"), CommitMessage.build("feat", "y", breaking=True)]
        assert bump(messages) == BumpLevel.MAJOR


class TestNextVersion:
    """Tests for next_version function."""

    @pytest.mark.parametrize(
        "level, expected",
        [
            (BumpLevel.MAJOR, "2.0.0"),
            (BumpLevel.MINOR, "1.5.0"),
            (BumpLevel.PATCH, "1.4.3"),
            (BumpLevel.NONE, "1.4.2"),
        ],
    )
    def test_levels(self, level, expected):
        """Test each bump level."""
        assert next_version("1.4.2", level) == expected

    def test_keeps_v_prefix(self):
        """Test that a v prefix is preserved."""
        assert next_version("v0.9.9", BumpLevel.MINOR) == "v0.10.0"

    def test_drops_prerelease(self):
        """Test that pre-release and build metadata are dropped."""
        assert next_version("1.0.0-rc.1+build.5", BumpLevel.PATCH) == "1.0.1"

    @pytest.mark.parametrize("current", ["", "1.2", "one.two.three", "1.2.3.4"])
    def test_invalid_version(self, current):
        """Test that non-semver input is rejected."""
        with pytest.raises(ValueError):
            next_version(current, BumpLevel.PATCH)
