"""Tests for convcommit.cli module."""

import json

import pytest
from typer.testing import CliRunner

from convcommit import __version__
from convcommit.exceptions import ConfigError
from convcommit.cli import app
from convcommit.cli.utils import parse_numstat
from convcommit.user_config import get_config_file, load_config, save_config


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(temp_dir, monkeypatch):
    """Run every command in an empty directory so no config file is picked up."""
    monkeypatch.chdir(temp_dir)
    return temp_dir


class TestMainCommand:
    """Tests for the root command."""

    def test_version(self):
        """Test --version output."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"convcommit {__version__}" in result.output

    def test_help_without_command(self):
        """Test that running without a command shows help."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "lint" in result.output

    def test_types(self):
        """Test listing commit types."""
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert "feat" in result.output
        assert "New feature" in result.output
        assert "revert" in result.output


class TestLintCommand:
    """Tests for convcommit lint command."""

    def test_valid_message_file(self, temp_dir):
        """Test linting a valid message file."""
        message_file = temp_dir / "COMMIT_EDITMSG"
        message_file.write_text("fix(api): handle null response\n")

        result = runner.invoke(app, ["lint", str(message_file)])

        assert result.exit_code == 0
        assert "valid" in result.output

    def test_reads_stdin(self):
        """Test linting a message from stdin."""
        result = runner.invoke(app, ["lint"], input="feat: add x\n")
        assert result.exit_code == 0

    def test_reads_stdin_with_dash(self):
        """Test '-' as the stdin marker."""
        result = runner.invoke(app, ["lint", "-"], input="feat: add x\n")
        assert result.exit_code == 0

    def test_error_violations_exit_1(self):
        """Test that error-severity violations fail."""
        result = runner.invoke(app, ["lint"], input="fix: Handle null.\n")

        assert result.exit_code == 1
        assert "[subject-case]" in result.output
        assert "[subject-no-period]" in result.output
        assert "2 error(s), 0 warning(s)" in result.output

    def test_long_header_exit_1(self):
        """Test the header length limit from the command line."""
        header = "feat: add a very long description that exceeds the seventy two character subject limit for sure"
        result = runner.invoke(app, ["lint"], input=header)
        assert result.exit_code == 1
        assert "subject-max-length" in result.output

    def test_warnings_do_not_fail(self):
        """Test that warnings are reported with exit code 0."""
        long_line = " ".join(["word"] * 20)
        result = runner.invoke(app, ["lint"], input=f"fix: x\n\n{long_line}\n")

        assert result.exit_code == 0
        assert "warning: [body-max-line-length]" in result.output

    def test_warn_only(self):
        """Test --warn-only keeps exit code 0."""
        result = runner.invoke(app, ["lint", "--warn-only"], input="fix: Handle null\n")
        assert result.exit_code == 0
        assert "subject-case" in result.output

    def test_parse_error_exit_2(self):
        """Test that non-conventional messages exit with 2."""
        result = runner.invoke(app, ["lint"], input="Added new feature\n")

        assert result.exit_code == 2
        assert "Parse error: 1:0:" in result.output

    def test_strip_comments(self):
        """Test --strip-comments for editor messages."""
        raw = "# Please enter the commit message\nfix: x\n\n# On branch main\n"
        assert runner.invoke(app, ["lint"], input=raw).exit_code == 2
        assert runner.invoke(app, ["lint", "--strip-comments"], input=raw).exit_code == 0

    def test_explicit_config(self, temp_dir):
        """Test --config disabling a rule."""
        config_file = temp_dir / "lint.yaml"
        save_config(config_file, {"rules": {"subject-case": False}})

        result = runner.invoke(app, ["lint", "--config", str(config_file)], input="fix: Handle null\n")

        assert result.exit_code == 0

    def test_nearest_config_used(self, temp_dir):
        """Test that the repository config file is found automatically."""
        save_config(get_config_file(temp_dir), {"rules": {"subject-case": "warning"}})

        result = runner.invoke(app, ["lint"], input="fix: Handle null\n")

        assert result.exit_code == 0
        assert "warning: [subject-case]" in result.output

    def test_malformed_config_exit_3(self, temp_dir):
        """Test that a malformed config file has its own exit code."""
        config_file = temp_dir / "lint.yaml"
        save_config(config_file, {"rules": {"subject-max-length": {"max_length": "long"}}})

        result = runner.invoke(app, ["lint", "-c", str(config_file)], input="fix: x\n")

        assert result.exit_code == 3
        assert "Config error" in result.output

    def test_missing_message_file(self, temp_dir):
        """Test a message file that does not exist."""
        result = runner.invoke(app, ["lint", str(temp_dir / "missing")])
        assert result.exit_code == 2


class TestFormatCommand:
    """Tests for convcommit format command."""

    def test_prints_canonical_form(self):
        """Test normalizing line endings and spacing."""
        result = runner.invoke(app, ["format"], input="fix: x\r\n\r\n\r\nbody\r\n\r\nRefs: 1\r\n")

        assert result.exit_code == 0
        assert result.output == "fix: x\n\nbody\n\nRefs: 1\n"

    def test_moves_breaking_footer_last(self):
        """Test canonical footer order."""
        result = runner.invoke(app, ["format"], input="feat: x\n\nBREAKING CHANGE: gone\nRefs: 1\n")
        assert result.output.endswith("Refs: 1\nBREAKING CHANGE: gone\n")

    def test_parse_error(self):
        """Test formatting a non-conventional message."""
        result = runner.invoke(app, ["format"], input="hello\n")
        assert result.exit_code == 2


class TestSuggestCommand:
    """Tests for convcommit suggest command."""

    def test_paths(self):
        """Test suggestions from plain paths."""
        result = runner.invoke(app, ["suggest", "src/auth/login.py", "src/auth/session.py"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].startswith("feat(auth)")
        assert lines[0].endswith("60%")

    def test_json(self):
        """Test --json output."""
        result = runner.invoke(app, ["suggest", "--json", "tests/test_login.py"])

        assert result.exit_code == 0
        assert json.loads(result.output) == [{"type": "test", "scope": None, "confidence": 0.9}]

    def test_no_suggestion(self):
        """Test a change set no rule matches."""
        result = runner.invoke(app, ["suggest"])
        assert result.exit_code == 0
        assert "No suggestion" in result.output

    def test_numstat_from_stdin(self):
        """Test reading git diff --numstat output."""
        numstat = "1\t40\tapp.py\n"
        result = runner.invoke(app, ["suggest", "--numstat", "-"], input=numstat)

        assert result.exit_code == 0
        assert result.output.splitlines()[0].startswith("fix")

    def test_numstat_file(self, temp_dir):
        """Test reading numstat output from a file."""
        numstat_file = temp_dir / "changes.txt"
        numstat_file.write_text("3\t0\tdocs/usage.md\n1\t1\tREADME.md\n")

        result = runner.invoke(app, ["suggest", "-n", str(numstat_file)])

        assert result.output.splitlines()[0].startswith("docs")

    def test_malformed_classifier_config(self, temp_dir):
        """Test that a broken classifier section is reported, not raised."""
        config_file = temp_dir / "suggest.yaml"
        save_config(config_file, {"classifier": ["src"]})

        result = runner.invoke(app, ["suggest", "--config", str(config_file), "src/auth/login.py"])

        assert result.exit_code == 3
        assert "Config error" in result.output

    def test_nearest_malformed_config(self, temp_dir):
        """Test that the repository config file is checked too."""
        save_config(get_config_file(temp_dir), {"classifier": {"stop_words": "src"}})

        result = runner.invoke(app, ["suggest", "src/auth/login.py"])

        assert result.exit_code == 3
        assert "classifier.stop_words" in result.output


class TestParseNumstat:
    """Tests for parse_numstat function."""

    def test_counts(self):
        """Test added and removed counts."""
        changes = parse_numstat("10\t2\tsrc/a.py\n")
        assert changes[0].path == "src/a.py"
        assert changes[0].lines_added == 10
        assert changes[0].lines_removed == 2

    def test_binary_files(self):
        """Test '-' counts for binary files."""
        changes = parse_numstat("-\t-\tassets/logo.png\n")
        assert changes[0].lines_added == 0
        assert changes[0].lines_removed == 0

    def test_renames(self):
        """Test both rename notations."""
        changes = parse_numstat("1\t1\tsrc/{old => new}/a.py\n0\t0\told.py => new.py\n")
        assert [c.path for c in changes] == ["src/new/a.py", "new.py"]

    def test_skips_malformed_lines(self):
        """Test lines without three fields."""
        assert parse_numstat("\nnot numstat\n") == []


class TestBumpCommand:
    """Tests for convcommit bump command."""

    def test_files(self, temp_dir):
        """Test messages given as files."""
        first = temp_dir / "1.txt"
        second = temp_dir / "2.txt"
        first.write_text("fix: handle null response\n")
        second.write_text("feat: add pagination\n")

        result = runner.invoke(app, ["bump", str(first), str(second)])

        assert result.exit_code == 0
        assert result.output.splitlines()[-1] == "minor"

    def test_nul_separated_stdin(self):
        """Test git log -z style input."""
        stdin = "fix: a\n\0feat(api)!: drop v1 routes\n\0"
        result = runner.invoke(app, ["bump"], input=stdin)
        assert "major" in result.output.splitlines()

    def test_empty_input(self):
        """Test that no commits means no bump."""
        result = runner.invoke(app, ["bump"], input="")
        assert result.exit_code == 0
        assert "none" in result.output.splitlines()

    def test_current_version(self):
        """Test printing the next version."""
        result = runner.invoke(app, ["bump", "--current", "v1.4.2"], input="feat: add x\0fix: y")

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "minor" in lines
        assert "v1.5.0" in lines

    def test_invalid_current_version(self):
        """Test a current version that is not semver."""
        result = runner.invoke(app, ["bump", "--current", "banana"], input="fix: y")
        assert result.exit_code == 1

    def test_skips_non_conventional(self):
        """Test that non-conventional commits are skipped with a warning."""
        result = runner.invoke(app, ["bump"], input="Merge branch 'main'\0fix: y")

        assert result.exit_code == 0
        assert "patch" in result.output.splitlines()
        assert "Skipping non-conventional commit" in result.output


class TestInitCommand:
    """Tests for convcommit init command."""

    def test_writes_default_config(self, temp_dir):
        """Test writing the default configuration."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Configuration saved" in result.output
        config = load_config(get_config_file(temp_dir))
        assert "subject-max-length" in config["rules"]
        assert "stop_words" in config["classifier"]

    def test_refuses_to_overwrite(self, temp_dir):
        """Test that an existing config is kept."""
        save_config(get_config_file(temp_dir), {"rules": {"subject-case": False}})

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert load_config(get_config_file(temp_dir)) == {"rules": {"subject-case": False}}

    def test_force_overwrites(self, temp_dir):
        """Test --force replaces an existing config."""
        save_config(get_config_file(temp_dir), {"rules": {"subject-case": False}})

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert "type-enum" in load_config(get_config_file(temp_dir))["rules"]

    def test_save_failure(self, mocker):
        """Test reporting a config file that cannot be written."""
        mocker.patch(
            "convcommit.cli.init.write_default_config",
            side_effect=ConfigError("read-only file system"),
        )

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "read-only file system" in result.output
