"""Exception classes for convcommit.

Contains all exception classes raised by the engine:
- CommitGrammarError: Base exception for convcommit errors
- ParseError: Raised when commit text does not match the grammar
- ConfigError: Raised when a configuration file or section is malformed
"""


class CommitGrammarError(Exception):
    """Base exception for convcommit errors."""

    pass


class ParseError(CommitGrammarError):
    """Raised when a commit message does not match the Conventional Commits grammar.

    Attributes:
        line: 1-based line number of the offending line.
        column: 0-based column where parsing stopped.
        expected: Description of what the grammar expected.
        found: The text found at that position.
    """

    def __init__(self, line: int, column: int, expected: str, found: str):
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found
        super().__init__(f"{line}:{column}: expected {expected}, found {found!r}")


class ConfigError(CommitGrammarError):
    """Raised when there's an error with convcommit configuration."""

    pass
