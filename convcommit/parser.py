"""Parser for Conventional Commit messages.

Turns raw commit text into a CommitMessage, or raises ParseError with the
line and column where the text stopped matching the grammar:

    message   := header ("\\n\\n" body)? ("\\n\\n" footers)?
    header    := type ("(" scope ")")? "!"? ":" " " description
    body      := paragraph ("\\n\\n" paragraph)*
    footers   := footer ("\\n" footer)*
    footer    := token ": " value | "BREAKING CHANGE" ": " value | token " #" value

After the header, blank-line-delimited blocks go through a two-state
machine (body, then footers). The first block whose first line is a footer
line switches to footers for the rest of the message.
"""

import re

import structlog
from pydantic import ValidationError

from convcommit.exceptions import ParseError
from convcommit.grammar import (
    DEFAULT_TYPES,
    SCOPE_PATTERN,
    CommitMessage,
    CommitType,
    Footer,
    match_footer,
)

logger = structlog.get_logger(__name__)

_TYPE_PATTERN = re.compile(r"[A-Za-z]+")


def _fail(line: int, column: int, expected: str, found: str) -> ParseError:
    logger.debug("Commit message rejected", line=line, column=column, expected=expected)
    return ParseError(line, column, expected, found)


def _find_header_colon(header: str) -> int:
    """Find the first colon outside parentheses in the header.

    Args:
        header: The header line.

    Returns:
        Index of the colon, or -1 if there is none.

    Raises:
        ParseError: If the parentheses are unbalanced or nested.
    """
    open_at = -1
    for index, char in enumerate(header):
        if char == "(":
            if open_at != -1:
                raise _fail(1, index, "')' closing the scope", header[index:])
            open_at = index
        elif char == ")":
            if open_at == -1:
                raise _fail(1, index, "'(' before ')'", header[index:])
            open_at = -1
        elif char == ":" and open_at == -1:
            return index

    if open_at != -1:
        raise _fail(1, open_at, "')' closing the scope", header[open_at:])
    return -1


def _parse_header(header: str) -> tuple[CommitType, str | None, bool, str]:
    """Split the header into type, scope, breaking marker and description.

    Args:
        header: The first line of the message.

    Returns:
        Tuple of (type, scope, breaking_marker, description).

    Raises:
        ParseError: If the header does not match the grammar.
    """
    match = _TYPE_PATTERN.match(header)
    if match is None or header[match.end():match.end() + 1] not in ("", "(", ")", "!", ":"):
        raise _fail(1, 0, "a single commit type before '(' or ':'", header)

    # Types are lowercase; "FIX" is an unknown type, not an alias
    try:
        commit_type = CommitType(match.group())
    except ValueError:
        raise _fail(1, 0, f"one of {', '.join(DEFAULT_TYPES)}", match.group())

    colon = _find_header_colon(header)
    if colon == -1:
        raise _fail(1, 0, "'<type>: <description>' header", header)

    prefix = header[:colon]
    pos = match.end()
    scope = None
    if prefix.startswith("(", pos):
        close = prefix.index(")", pos)
        scope = prefix[pos + 1:close]
        if not SCOPE_PATTERN.fullmatch(scope):
            raise _fail(1, pos + 1, "scope of letters, digits, '_', '-', '@', '/' or ':'", scope)
        pos = close + 1

    breaking_marker = prefix.startswith("!", pos)
    if breaking_marker:
        pos += 1

    if pos != len(prefix):
        raise _fail(1, pos, "'!' or ':'", prefix[pos:])

    rest = header[colon + 1:]
    if not rest.startswith(" "):
        raise _fail(1, colon + 1, "' ' after ':'", rest[:1] or "end of line")

    description = rest[1:]
    if not description.strip():
        raise _fail(1, colon + 2, "description", description)

    return commit_type, scope, breaking_marker, description


def _split_blocks(lines: list[str], first_line_number: int) -> list[tuple[int, list[str]]]:
    """Group lines into blank-line-delimited blocks.

    Args:
        lines: Lines following the header separator.
        first_line_number: 1-based line number of lines[0].

    Returns:
        List of (line number of the block's first line, block lines).
    """
    blocks = []
    current: list[str] = []
    start = first_line_number
    for number, line in enumerate(lines, start=first_line_number):
        if line.strip():
            if not current:
                start = number
            current.append(line)
        elif current:
            blocks.append((start, current))
            current = []
    if current:
        blocks.append((start, current))
    return blocks


def _parse_footer_block(block: list[str]) -> list[Footer]:
    """Parse a footer block, folding non-footer lines into the previous value.

    Args:
        block: Lines of the block; the first line is a footer line.

    Returns:
        List of Footer objects in input order.
    """
    footers = []
    current: tuple[str, str] | None = None
    value_lines: list[str] = []

    for line in block:
        matched = match_footer(line)
        if matched is None:
            value_lines.append(line)
            continue
        if current is not None:
            footers.append(Footer(token=current[0], separator=current[1], value="\n".join(value_lines)))
        token, separator, value = matched
        current = (token, separator)
        value_lines = [value]

    if current is not None:
        footers.append(Footer(token=current[0], separator=current[1], value="\n".join(value_lines)))
    return footers


def parse(raw: str, strip_comments: bool = False) -> CommitMessage:
    """Parse raw commit text into a CommitMessage.

    Args:
        raw: The commit message text.
        strip_comments: Drop lines starting with '#' first, as git does for
            messages written in an editor. Line numbers in errors then refer
            to the remaining lines.

    Returns:
        The parsed CommitMessage.

    Raises:
        ParseError: If the text does not match the grammar. No partial
            result is ever returned.
    """
    lines = raw.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if strip_comments:
        lines = [line for line in lines if not line.startswith("#")]

    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise _fail(1, 0, "'<type>: <description>' header", "")

    commit_type, scope, breaking_marker, description = _parse_header(lines[0])

    if len(lines) > 1 and lines[1].strip():
        raise _fail(2, 0, "blank line after the header", lines[1])

    paragraphs: list[tuple[str, ...]] = []
    footers: list[Footer] = []
    in_footers = False

    for start, block in _split_blocks(lines[2:], first_line_number=3):
        if not in_footers and match_footer(block[0]) is not None:
            in_footers = True

        if not in_footers:
            paragraphs.append(tuple(block))
        elif match_footer(block[0]) is None:
            raise _fail(start, 0, "footer ('Token: value') after the footer block", block[0])
        else:
            footers.extend(_parse_footer_block(block))

    try:
        return CommitMessage(
            type=commit_type,
            scope=scope,
            description=description,
            body=tuple(paragraphs),
            footers=tuple(footers),
            breaking_marker=breaking_marker,
        )
    except ValidationError as e:
        raise _fail(1, 0, "a well-formed commit message", str(e)) from e
