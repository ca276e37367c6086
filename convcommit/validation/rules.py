"""Validator rules.

Each rule is a pure function ``(message, settings) -> Violation | None``.
RULES maps rule ids to their functions; the validator runs them in
RULE_ORDER.
"""

import re
from typing import Callable, Optional

from convcommit.grammar import CommitMessage
from convcommit.serializer import render_header
from convcommit.validation.constants import (
    BODY_MAX_LINE_LENGTH,
    BREAKING_CHANGE_FORMAT,
    SCOPE_CASE,
    SCOPE_ENUM,
    SUBJECT_CASE,
    SUBJECT_MAX_LENGTH,
    SUBJECT_NO_PERIOD,
    TYPE_ENUM,
    ScopeCase,
)
from convcommit.validation.models import RuleSettings, Violation

Rule = Callable[[CommitMessage, RuleSettings], Optional[Violation]]

_SCOPE_CASE_PATTERNS = {
    ScopeCase.KEBAB: re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*"),
    ScopeCase.SNAKE: re.compile(r"[a-z0-9]+(?:_[a-z0-9]+)*"),
    ScopeCase.CAMEL: re.compile(r"[a-z][a-zA-Z0-9]*"),
    ScopeCase.PASCAL: re.compile(r"[A-Z][a-zA-Z0-9]*"),
}

_SCOPE_SEPARATORS = re.compile(r"[@/:]")


def _violation(rule_id: str, settings: RuleSettings, message: str, location: str) -> Violation:
    return Violation(rule_id=rule_id, severity=settings.severity, message=message, location=location)


def _segment_matches_case(segment: str, case: ScopeCase) -> bool:
    if case == ScopeCase.LOWER:
        return segment == segment.lower()
    if case == ScopeCase.UPPER:
        return segment == segment.upper()
    return _SCOPE_CASE_PATTERNS[case].fullmatch(segment) is not None


def check_type_enum(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Type must be in the configured allow-list."""
    allowed = settings.params["types"]
    if message.type.value in allowed:
        return None
    return _violation(
        TYPE_ENUM,
        settings,
        f"Type '{message.type.value}' is not allowed (allowed: {', '.join(allowed)})",
        "header",
    )


def check_scope_case(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Scope, if present, must use the configured case style.

    Monorepo scopes are checked segment by segment, so ``@acme/web-ui``
    passes kebab-case.
    """
    if message.scope is None:
        return None

    case = ScopeCase(settings.params["case"])
    segments = [s for s in _SCOPE_SEPARATORS.split(message.scope) if s]
    if all(_segment_matches_case(s, case) for s in segments):
        return None
    return _violation(
        SCOPE_CASE,
        settings,
        f"Scope '{message.scope}' must be {case.value}",
        "scope",
    )


def check_scope_enum(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Scope, if present, must be in the configured list (an empty list allows any)."""
    scopes = settings.params["scopes"]
    if message.scope is None or not scopes or message.scope in scopes:
        return None
    return _violation(
        SCOPE_ENUM,
        settings,
        f"Scope '{message.scope}' is not allowed (allowed: {', '.join(scopes)})",
        "scope",
    )


def check_subject_case(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Description must not start with an uppercase character."""
    if not message.description.lstrip()[:1].isupper():
        return None
    return _violation(
        SUBJECT_CASE,
        settings,
        "Description must not start with an uppercase letter",
        "description",
    )


def check_subject_no_period(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Description must not end with a period."""
    if not message.description.rstrip().endswith("."):
        return None
    return _violation(
        SUBJECT_NO_PERIOD,
        settings,
        "Description must not end with '.'",
        "description",
    )


def check_subject_max_length(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Header line, including ``type(scope): ``, must fit the configured length."""
    max_length = settings.params["max_length"]
    length = len(render_header(message))
    if length <= max_length:
        return None
    return _violation(
        SUBJECT_MAX_LENGTH,
        settings,
        f"Header is {length} characters long (max {max_length})",
        "header",
    )


def check_body_max_line_length(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Body lines must fit the configured length.

    A line with no whitespace at all (typically a URL) is exempt. An
    indented URL is still checked.
    """
    max_length = settings.params["max_length"]
    body_lines = [line for paragraph in message.body for line in paragraph]

    too_long = [
        (number, len(line))
        for number, line in enumerate(body_lines, start=1)
        if len(line) > max_length and any(c.isspace() for c in line)
    ]
    if not too_long:
        return None

    number, length = too_long[0]
    text = f"Body line {number} is {length} characters long (max {max_length})"
    if len(too_long) > 1:
        text += f"; {len(too_long)} lines exceed the limit"
    return _violation(BODY_MAX_LINE_LENGTH, settings, text, "body")


def check_breaking_change_format(message: CommitMessage, settings: RuleSettings) -> Optional[Violation]:
    """Every BREAKING CHANGE footer must have a non-empty value."""
    for index, footer in enumerate(message.footers):
        if footer.is_breaking and not footer.value.strip():
            return _violation(
                BREAKING_CHANGE_FORMAT,
                settings,
                "BREAKING CHANGE footer must describe the change",
                f"footer[{index}]",
            )
    return None


RULES: dict[str, Rule] = {
    TYPE_ENUM: check_type_enum,
    SCOPE_CASE: check_scope_case,
    SCOPE_ENUM: check_scope_enum,
    SUBJECT_CASE: check_subject_case,
    SUBJECT_NO_PERIOD: check_subject_no_period,
    SUBJECT_MAX_LENGTH: check_subject_max_length,
    BODY_MAX_LINE_LENGTH: check_body_max_line_length,
    BREAKING_CHANGE_FORMAT: check_breaking_change_format,
}
