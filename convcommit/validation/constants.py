"""Constants for the convcommit validator.

Contains:
- Severity: Violation severities
- ScopeCase: Case styles accepted by the scope-case rule
- RULE_ORDER: Rule ids in evaluation order
- DEFAULT_RULE_SETTINGS: Default enabled flag, severity and parameters per rule
- EXIT_*: Exit codes for tools built on the validator (0, 1 and 2 for the
  message; 3 for a broken config file)
"""

from enum import Enum

from convcommit.grammar import DEFAULT_TYPES


class Severity(str, Enum):
    """Severity of a rule violation."""

    ERROR = "error"
    WARNING = "warning"


class ScopeCase(str, Enum):
    """Case styles for the scope-case rule."""

    KEBAB = "kebab-case"
    LOWER = "lower-case"
    UPPER = "upper-case"
    SNAKE = "snake-case"
    CAMEL = "camel-case"
    PASCAL = "pascal-case"


TYPE_ENUM = "type-enum"
SCOPE_CASE = "scope-case"
SCOPE_ENUM = "scope-enum"
SUBJECT_CASE = "subject-case"
SUBJECT_NO_PERIOD = "subject-no-period"
SUBJECT_MAX_LENGTH = "subject-max-length"
BODY_MAX_LINE_LENGTH = "body-max-line-length"
BREAKING_CHANGE_FORMAT = "breaking-change-format"

RULE_ORDER = [
    TYPE_ENUM,
    SCOPE_CASE,
    SCOPE_ENUM,
    SUBJECT_CASE,
    SUBJECT_NO_PERIOD,
    SUBJECT_MAX_LENGTH,
    BODY_MAX_LINE_LENGTH,
    BREAKING_CHANGE_FORMAT,
]

# rule id -> (enabled, severity, parameters)
DEFAULT_RULE_SETTINGS = {
    TYPE_ENUM: (True, Severity.ERROR, {"types": DEFAULT_TYPES}),
    SCOPE_CASE: (True, Severity.ERROR, {"case": ScopeCase.KEBAB.value}),
    SCOPE_ENUM: (False, Severity.ERROR, {"scopes": []}),
    SUBJECT_CASE: (True, Severity.ERROR, {}),
    SUBJECT_NO_PERIOD: (True, Severity.ERROR, {}),
    SUBJECT_MAX_LENGTH: (True, Severity.ERROR, {"max_length": 72}),
    BODY_MAX_LINE_LENGTH: (True, Severity.WARNING, {"max_length": 72}),
    BREAKING_CHANGE_FORMAT: (True, Severity.ERROR, {}),
}

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_PARSE_ERROR = 2
# Outside the message contract: the config file, not the message, is at fault
EXIT_CONFIG_ERROR = 3
