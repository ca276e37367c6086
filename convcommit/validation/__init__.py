"""Rule-based validation of Conventional Commit messages.

This package provides the configurable style checks:
- constants: Severity, ScopeCase, rule ids, RULE_ORDER, defaults, exit codes
- models: Violation, RuleSettings, RuleConfig
- rules: The individual rule functions and the RULES table
- config: load_rule_config_from_dict, rule_config_to_dict

validate() runs every enabled rule in RULE_ORDER and collects all
violations; it never stops at the first failure.
"""

from typing import Iterable, Optional

import structlog

from convcommit.grammar import CommitMessage

# Constants
from convcommit.validation.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_OK,
    EXIT_PARSE_ERROR,
    EXIT_VIOLATIONS,
    RULE_ORDER,
    ScopeCase,
    Severity,
)

# Models
from convcommit.validation.models import (
    RuleConfig,
    RuleSettings,
    Violation,
)

# Rules
from convcommit.validation.rules import RULES

# Configuration utilities
from convcommit.validation.config import (
    load_rule_config_from_dict,
    rule_config_to_dict,
)

logger = structlog.get_logger(__name__)


def validate(message: CommitMessage, config: Optional[RuleConfig] = None) -> list[Violation]:
    """Check a commit message against every enabled rule.

    Args:
        message: The parsed commit message.
        config: Rule configuration. Defaults apply when omitted.

    Returns:
        All violations, in rule evaluation order. Empty if the message passes.
    """
    if config is None:
        config = RuleConfig()

    violations = []
    for rule_id in RULE_ORDER:
        settings = config.settings_for(rule_id)
        if not settings.enabled:
            continue
        violation = RULES[rule_id](message, settings)
        if violation is not None:
            violations.append(violation)

    logger.debug("Validated commit message", type=message.type.value, violations=len(violations))
    return violations


def has_errors(violations: Iterable[Violation]) -> bool:
    """Whether any violation has error severity (warnings never block)."""
    return any(v.severity == Severity.ERROR for v in violations)


def exit_code_for(violations: Iterable[Violation]) -> int:
    """Exit code for a parsed message: EXIT_VIOLATIONS if any error, else EXIT_OK."""
    return EXIT_VIOLATIONS if has_errors(violations) else EXIT_OK


__all__ = [
    # Validation
    "validate",
    "has_errors",
    "exit_code_for",
    # Constants
    "Severity",
    "ScopeCase",
    "RULE_ORDER",
    "EXIT_OK",
    "EXIT_VIOLATIONS",
    "EXIT_PARSE_ERROR",
    "EXIT_CONFIG_ERROR",
    # Models
    "Violation",
    "RuleSettings",
    "RuleConfig",
    "RULES",
    # Configuration
    "load_rule_config_from_dict",
    "rule_config_to_dict",
]
