"""Data models for the convcommit validator.

Contains:
- Violation: Pydantic model for a single rule failure
- RuleSettings: Dataclass with the enabled flag, severity and parameters of one rule
- RuleConfig: Dataclass mapping rule ids to RuleSettings, with defaults
- check_param / check_severity: Value checks shared with the config loader

RuleSettings checks its values when it is created, so a RuleConfig built in
code is held to the same rules as one loaded from a file.
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from convcommit.exceptions import ConfigError
from convcommit.validation.constants import DEFAULT_RULE_SETTINGS, ScopeCase, Severity


class Violation(BaseModel):
    """A single rule failure reported by the validator.

    Attributes:
        rule_id: Id of the rule that failed (e.g., "subject-max-length").
        severity: error or warning.
        message: Human-readable explanation.
        location: header, scope, description, body or footer[<index>].
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    severity: Severity
    message: str
    location: str


def _string_list(label: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{label} must be a list of strings")
    return value


def _positive_int(label: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{label} must be a positive integer")
    return value


def _scope_case(label: str, value: Any) -> str:
    try:
        return ScopeCase(value).value
    except ValueError:
        valid = ", ".join(c.value for c in ScopeCase)
        raise ConfigError(f"{label} must be one of: {valid}")


_PARAM_CHECKS = {
    "types": _string_list,
    "scopes": _string_list,
    "case": _scope_case,
    "max_length": _positive_int,
}


def check_param(name: str, value: Any, label: str) -> Any:
    """Check a rule parameter value.

    Args:
        name: Parameter name (types, scopes, case or max_length).
        value: The value to check.
        label: Where the value came from, used in the error message.

    Returns:
        The value in normalized form. Parameters no rule reads are returned
        unchanged.

    Raises:
        ConfigError: If the value has the wrong type or range.
    """
    check = _PARAM_CHECKS.get(name)
    if check is None:
        return value
    return check(label, value)


def check_severity(value: Any, label: str) -> Severity:
    """Convert a severity name to Severity, raising ConfigError if unknown."""
    try:
        return Severity(value)
    except ValueError:
        raise ConfigError(f"{label} must be 'error' or 'warning', got {value!r}")


@dataclass
class RuleSettings:
    """Settings for one validator rule.

    Raises:
        ConfigError: On construction, if a field has the wrong type or a
            parameter is out of range.
    """

    enabled: bool = True
    severity: Severity = Severity.ERROR
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ConfigError(f"enabled must be true or false, got {self.enabled!r}")
        self.severity = check_severity(self.severity, "severity")
        if not isinstance(self.params, dict):
            raise ConfigError("params must be a mapping of parameter name to value")
        self.params = {
            name: check_param(name, value, f"params.{name}")
            for name, value in self.params.items()
        }


def default_rule_settings(rule_id: str) -> RuleSettings:
    """Build the default settings for a rule.

    Args:
        rule_id: A known rule id.

    Returns:
        Fresh RuleSettings with the documented defaults.
    """
    enabled, severity, params = DEFAULT_RULE_SETTINGS[rule_id]
    return RuleSettings(enabled=enabled, severity=severity, params=copy.deepcopy(params))


@dataclass
class RuleConfig:
    """Configuration for the validator.

    Rules missing from ``rules`` use their defaults; parameters missing from
    a rule's settings use that rule's default parameters.
    """

    rules: dict[str, RuleSettings] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for rule_id, settings in self.rules.items():
            if not isinstance(settings, RuleSettings):
                raise ConfigError(f"Settings for rule {rule_id!r} must be RuleSettings")

    def settings_for(self, rule_id: str) -> RuleSettings:
        """Get the effective settings for a rule.

        Args:
            rule_id: A known rule id.

        Returns:
            RuleSettings with defaults filled in for missing parameters.
        """
        defaults = default_rule_settings(rule_id)
        configured = self.rules.get(rule_id)
        if configured is None:
            return defaults
        return RuleSettings(
            enabled=configured.enabled,
            severity=configured.severity,
            params={**defaults.params, **configured.params},
        )
