"""Configuration utilities for the convcommit validator.

Contains functions for:
- Loading RuleConfig from a configuration dictionary
- Converting RuleConfig to a dictionary for saving

A rule entry in the ``rules`` section may be a mapping with ``enabled``,
``severity`` and rule parameters, a boolean (enable/disable), or a
severity string (``error``, ``warning`` or ``off``).
"""

from typing import Any

import structlog

from convcommit.exceptions import ConfigError
from convcommit.validation.constants import DEFAULT_RULE_SETTINGS, RULE_ORDER
from convcommit.validation.models import (
    RuleConfig,
    RuleSettings,
    check_param,
    check_severity,
    default_rule_settings,
)

logger = structlog.get_logger(__name__)


def _parse_rule_entry(rule_id: str, entry: Any) -> RuleSettings:
    """Parse one entry of the rules section.

    Args:
        rule_id: A known rule id.
        entry: The raw entry from the configuration.

    Returns:
        RuleSettings for the rule.

    Raises:
        ConfigError: If the entry has the wrong shape.
    """
    settings = default_rule_settings(rule_id)

    if isinstance(entry, bool):
        settings.enabled = entry
        return settings

    if isinstance(entry, str):
        if entry == "off":
            settings.enabled = False
        else:
            settings.severity = check_severity(entry, f"rules.{rule_id}")
        return settings

    if not isinstance(entry, dict):
        raise ConfigError(f"rules.{rule_id} must be a mapping, a boolean or a severity")

    for key, value in entry.items():
        if key == "enabled":
            if not isinstance(value, bool):
                raise ConfigError(f"rules.{rule_id}.enabled must be true or false")
            settings.enabled = value
        elif key == "severity":
            settings.severity = check_severity(value, f"rules.{rule_id}.severity")
        elif key in settings.params:
            settings.params[key] = check_param(key, value, f"rules.{rule_id}.{key}")
        else:
            logger.debug("Ignoring unknown rule parameter", rule=rule_id, parameter=key)

    return settings


def load_rule_config_from_dict(config_dict: dict) -> RuleConfig:
    """Load RuleConfig from a configuration dictionary.

    Unknown rule ids are ignored so newer configuration files keep working.

    Args:
        config_dict: Dictionary with a ``rules`` section.

    Returns:
        RuleConfig instance.

    Raises:
        ConfigError: If the rules section or one of its entries is malformed.
    """
    rules_section = config_dict.get("rules")
    if rules_section is None:
        rules_section = {}
    if not isinstance(rules_section, dict):
        raise ConfigError("'rules' must be a mapping of rule id to settings")

    rules = {}
    for rule_id, entry in rules_section.items():
        if rule_id not in DEFAULT_RULE_SETTINGS:
            logger.debug("Ignoring unknown rule", rule=rule_id)
            continue
        rules[rule_id] = _parse_rule_entry(rule_id, entry)

    return RuleConfig(rules=rules)


def rule_config_to_dict(config: RuleConfig) -> dict:
    """Convert RuleConfig to a dictionary for saving.

    Every known rule is written out with its effective settings.

    Args:
        config: RuleConfig instance.

    Returns:
        Dictionary representation.
    """
    rules = {}
    for rule_id in RULE_ORDER:
        settings = config.settings_for(rule_id)
        rules[rule_id] = {
            "enabled": settings.enabled,
            "severity": settings.severity.value,
            **settings.params,
        }
    return {"rules": rules}
