"""Repository configuration management for convcommit.

Handles reading and writing the .convcommit/config.yaml file:

    rules:
      subject-max-length:
        severity: warning
        max_length: 100
      scope-enum:
        enabled: true
        scopes: [api, ui]
    classifier:
      stop_words: [src, lib]
"""

from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from convcommit.classifier import ClassifierConfig, classifier_config_to_dict
from convcommit.exceptions import ConfigError
from convcommit.validation import RuleConfig, rule_config_to_dict

logger = structlog.get_logger(__name__)

CONFIG_DIR_NAME = ".convcommit"
CONFIG_FILE_NAME = "config.yaml"


def get_config_file(root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        root: The project root directory.

    Returns:
        Path to .convcommit/config.yaml.
    """
    return root / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def find_config_file(start: Path) -> Optional[Path]:
    """Find the nearest config file in start or one of its parents.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if there is none.
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = get_config_file(directory)
        if candidate.is_file():
            return candidate
    return None


def load_config(config_file: Path) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_file: Path to the config file.

    Returns:
        Configuration dictionary. Empty dict for an empty file.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or is
            not a mapping.
    """
    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a mapping")

    logger.debug("Loaded config", path=str(config_file), sections=sorted(config))
    return config


def save_config(config_file: Path, config: dict[str, Any]) -> None:
    """Save configuration to a YAML file, creating its directory.

    Args:
        config_file: Path to the config file.
        config: Configuration dictionary to save.

    Raises:
        ConfigError: If the file cannot be written.
    """
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            yaml.dump(
                config,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}")


def default_config() -> dict[str, Any]:
    """Build the default configuration with every rule and classifier setting spelled out."""
    return {
        **rule_config_to_dict(RuleConfig()),
        **classifier_config_to_dict(ClassifierConfig()),
    }


def write_default_config(root: Path) -> Path:
    """Write the default configuration to root/.convcommit/config.yaml.

    Args:
        root: The project root directory.

    Returns:
        Path to the written file.
    """
    config_file = get_config_file(root)
    save_config(config_file, default_config())
    return config_file
