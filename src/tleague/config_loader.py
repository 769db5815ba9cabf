"""Configuration loader and validator."""

from pathlib import Path
from typing import Any, Optional

import yaml

from tleague.i18n import SUPPORTED_LANGUAGES, get_language_from_env
from tleague.paths import get_default_state_path

DEFAULT_ADMIN_PASSWORD = "admin"
DEFAULT_GROUP_SIZE = 4


class ConfigError(Exception):
    """Configuration validation error."""

    pass


def load_config(path: str) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        Dictionary with configuration values

    Raises:
        ConfigError: If file not found or invalid YAML
    """
    config_file = Path(path)

    if not config_file.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}")

    if config is None:
        raise ConfigError("Config file is empty")

    if not isinstance(config, dict):
        raise ConfigError("Config file must contain a mapping")

    return config


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate configuration values.

    Every field is optional:
    - lang: 'pt' or 'en' (default from TLEAGUE_LANG, else 'pt')
    - admin_password: password of the admin gate (default 'admin')
    - group_size: players per monthly group, 2 to 8 (default 4)
    - state_file: JSON file holding the league (default .tleague/state.json)

    Args:
        config: Configuration dictionary

    Returns:
        Validated and normalized configuration

    Raises:
        ConfigError: If validation fails
    """
    validated = {}

    lang = config.get("lang", get_language_from_env())
    if lang not in SUPPORTED_LANGUAGES:
        raise ConfigError(f"lang must be one of {SUPPORTED_LANGUAGES}, got '{lang}'")
    validated["lang"] = lang

    password = config.get("admin_password", DEFAULT_ADMIN_PASSWORD)
    if not isinstance(password, str) or not password:
        raise ConfigError("admin_password must be a non-empty string")
    validated["admin_password"] = password

    group_size = config.get("group_size", DEFAULT_GROUP_SIZE)
    if isinstance(group_size, bool) or not isinstance(group_size, int) or not 2 <= group_size <= 8:
        raise ConfigError(f"group_size must be an integer between 2 and 8, got {group_size}")
    validated["group_size"] = group_size

    state_file = config.get("state_file", str(get_default_state_path()))
    if not isinstance(state_file, str) or not state_file.strip():
        raise ConfigError("state_file must be a path string")
    validated["state_file"] = state_file

    return validated


def load_and_validate_config(path: Optional[str] = None) -> dict[str, Any]:
    """Load and validate configuration in one step.

    Args:
        path: Path to YAML config file; None gives the defaults

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigError: If loading or validation fails
    """
    if path is None:
        return validate_config({})
    config = load_config(path)
    return validate_config(config)
