"""
YAML configuration loader for Riskwell.

Reads the underwriting tables from YAML, substituting environment
variables, and falls back to built-in defaults when no file is found.
"""

import os
import re
from pathlib import Path
from typing import Any

import structlog
import yaml

from riskwell.config.models import UnderwritingConfig

logger = structlog.get_logger()

CONFIG_PATH_ENV_VAR = "RISKWELL_CONFIG"

DEFAULT_CONFIG_PATHS = (
    Path("config/riskwell.yaml"),
    Path("riskwell.yaml"),
    Path.home() / ".riskwell" / "riskwell.yaml",
)


def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replace(match: re.Match) -> str:
            var_name = match.group(1)
            default = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default)

        return re.sub(pattern, replace, value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and substitute environment variables.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary with the file's values

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the YAML is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return {}

    return _substitute_env_vars(raw)


def find_config_file() -> Path | None:
    """
    Locate the configuration file when none is given explicitly.

    RISKWELL_CONFIG wins when set; otherwise the first existing path in
    DEFAULT_CONFIG_PATHS is used.
    """
    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            return path
    return None


def load_config(
    config_path: str | Path | None = None,
    override_values: dict[str, Any] | None = None,
) -> UnderwritingConfig:
    """
    Load the underwriting configuration.

    Tables come from the YAML file, then override_values, then any
    RISKWELL_* environment variables read by the settings model.

    Args:
        config_path: Path to configuration YAML file. If None, the file is
                    located with find_config_file() and built-in defaults
                    are used when there is none.
        override_values: Dictionary of values to override after loading

    Returns:
        Validated UnderwritingConfig object

    Raises:
        FileNotFoundError: If an explicit configuration path does not exist
        ValidationError: If configuration is invalid
    """
    path = Path(config_path) if config_path is not None else find_config_file()

    if path is None:
        logger.debug("config_defaults_used", searched=[str(p) for p in DEFAULT_CONFIG_PATHS])
        config_dict: dict[str, Any] = {}
    else:
        config_dict = load_yaml(path)
        logger.debug("config_loaded", path=str(path), sections=sorted(config_dict))

    if override_values:
        config_dict = _deep_merge(config_dict, override_values)

    return UnderwritingConfig(**config_dict)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
