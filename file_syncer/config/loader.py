# File Syncer Configuration Loader
# Load YAML configuration files and merge them with command-line values

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from file_syncer.config.defaults import CONFIG_ENV_VAR, DEFAULT_CONFIG
from file_syncer.config.schema import SyncConfig
from file_syncer.errors import ConfigurationError


def get_config_path(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Get the configuration file to read, if any.

    Args:
        config_path: Explicit path (takes precedence over the environment).

    Returns:
        Path to the config file, or None when no file is configured.
    """
    if config_path is not None:
        return Path(config_path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return None


def load_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read raw settings from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Mapping of setting names to values.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping.
    """
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
    return data


def build_config(overrides: dict[str, Any], config_path: Optional[Path] = None) -> SyncConfig:
    """
    Build a validated configuration from defaults, file and overrides.

    Values of None in ``overrides`` are treated as "not given" so that
    file settings survive unset command-line options.

    Args:
        overrides: Settings from the command line.
        config_path: Optional YAML file to merge under the overrides.

    Returns:
        Validated SyncConfig.

    Raises:
        ConfigurationError: If the merged settings are invalid.
    """
    merged: dict[str, Any] = dict(DEFAULT_CONFIG)

    path = get_config_path(config_path)
    if path is not None:
        merged.update(load_config_file(path))

    merged.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = SyncConfig.model_validate(merged)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(l) for l in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        raise ConfigurationError("invalid configuration: " + "; ".join(errors)) from e

    validate_config(config)
    return config


def load_config(config_path: Path) -> SyncConfig:
    """
    Load a complete configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Validated SyncConfig.
    """
    return build_config({}, config_path)


def validate_config(config: SyncConfig) -> None:
    """
    Check the settings every sync needs.

    Raises:
        ConfigurationError: If the folder path or repository URL is missing.
    """
    if not config.folder_path:
        raise ConfigurationError("folder path is required")

    if not config.repo_url.strip():
        raise ConfigurationError("repository URL is required")
