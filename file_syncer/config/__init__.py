# File Syncer Configuration Module
# Handles configuration loading, validation, and defaults

from file_syncer.config.defaults import CONFIG_ENV_VAR, DEFAULT_BRANCH, DEFAULT_CONFIG
from file_syncer.config.loader import (
    build_config,
    get_config_path,
    load_config,
    load_config_file,
    validate_config,
)
from file_syncer.config.schema import CompressionLevel, Mode, SyncConfig

__all__ = [
    # Schema
    "SyncConfig",
    "Mode",
    "CompressionLevel",
    # Loader
    "build_config",
    "load_config",
    "load_config_file",
    "get_config_path",
    "validate_config",
    # Defaults
    "DEFAULT_CONFIG",
    "DEFAULT_BRANCH",
    "CONFIG_ENV_VAR",
]
