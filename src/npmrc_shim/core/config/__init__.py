"""Pydantic configuration models and singleton access for npmrc-shim.

Usage:
    from npmrc_shim.core.config import get_config, load_config_with_project

    load_config_with_project(project_dir)
    config = get_config()
    print(config.artifactory.repo)
"""

from npmrc_shim.core.config.constants import (
    GLOBAL_CONFIG_PATH,
    MAX_CONFIG_SIZE,
    MIN_SUPPORTED_NPM_VERSION,
    NPMRC_BACKUP_FILE_NAME,
    NPMRC_FILE_NAME,
    PROJECT_CONFIG_NAME,
)
from npmrc_shim.core.config.env import (
    ENV_CREDENTIAL_KEYS,
    ENV_FILE_NAME,
    _check_env_file_permissions,
    _mask_credential,
    credentials_from_env,
    load_env_file,
)
from npmrc_shim.core.config.loaders import (
    _deep_merge,
    _load_yaml_file,
    _reset_config,
    get_config,
    load_config,
    load_config_with_project,
)
from npmrc_shim.core.config.models import (
    DEFAULT_EXCLUDED_KEYS,
    DEFAULT_EXCLUDED_PREFIXES,
    ArtifactoryConfig,
    Config,
    NpmConfig,
    NpmrcConfig,
)

# Re-export ConfigError for convenience (it's from exceptions, not config)
from npmrc_shim.core.exceptions import ConfigError

__all__ = [
    # Constants
    "GLOBAL_CONFIG_PATH",
    "MAX_CONFIG_SIZE",
    "MIN_SUPPORTED_NPM_VERSION",
    "NPMRC_BACKUP_FILE_NAME",
    "NPMRC_FILE_NAME",
    "PROJECT_CONFIG_NAME",
    "ENV_CREDENTIAL_KEYS",
    "ENV_FILE_NAME",
    "DEFAULT_EXCLUDED_KEYS",
    "DEFAULT_EXCLUDED_PREFIXES",
    # Exceptions
    "ConfigError",
    # Environment
    "load_env_file",
    "credentials_from_env",
    "_check_env_file_permissions",
    "_mask_credential",
    # Models
    "ArtifactoryConfig",
    "Config",
    "NpmConfig",
    "NpmrcConfig",
    # Loaders & singleton
    "_deep_merge",
    "_load_yaml_file",
    "_reset_config",
    "get_config",
    "load_config",
    "load_config_with_project",
]
