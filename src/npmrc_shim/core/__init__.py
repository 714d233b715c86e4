"""Core module for npmrc-shim configuration and utilities.

This module provides:
- Configuration models and singleton access via get_config()
- File-based configuration loading via load_config_with_project()
- Custom exception hierarchy with NpmrcShimError as base
"""

from npmrc_shim.core.config import (
    Config,
    get_config,
    load_config,
    load_config_with_project,
)
from npmrc_shim.core.exceptions import (
    AuthError,
    CombinedRestoreError,
    ConfigError,
    FileOperationError,
    NpmrcShimError,
    ProcessError,
    ProcessExitCodeError,
    UnsupportedAuthError,
    UnsupportedNpmVersionError,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    "load_config",
    "load_config_with_project",
    # Exceptions
    "AuthError",
    "CombinedRestoreError",
    "ConfigError",
    "FileOperationError",
    "NpmrcShimError",
    "ProcessError",
    "ProcessExitCodeError",
    "UnsupportedAuthError",
    "UnsupportedNpmVersionError",
]
