"""Shared constants for configuration modules.

This module provides constants used across config submodules to avoid
duplication and circular import issues.
"""

from pathlib import Path

# Constants for global configuration
GLOBAL_CONFIG_PATH: Path = Path.home() / ".npmrc-shim" / "config.yaml"
PROJECT_CONFIG_NAME: str = "npmrc-shim.yaml"
MAX_CONFIG_SIZE: int = 1_048_576  # 1MB - protection against YAML bombs

# npm project files
NPMRC_FILE_NAME: str = ".npmrc"
# Must never match a file name npm itself reads or writes
NPMRC_BACKUP_FILE_NAME: str = "npmrc-shim.npmrc.backup"

# Oldest npm whose `config list` output the transformer understands
MIN_SUPPORTED_NPM_VERSION: str = "5.4.0"
