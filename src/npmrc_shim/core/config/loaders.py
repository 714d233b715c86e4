"""Configuration loading functions and singleton management."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from npmrc_shim.core.config.constants import (
    GLOBAL_CONFIG_PATH,
    MAX_CONFIG_SIZE,
    PROJECT_CONFIG_NAME,
)
from npmrc_shim.core.config.env import credentials_from_env, load_env_file
from npmrc_shim.core.config.models import Config
from npmrc_shim.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Module-level singleton for configuration
_config: Config | None = None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base dictionary.

    Dicts are merged recursively, everything else is replaced by override.
    Returns a new dict; inputs are not modified.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file with safety checks.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed YAML content as dictionary. An empty file yields {}.

    Raises:
        ConfigError: If file cannot be read, is too large, is a directory,
            or YAML is invalid.

    """
    try:
        # Read with size limit instead of stat-then-read
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)

        if len(content) > MAX_CONFIG_SIZE:
            raise ConfigError(
                f"Config file {path} exceeds 1MB limit "
                f"(read {len(content):,} bytes before stopping)."
            )

        parsed = yaml.safe_load(content)
        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            raise ConfigError(
                f"Config file {path} must contain a YAML mapping, got {type(parsed).__name__}."
            )

        return parsed
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except IsADirectoryError as e:
        raise ConfigError(f"{path} is a directory, not a config file.") from e
    except PermissionError as e:
        raise ConfigError(f"Permission denied reading {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def load_config(config_data: dict[str, Any]) -> Config:
    """Validate a configuration dictionary and install it as the singleton.

    Args:
        config_data: Raw configuration mapping.

    Returns:
        Validated Config instance.

    Raises:
        ConfigError: If validation fails.

    """
    global _config

    if not isinstance(config_data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(config_data).__name__}")

    try:
        _config = Config.model_validate(config_data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed:\n{e}") from e

    logger.debug("Configuration loaded for repository %s", _config.artifactory.repo)
    return _config


def load_config_with_project(
    project_path: str | Path | None = None,
    *,
    global_config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Load global config, merge project config and environment credentials.

    Priority (lowest to highest): global YAML, project YAML, environment
    credentials (including a project .env), explicit overrides.

    Args:
        project_path: Project directory. Defaults to current working directory.
        global_config_path: Global config file. Defaults to GLOBAL_CONFIG_PATH.
        overrides: Values from the command line, merged last.

    Returns:
        Validated Config instance.

    Raises:
        ConfigError: If no config provides an Artifactory URL, a file is
            invalid, or validation fails.

    """
    project_dir = Path.cwd() if project_path is None else Path(project_path).expanduser()
    global_path = GLOBAL_CONFIG_PATH if global_config_path is None else global_config_path

    merged: dict[str, Any] = {}
    for path in (global_path, project_dir / PROJECT_CONFIG_NAME):
        if path.is_file():
            logger.debug("Loading config file %s", path)
            merged = _deep_merge(merged, _load_yaml_file(path))

    load_env_file(project_dir)
    env_credentials = credentials_from_env()
    if env_credentials:
        merged = _deep_merge(merged, {"artifactory": env_credentials})

    if overrides:
        merged = _deep_merge(merged, overrides)

    if "url" not in merged.get("artifactory", {}):
        raise ConfigError(
            f"No Artifactory URL configured. Set artifactory.url in {global_path} "
            f"or {project_dir / PROJECT_CONFIG_NAME}."
        )

    return load_config(merged)


def get_config() -> Config:
    """Get the loaded configuration singleton.

    Raises:
        ConfigError: If no configuration has been loaded yet.

    """
    if _config is None:
        raise ConfigError("Config not loaded. Call load_config() first.")
    return _config


def _reset_config() -> None:
    """Reset config singleton (for testing)."""
    global _config
    _config = None
