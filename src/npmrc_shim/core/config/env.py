"""Environment variable and credential handling for npmrc-shim."""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Environment variables holding Artifactory credentials, mapped to the
# artifactory config field they populate.
ENV_CREDENTIAL_KEYS: dict[str, str] = {
    "NPMRC_SHIM_ACCESS_TOKEN": "access_token",
    "NPMRC_SHIM_API_KEY": "api_key",
    "NPMRC_SHIM_USER": "user",
    "NPMRC_SHIM_PASSWORD": "password",
}

# .env file name constant
ENV_FILE_NAME: str = ".env"


def _mask_credential(value: str | None) -> str:
    """Mask credential value for safe logging.

    Args:
        value: Credential value to mask. None values are handled gracefully.

    Returns:
        Masked value showing only first 7 characters + "***",
        or "***" if value is None, empty, or 7 characters or shorter.

    """
    if not value:
        return "***"
    if len(value) <= 7:
        return "***"
    return value[:7] + "***"


def _check_env_file_permissions(path: Path) -> None:
    """Check if .env file has secure permissions (600 or 400 on Unix).

    Only checks on Unix-like systems (Linux, macOS).
    Logs warning if permissions are too permissive.

    Args:
        path: Path to .env file.

    """
    if sys.platform == "win32":
        return  # Windows has different permission model

    try:
        mode = path.stat().st_mode & 0o777
        if mode not in (0o600, 0o400):
            logger.warning(
                ".env file %s has insecure permissions %03o, "
                "expected 600 or 400. Run: chmod 600 %s",
                path,
                mode,
                path,
            )
    except OSError:
        pass  # File may have been deleted between check and stat


def load_env_file(
    project_path: str | Path | None = None,
    *,
    check_permissions: bool = True,
) -> bool:
    """Load environment variables from {project_path}/.env.

    Does NOT override existing environment variables (override=False).

    Args:
        project_path: Path to project directory. Defaults to current working directory.
        check_permissions: Whether to check file permissions (default True).

    Returns:
        True if .env file was found and loaded, False otherwise.

    """
    resolved_path = Path.cwd() if project_path is None else Path(project_path).expanduser()
    env_file = resolved_path / ENV_FILE_NAME

    if not env_file.is_file():
        logger.debug(".env file not found at %s, skipping", env_file)
        return False

    if check_permissions:
        _check_env_file_permissions(env_file)

    load_dotenv(env_file, encoding="utf-8", override=False)
    logger.debug("Loaded environment variables from %s", env_file)
    return True


def credentials_from_env() -> dict[str, str]:
    """Collect Artifactory credentials set in the environment.

    Returns:
        Mapping of artifactory config field name to value, only for
        variables that are set and non-empty.

    """
    found: dict[str, str] = {}
    for env_key, field_name in ENV_CREDENTIAL_KEYS.items():
        value = os.environ.get(env_key)
        if value:
            logger.debug("Using %s from environment: %s", env_key, _mask_credential(value))
            found[field_name] = value
    return found
