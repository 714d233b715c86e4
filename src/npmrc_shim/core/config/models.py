"""Pydantic configuration models for npmrc-shim."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from npmrc_shim.core.config.constants import (
    MIN_SUPPORTED_NPM_VERSION,
    NPMRC_BACKUP_FILE_NAME,
    NPMRC_FILE_NAME,
)

# Key prefixes never persisted from `npm config list` output:
# nerf-darted credentials, ini comments and scoped registries (rewritten separately)
DEFAULT_EXCLUDED_PREFIXES: tuple[str, ...] = ("//", ";", "#", "@")

# Keys never persisted: credentials and proxies are machine specific
DEFAULT_EXCLUDED_KEYS: tuple[str, ...] = (
    "_auth",
    "_authToken",
    "_password",
    "proxy",
    "https-proxy",
    "globalconfig",
    "userconfig",
)


class ArtifactoryConfig(BaseModel):
    """Artifactory server and npm repository to resolve from.

    Attributes:
        url: Artifactory base URL, e.g. https://acme.jfrog.io/artifactory/.
        repo: npm repository (usually virtual) to resolve dependencies from.
        access_token: Access token, preferred when set.
        api_key: API key, used as a password for basic auth.
        user: User name for basic auth.
        password: Password for basic auth.
        ssh_key_path: SSH key path. SSH is not supported by npm and is rejected.

    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="Artifactory base URL")
    repo: str | None = Field(default=None, description="npm repository name")
    access_token: str | None = Field(default=None, repr=False)
    api_key: str | None = Field(default=None, repr=False)
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    ssh_key_path: str | None = None


class NpmConfig(BaseModel):
    """How to invoke npm.

    Attributes:
        executable: Path to npm. None resolves `npm` from PATH.
        args: Extra arguments passed to every npm config query.
        min_version: Oldest npm accepted.

    """

    model_config = ConfigDict(frozen=True)

    executable: str | None = None
    args: list[str] = Field(default_factory=list)
    min_version: str = MIN_SUPPORTED_NPM_VERSION


class NpmrcConfig(BaseModel):
    """Override file naming and key filtering."""

    model_config = ConfigDict(frozen=True)

    file_name: str = NPMRC_FILE_NAME
    backup_name: str = NPMRC_BACKUP_FILE_NAME
    excluded_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_KEYS))
    excluded_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_PREFIXES)
    )

    @model_validator(mode="after")
    def validate_backup_name(self) -> Self:
        """Backup must not overwrite the override file itself."""
        if self.backup_name == self.file_name:
            raise ValueError("npmrc.backup_name must differ from npmrc.file_name")
        return self


class Config(BaseModel):
    """Root npmrc-shim configuration model."""

    model_config = ConfigDict(frozen=True)

    artifactory: ArtifactoryConfig
    npm: NpmConfig = Field(default_factory=NpmConfig)
    npmrc: NpmrcConfig = Field(default_factory=NpmrcConfig)
