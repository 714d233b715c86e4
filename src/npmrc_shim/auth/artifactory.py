"""Artifactory credentials for npm.

Turns the `artifactory` config section into the npm registry URL of a
repository and the credential line npm needs to authenticate against it.

Credential precedence: access token, then user with API key or password.
SSH authentication cannot be expressed in .npmrc and is rejected.
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import urlsplit

from npmrc_shim.core.config.env import _mask_credential
from npmrc_shim.core.config.models import ArtifactoryConfig
from npmrc_shim.core.exceptions import AuthError, UnsupportedAuthError

__all__ = [
    "ArtifactoryAuth",
    "npm_registry_url",
    "nerf_dart",
]

logger = logging.getLogger(__name__)


def npm_registry_url(base_url: str, repo: str) -> str:
    """Build the npm API URL of an Artifactory repository.

    Example:
        >>> npm_registry_url("https://acme.jfrog.io/artifactory", "npm-virtual")
        'https://acme.jfrog.io/artifactory/api/npm/npm-virtual/'

    """
    return f"{base_url.rstrip('/')}/api/npm/{repo.strip('/')}/"


def nerf_dart(registry_url: str) -> str:
    """Strip scheme, query and fragment from a registry URL for credential keys.

    npm scopes credentials to a registry with keys of the form
    `//host/path/:_authToken`.

    Example:
        >>> nerf_dart("https://acme.jfrog.io/artifactory/api/npm/npm-virtual/")
        '//acme.jfrog.io/artifactory/api/npm/npm-virtual/'

    """
    parts = urlsplit(registry_url)
    path = parts.path if parts.path.endswith("/") else f"{parts.path}/"
    return f"//{parts.netloc}{path}"


class ArtifactoryAuth:
    """Resolves the authenticated npm registry of one Artifactory repository."""

    def __init__(self, config: ArtifactoryConfig, repo: str | None = None) -> None:
        self.config = config
        self.repo = repo or config.repo

    def authenticate(self) -> tuple[str, str]:
        """Return the registry URL and the credential line for it.

        Returns:
            Tuple of (registry_url, credential_line).

        Raises:
            UnsupportedAuthError: If SSH authentication is configured.
            AuthError: If no repository or no usable credential is configured.

        """
        if self.config.ssh_key_path:
            raise UnsupportedAuthError("SSH authentication is not supported in this command")

        if not self.repo:
            raise AuthError("No npm repository configured (artifactory.repo or --repo)")

        registry = npm_registry_url(self.config.url, self.repo)
        prefix = nerf_dart(registry)

        if self.config.access_token:
            logger.debug(
                "Authenticating to %s with access token %s",
                registry,
                _mask_credential(self.config.access_token),
            )
            return registry, f"{prefix}:_authToken = {self.config.access_token}"

        secret = self.config.api_key or self.config.password
        if self.config.user and secret:
            logger.debug("Authenticating to %s as %s", registry, self.config.user)
            encoded = base64.b64encode(f"{self.config.user}:{secret}".encode()).decode("ascii")
            return registry, f"{prefix}:_auth = {encoded}"

        raise AuthError(
            "No Artifactory credentials configured. Set an access token, "
            "or a user with a password or API key."
        )
