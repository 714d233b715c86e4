"""Collaborators the orchestrator pulls configuration and credentials from."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from npmrc_shim.auth.artifactory import ArtifactoryAuth
    from npmrc_shim.npm.client import NpmClient
    from npmrc_shim.npmrc.keys import RecognizedKeys

__all__ = [
    "NpmRegistrySource",
    "RegistryOverrideSource",
]

logger = logging.getLogger(__name__)


class RegistryOverrideSource(Protocol):
    """Everything a rewrite needs from the outside world."""

    def fetch_raw_config(self) -> bytes:
        """Return the package manager's full configuration dump."""
        ...

    def is_recognized_key(self, key: str) -> bool:
        """Return True if key is safe to persist in the override file."""
        ...

    def authenticate(self) -> tuple[str, str]:
        """Return (registry URL, credential line) for the authenticated registry."""
        ...

    def resolve_json_flag(self) -> bool:
        """Return the package manager's current json output setting."""
        ...


class NpmRegistrySource:
    """RegistryOverrideSource backed by the npm CLI and an Artifactory server."""

    def __init__(
        self,
        npm: NpmClient,
        auth: ArtifactoryAuth,
        recognized_keys: RecognizedKeys,
    ) -> None:
        self.npm = npm
        self.auth = auth
        self.recognized_keys = recognized_keys

    def fetch_raw_config(self) -> bytes:
        return self.npm.config_list()

    def is_recognized_key(self, key: str) -> bool:
        return self.recognized_keys(key)

    def authenticate(self) -> tuple[str, str]:
        return self.auth.authenticate()

    def resolve_json_flag(self) -> bool:
        # --json=<not boolean> makes npm treat json as true while reporting
        # the raw value, so anything but "false" counts as true
        return self.npm.config_get("json") != "false"
