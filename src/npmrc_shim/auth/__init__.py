"""Artifactory authentication for npm registries."""

from npmrc_shim.auth.artifactory import ArtifactoryAuth, nerf_dart, npm_registry_url

__all__ = [
    "ArtifactoryAuth",
    "nerf_dart",
    "npm_registry_url",
]
