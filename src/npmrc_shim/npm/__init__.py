"""npm CLI access: configuration queries and version checks."""

from npmrc_shim.npm.client import ExitStatus, NpmClient
from npmrc_shim.npm.version import NpmVersion, ensure_supported

__all__ = [
    "ExitStatus",
    "NpmClient",
    "NpmVersion",
    "ensure_supported",
]
