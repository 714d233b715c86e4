"""npmrc-shim: point npm at an authenticated Artifactory registry."""

__version__ = "0.1.0"

__all__ = ["__version__"]
