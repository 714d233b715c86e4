"""Custom exception hierarchy for npmrc-shim.

All errors raised by npmrc-shim derive from NpmrcShimError so callers can
catch a single base class. Subclasses map to the failure kinds of a rewrite:

- ConfigError: unreadable configuration (YAML files or npm output)
- ProcessError: the npm executable is missing or exits non-zero
- AuthError: Artifactory credentials cannot be turned into an npm credential
- FileOperationError: backup, write or restore of .npmrc failed
- CombinedRestoreError: a failure followed by a failed restore
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from npmrc_shim.npm.client import ExitStatus


class NpmrcShimError(Exception):
    """Base exception for all npmrc-shim errors."""


class ConfigError(NpmrcShimError):
    """Configuration could not be loaded, parsed or validated."""


class ProcessError(NpmrcShimError):
    """The npm executable is unavailable or failed."""


class ProcessExitCodeError(ProcessError):
    """npm exited with a non-zero exit code.

    Attributes:
        exit_code: Raw process exit code.
        exit_status: Semantic classification of exit_code.
        stderr: Captured standard error.
        command: Command that was executed.

    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        exit_status: ExitStatus,
        stderr: str = "",
        command: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.exit_status = exit_status
        self.stderr = stderr
        self.command = command


class UnsupportedNpmVersionError(ProcessError):
    """The installed npm is older than the minimum supported version."""


class AuthError(NpmrcShimError):
    """Artifactory credentials could not be resolved."""


class UnsupportedAuthError(AuthError):
    """The configured authentication mode cannot be used with npm."""


class FileOperationError(NpmrcShimError):
    """Reading, writing, copying or renaming an npmrc file failed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class CombinedRestoreError(NpmrcShimError):
    """An operation failed and restoring the original .npmrc failed as well.

    Both causes are kept so neither is lost; the message names both.
    """

    def __init__(self, original_error: BaseException, restore_error: BaseException) -> None:
        super().__init__(f"Two errors occurred:\n {restore_error}\n {original_error}")
        self.original_error = original_error
        self.restore_error = restore_error
