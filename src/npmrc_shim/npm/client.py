"""npm CLI subprocess client.

Runs the npm executable to read its configuration:

    npm config list --json=false [args]   full configuration dump
    npm config get <key> [args]           single option
    npm --version                         installed version

Output is captured with subprocess.run(capture_output=True); npm config
output is small, so there is no streaming. No timeout is applied.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence
from enum import Enum, auto

from npmrc_shim.core.exceptions import ProcessError, ProcessExitCodeError
from npmrc_shim.npm.version import NpmVersion, ensure_supported

__all__ = [
    "ExitStatus",
    "NpmClient",
]

logger = logging.getLogger(__name__)

# Maximum stderr length included in error messages
STDERR_TRUNCATE_LENGTH = 500


class ExitStatus(Enum):
    """Semantic classification of process exit codes.

    Follows Unix conventions for exit code interpretation:
    - 0: Success
    - 1-125: Error codes (1=general, 2=misuse)
    - 126: Cannot execute (permission denied)
    - 127: Command not found
    - 128: Invalid exit argument
    - 128+N, or -N from subprocess: Killed by signal N

    Example:
        >>> ExitStatus.from_code(137)
        <ExitStatus.SIGNAL: 7>
        >>> ExitStatus.get_signal_number(-15)
        15

    """

    SUCCESS = auto()  # Exit code 0
    ERROR = auto()  # Exit codes 1, 3-125 (general error)
    MISUSE = auto()  # Exit code 2 (incorrect usage)
    CANNOT_EXECUTE = auto()  # Exit code 126 (permission denied)
    NOT_FOUND = auto()  # Exit code 127 (command not found)
    INVALID_EXIT = auto()  # Exit code 128 (invalid exit argument)
    SIGNAL = auto()  # Exit codes 129+ or negative (killed by signal)

    @classmethod
    def from_code(cls, exit_code: int) -> ExitStatus:
        """Classify exit code into semantic status."""
        if exit_code == 0:
            return cls.SUCCESS
        if exit_code < 0 or exit_code > 128:
            return cls.SIGNAL
        if exit_code == 2:
            return cls.MISUSE
        if exit_code == 126:
            return cls.CANNOT_EXECUTE
        if exit_code == 127:
            return cls.NOT_FOUND
        if exit_code == 128:
            return cls.INVALID_EXIT
        return cls.ERROR

    @staticmethod
    def get_signal_number(exit_code: int) -> int | None:
        """Extract signal number from exit code, None if not a signal exit."""
        if exit_code < 0:
            return -exit_code
        if exit_code > 128:
            return exit_code - 128
        return None


class NpmClient:
    """Thin wrapper over the npm executable.

    Attributes:
        executable: Path or name of npm. Resolved from PATH when None.
        npm_args: Extra arguments (e.g. --userconfig) added to config queries
            so they see the same configuration the real npm command will.

    """

    def __init__(
        self,
        executable: str | None = None,
        npm_args: Sequence[str] = (),
    ) -> None:
        self._executable = executable
        self.npm_args = tuple(npm_args)

    @property
    def executable(self) -> str:
        """Resolved npm executable.

        Raises:
            ProcessError: If npm cannot be found in PATH.

        """
        if self._executable is None:
            found = shutil.which("npm")
            if found is None:
                raise ProcessError("npm not found. Is 'npm' in PATH?")
            self._executable = found
            logger.debug("Using npm executable: %s", found)
        return self._executable

    def run(self, args: Sequence[str]) -> bytes:
        """Run npm with args and return its stdout.

        Raises:
            ProcessError: If npm cannot be started.
            ProcessExitCodeError: If npm exits with a non-zero code.

        """
        command = (self.executable, *args)
        logger.debug("Running: %s", " ".join(command))

        try:
            completed = subprocess.run(command, capture_output=True, check=False)
        except FileNotFoundError as e:
            raise ProcessError(f"npm not found at {self.executable}") from e
        except OSError as e:
            raise ProcessError(f"Cannot run {self.executable}: {e}") from e

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            exit_status = ExitStatus.from_code(completed.returncode)
            stderr_truncated = stderr[:STDERR_TRUNCATE_LENGTH] if stderr else "(empty)"

            logger.error(
                "npm failed: exit_code=%d, status=%s, stderr=%s",
                completed.returncode,
                exit_status.name,
                stderr_truncated,
            )

            if exit_status == ExitStatus.SIGNAL:
                message = (
                    f"npm failed with exit code {completed.returncode} "
                    f"(signal {ExitStatus.get_signal_number(completed.returncode)}): "
                    f"{stderr_truncated}"
                )
            else:
                message = f"npm failed with exit code {completed.returncode}: {stderr_truncated}"

            raise ProcessExitCodeError(
                message,
                exit_code=completed.returncode,
                exit_status=exit_status,
                stderr=stderr,
                command=command,
            )

        return completed.stdout

    def config_list(self) -> bytes:
        """Return the full `npm config list` output."""
        return self.run(["config", "list", "--json=false", *self.npm_args])

    def config_get(self, key: str) -> str:
        """Return the value npm reports for a single option."""
        output = self.run(["config", "get", key, *self.npm_args])
        return output.decode("utf-8", errors="replace").strip()

    def version(self) -> NpmVersion:
        """Return the installed npm version.

        Raises:
            ProcessError: If the version output cannot be parsed.

        """
        output = self.run(["--version"]).decode("utf-8", errors="replace").strip()
        try:
            return NpmVersion.parse(output)
        except ValueError as e:
            raise ProcessError(f"Cannot parse npm version from {output!r}") from e

    def ensure_supported_version(self, minimum: str) -> NpmVersion:
        """Check npm is at least minimum and return its version.

        Raises:
            UnsupportedNpmVersionError: If npm is too old.

        """
        version = self.version()
        ensure_supported(version, minimum)
        logger.debug("npm version %s (minimum %s)", version, minimum)
        return version
