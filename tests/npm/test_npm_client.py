"""Tests for the npm subprocess client."""

import subprocess
from unittest.mock import patch

import pytest

from npmrc_shim.core.exceptions import (
    ProcessError,
    ProcessExitCodeError,
    UnsupportedNpmVersionError,
)
from npmrc_shim.npm.client import ExitStatus, NpmClient
from npmrc_shim.npm.version import NpmVersion


def _completed(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b""):
    return subprocess.CompletedProcess(
        args=["npm"], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestExitStatus:
    """Tests for exit code classification."""

    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (0, ExitStatus.SUCCESS),
            (1, ExitStatus.ERROR),
            (2, ExitStatus.MISUSE),
            (126, ExitStatus.CANNOT_EXECUTE),
            (127, ExitStatus.NOT_FOUND),
            (128, ExitStatus.INVALID_EXIT),
            (137, ExitStatus.SIGNAL),
            (-9, ExitStatus.SIGNAL),
        ],
    )
    def test_from_code(self, code: int, status: ExitStatus) -> None:
        assert ExitStatus.from_code(code) is status

    def test_signal_number(self) -> None:
        assert ExitStatus.get_signal_number(143) == 15
        assert ExitStatus.get_signal_number(-9) == 9
        assert ExitStatus.get_signal_number(1) is None


class TestNpmClient:
    """Tests for NpmClient commands."""

    def test_executable_from_path(self) -> None:
        with patch("npmrc_shim.npm.client.shutil.which", return_value="/usr/bin/npm"):
            assert NpmClient().executable == "/usr/bin/npm"

    def test_executable_missing(self) -> None:
        with (
            patch("npmrc_shim.npm.client.shutil.which", return_value=None),
            pytest.raises(ProcessError, match="npm not found"),
        ):
            NpmClient().executable  # noqa: B018

    def test_config_list_command(self) -> None:
        client = NpmClient("npm", ["--userconfig", "/tmp/rc"])
        with patch(
            "npmrc_shim.npm.client.subprocess.run", return_value=_completed(b"a = 1\n")
        ) as mock_run:
            assert client.config_list() == b"a = 1\n"

        command = mock_run.call_args[0][0]
        assert command == ("npm", "config", "list", "--json=false", "--userconfig", "/tmp/rc")
        assert mock_run.call_args[1]["capture_output"] is True

    def test_config_get_strips_output(self) -> None:
        with patch("npmrc_shim.npm.client.subprocess.run", return_value=_completed(b"false\n")):
            assert NpmClient("npm").config_get("json") == "false"

    def test_non_zero_exit_raises(self) -> None:
        with (
            patch(
                "npmrc_shim.npm.client.subprocess.run",
                return_value=_completed(returncode=1, stderr=b"npm ERR! bad config"),
            ),
            pytest.raises(ProcessExitCodeError) as exc_info,
        ):
            NpmClient("npm").config_list()

        error = exc_info.value
        assert error.exit_code == 1
        assert error.exit_status is ExitStatus.ERROR
        assert "bad config" in error.stderr
        assert error.command[:3] == ("npm", "config", "list")

    def test_signal_exit_message(self) -> None:
        with (
            patch("npmrc_shim.npm.client.subprocess.run", return_value=_completed(returncode=-15)),
            pytest.raises(ProcessExitCodeError, match="signal 15"),
        ):
            NpmClient("npm").config_list()

    def test_missing_executable_raises_process_error(self) -> None:
        with (
            patch("npmrc_shim.npm.client.subprocess.run", side_effect=FileNotFoundError()),
            pytest.raises(ProcessError, match="npm not found"),
        ):
            NpmClient("/nope/npm").config_list()

    def test_version(self) -> None:
        with patch("npmrc_shim.npm.client.subprocess.run", return_value=_completed(b"10.2.4\n")):
            assert NpmClient("npm").version() == NpmVersion(10, 2, 4)

    def test_unparseable_version(self) -> None:
        with (
            patch("npmrc_shim.npm.client.subprocess.run", return_value=_completed(b"oops\n")),
            pytest.raises(ProcessError, match="Cannot parse npm version"),
        ):
            NpmClient("npm").version()

    def test_ensure_supported_version(self) -> None:
        with patch("npmrc_shim.npm.client.subprocess.run", return_value=_completed(b"5.3.0\n")):
            with pytest.raises(UnsupportedNpmVersionError, match="5.4.0"):
                NpmClient("npm").ensure_supported_version("5.4.0")
