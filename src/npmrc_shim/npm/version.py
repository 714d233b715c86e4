"""npm version parsing and the minimum-version gate."""

from __future__ import annotations

import re
from typing import NamedTuple

from npmrc_shim.core.exceptions import UnsupportedNpmVersionError

_VERSION_PATTERN = re.compile(r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")


class NpmVersion(NamedTuple):
    """Semantic version of an npm executable (pre-release tags ignored)."""

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> NpmVersion:
        """Parse `npm --version` output such as "10.2.4" or "v6.14.18".

        Raises:
            ValueError: If text does not start with a version number.

        """
        match = _VERSION_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Not an npm version: {text!r}")
        major, minor, patch = match.groups()
        return cls(int(major), int(minor or 0), int(patch or 0))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def ensure_supported(version: NpmVersion, minimum: str) -> None:
    """Reject npm versions older than minimum.

    Raises:
        UnsupportedNpmVersionError: If version < minimum.

    """
    required = NpmVersion.parse(minimum)
    if version < required:
        raise UnsupportedNpmVersionError(
            f"npmrc-shim requires npm client version {required} or higher. "
            f"The current version is: {version}"
        )
