"""Serialization of the project .npmrc override file."""

from __future__ import annotations

from collections.abc import Iterable

from npmrc_shim.core.exceptions import AuthError

__all__ = ["build_npmrc"]


def build_npmrc(
    lines: Iterable[str],
    json_output: bool,
    registry: str,
    credential: str,
) -> bytes:
    """Build the override file content.

    The transformed lines come first; the json flag, registry and credential
    follow in that order. npm reads .npmrc as ini where the last assignment
    of a key wins, so these lines take effect over any source line with the
    same key.

    Args:
        lines: Transformed configuration lines.
        json_output: Value written for the `json` option.
        registry: Authenticated npm registry URL.
        credential: Credential assignment line(s) for the registry.

    Returns:
        UTF-8 encoded file content.

    Raises:
        AuthError: If credential is empty.

    """
    if not credential.strip():
        raise AuthError("Cannot write .npmrc without a registry credential")

    parts = [f"{line}\n" for line in lines]
    parts.append(f"json = {str(json_output).lower()}\n")
    parts.append(f"registry = {registry}\n")
    parts.append(credential if credential.endswith("\n") else f"{credential}\n")
    return "".join(parts).encode("utf-8")
